"""Supabase repository for recipes."""

from dataclasses import dataclass
from decimal import Decimal

from supabase import Client

from food_helper.adapters.supabase_product_repository import (
    PRODUCT_COLUMNS,
    parse_product_row,
)
from food_helper.domain.recipes import ConsumedProduct, Recipe
from food_helper.services.recipes import RecipeRepository

RECIPE_COLUMNS = (
    f"id, name, consumed_products(id, grams, product:products({PRODUCT_COLUMNS}))"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes.

    Consumed products live in ``consumed_products`` and are removed by the
    ``ON DELETE CASCADE`` foreign key when their recipe is deleted. Writes go
    through the ``create_recipe`` and ``replace_recipe`` Postgres functions so
    the recipe row and its consumed products are stored in one transaction.
    Both return the recipe as read back from storage.
    """

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes ordered by id."""
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def get_recipe_by_name(self, name: str) -> Recipe | None:
        """Return a recipe by name, if present."""
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Insert a recipe and its consumed products in a single transaction."""
        return self._write("create_recipe", recipe)

    def replace_recipe(self, recipe: Recipe) -> Recipe:
        """Replace the recipe with the same name in a single transaction."""
        return self._write("replace_recipe", recipe)

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe by id if it exists."""
        self.client.table("recipes").delete().eq("id", recipe_id).execute()

    def delete_recipe_by_name(self, name: str) -> None:
        """Delete a recipe by name if it exists."""
        self.client.table("recipes").delete().eq("name", name).execute()

    def find_by_nutrient_values(
        self, fat: Decimal, protein: Decimal, carbohydrates: Decimal
    ) -> list[Recipe]:
        """Return recipes using a product that meets every nutrient minimum."""
        products_response = (
            self.client.table("products")
            .select("id")
            .gte("fat", str(fat))
            .gte("protein", str(protein))
            .gte("carbohydrates", str(carbohydrates))
            .execute()
        )
        product_ids = [row["id"] for row in products_response.data or []]
        if not product_ids:
            return []

        consumed_response = (
            self.client.table("consumed_products")
            .select("recipe_id")
            .in_("product_id", product_ids)
            .execute()
        )
        recipe_ids = sorted({row["recipe_id"] for row in consumed_response.data or []})
        if not recipe_ids:
            return []

        recipes_response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .in_("id", recipe_ids)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_recipe(row) for row in recipes_response.data or []]

    def _write(self, function: str, recipe: Recipe) -> Recipe:
        response = self.client.rpc(
            function,
            {"recipe_name": recipe.name, "consumed": _consumed_payload(recipe)},
        ).execute()
        if response.data is None:
            raise RuntimeError(f"Failed to store recipe {recipe.name}")
        stored = self.get_recipe(int(response.data))
        if stored is None:
            raise RuntimeError(f"Stored recipe {recipe.name} could not be read back")
        return stored


def _consumed_payload(recipe: Recipe) -> list[dict[str, object]]:
    return [
        {"product_id": consumed.product.id, "grams": str(consumed.grams)}
        for consumed in recipe.products
    ]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    consumed_rows = sorted(
        row.get("consumed_products") or [], key=lambda item: item.get("id", 0)
    )
    return Recipe(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        products=tuple(
            ConsumedProduct(
                product=parse_product_row(item["product"]),
                grams=Decimal(str(item.get("grams", 0))),
            )
            for item in consumed_rows
        ),
    )
