"""Supabase repository for products."""

from dataclasses import dataclass
from decimal import Decimal

from supabase import Client

from food_helper.domain.products import Product
from food_helper.services.products import ProductRepository

PRODUCT_COLUMNS = "id, name, grams, fat, protein, carbohydrates"


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase implementation for the product reference store."""

    client: Client

    def list_products(self) -> list[Product]:
        """Return all products ordered by id."""
        response = (
            self.client.table("products")
            .select(PRODUCT_COLUMNS)
            .order("id", desc=False)
            .execute()
        )
        return [parse_product_row(row) for row in response.data or []]

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""
        response = (
            self.client.table("products")
            .select(PRODUCT_COLUMNS)
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_product_row(response.data[0])

    def get_product_by_name(self, name: str) -> Product | None:
        """Return a product by name, if present."""
        response = (
            self.client.table("products")
            .select(PRODUCT_COLUMNS)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_product_row(response.data[0])

    def create_product(self, product: Product) -> Product:
        """Create a product and return it with its id."""
        response = (
            self.client.table("products").insert(_product_payload(product)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create product")
        return parse_product_row(response.data[0])

    def update_product(self, product: Product) -> Product:
        """Overwrite a stored product and return it."""
        response = (
            self.client.table("products")
            .update(_product_payload(product))
            .eq("id", product.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product")
        return parse_product_row(response.data[0])

    def delete_product(self, product_id: int) -> None:
        """Delete a product if it exists."""
        self.client.table("products").delete().eq("id", product_id).execute()

    def is_product_used(self, product_id: int) -> bool:
        """Return whether any consumed product row references the product."""
        response = (
            self.client.table("consumed_products")
            .select("id")
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)


def parse_product_row(row: dict[str, object]) -> Product:
    """Parse a products row into a domain model."""
    return Product(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        grams=_decimal(row.get("grams")),
        fat=_decimal(row.get("fat")),
        protein=_decimal(row.get("protein")),
        carbohydrates=_decimal(row.get("carbohydrates")),
    )


def _product_payload(product: Product) -> dict[str, object]:
    # Numeric columns travel as strings so PostgREST casts them without floats.
    return {
        "name": product.name,
        "grams": str(product.grams),
        "fat": str(product.fat),
        "protein": str(product.protein),
        "carbohydrates": str(product.carbohydrates),
    }


def _decimal(value: object) -> Decimal:
    if value is None:
        return Decimal(0)
    return Decimal(str(value))
