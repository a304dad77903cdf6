"""Transfer models for the HTTP API and their domain mappings."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from food_helper.domain.products import Product
from food_helper.domain.recipes import ConsumedProduct, Recipe
from food_helper.domain.weights import WeightEntry


class ProductPayload(BaseModel):
    """Product with nutrient densities per reference grams."""

    id: int | None = None
    name: str
    grams: Decimal
    fat: Decimal
    protein: Decimal
    carbohydrates: Decimal


class ConsumedProductPayload(BaseModel):
    """Product amount used by a recipe."""

    product: ProductPayload
    grams: Decimal = Field(ge=0)


class RecipePayload(BaseModel):
    """Recipe with its consumed products."""

    id: int | None = None
    name: str
    products: list[ConsumedProductPayload] = Field(default_factory=list)


class NutrientFilterPayload(BaseModel):
    """Ranking request: selected nutrient plus candidate thresholds."""

    model_config = ConfigDict(populate_by_name=True)

    nutrient_value: str = Field(alias="nutrientValue")
    fat: Decimal = Decimal(0)
    protein: Decimal = Decimal(0)
    carbohydrates: Decimal = Decimal(0)


class WeightPayload(BaseModel):
    """Weight recorded for a date."""

    model_config = ConfigDict(populate_by_name=True)

    entry_date: date = Field(alias="date")
    weight: Decimal


def product_to_payload(product: Product) -> ProductPayload:
    """Map a domain product to its wire form."""
    return ProductPayload(
        id=product.id,
        name=product.name,
        grams=product.grams,
        fat=product.fat,
        protein=product.protein,
        carbohydrates=product.carbohydrates,
    )


def product_from_payload(payload: ProductPayload) -> Product:
    """Map a wire product to the domain model, keeping its id if given."""
    return Product(
        id=payload.id,
        name=payload.name,
        grams=payload.grams,
        fat=payload.fat,
        protein=payload.protein,
        carbohydrates=payload.carbohydrates,
    )


def recipe_to_payload(recipe: Recipe) -> RecipePayload:
    """Map a recipe and its consumed products to the wire form."""
    return RecipePayload(
        id=recipe.id,
        name=recipe.name,
        products=[
            ConsumedProductPayload(
                product=product_to_payload(consumed.product),
                grams=consumed.grams,
            )
            for consumed in recipe.products
        ],
    )


def recipe_from_payload(payload: RecipePayload) -> Recipe:
    """Map a wire recipe to the domain model.

    Only the product ids and consumed grams are persisted; the product
    profiles in the payload are replaced by the stored ones on save.
    """
    return Recipe(
        id=payload.id,
        name=payload.name,
        products=tuple(
            ConsumedProduct(
                product=product_from_payload(consumed.product),
                grams=consumed.grams,
            )
            for consumed in payload.products
        ),
    )


def weight_to_payload(entry: WeightEntry) -> WeightPayload:
    """Map a weight entry to the wire form."""
    return WeightPayload(entry_date=entry.entry_date, weight=entry.weight)


def weight_from_payload(payload: WeightPayload) -> WeightEntry:
    """Map a wire weight entry to the domain model."""
    return WeightEntry(entry_date=payload.entry_date, weight=payload.weight)
