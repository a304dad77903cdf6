"""Domain models for recipes."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

from food_helper.domain.products import Product


class NutrientSelector(StrEnum):
    """Nutrient a recipe ranking is computed for."""

    FAT = "FAT"
    PROTEIN = "PROTEIN"
    CARBOHYDRATES = "CARBOHYDRATES"


@dataclass(frozen=True)
class ConsumedProduct:
    """Amount of a product used by a recipe."""

    product: Product
    grams: Decimal


@dataclass(frozen=True)
class Recipe:
    """Named collection of consumed products."""

    id: int | None
    name: str
    products: tuple[ConsumedProduct, ...] = field(default_factory=tuple)
