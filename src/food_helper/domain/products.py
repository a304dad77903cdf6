"""Domain models for food products."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """Food product with nutrient densities per reference grams."""

    id: int | None
    name: str
    grams: Decimal
    fat: Decimal
    protein: Decimal
    carbohydrates: Decimal
