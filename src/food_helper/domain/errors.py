"""Domain errors raised by application services."""


class FoodHelperError(Exception):
    """Base class for domain errors."""


class EntityNotFoundError(FoodHelperError):
    """Raised when a lookup by id or name finds nothing."""


class UnknownNutrientSelectorError(FoodHelperError):
    """Raised when a ranking is requested for an unknown nutrient."""


class InvalidDateRangeError(FoodHelperError):
    """Raised when a date range starts after it ends."""


class InvalidProductError(FoodHelperError):
    """Raised when a product cannot be used as a nutrient reference."""


class InvalidRecipeError(FoodHelperError):
    """Raised when a recipe references products that are not stored."""


class ProductInUseError(FoodHelperError):
    """Raised when deleting a product that a recipe still consumes."""
