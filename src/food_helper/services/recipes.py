"""Recipe services and nutrient ranking."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Decimal, Inexact, localcontext
from typing import Protocol

from food_helper.domain.errors import (
    EntityNotFoundError,
    InvalidRecipeError,
    UnknownNutrientSelectorError,
)
from food_helper.domain.products import Product
from food_helper.domain.recipes import ConsumedProduct, NutrientSelector, Recipe

_RATIO_PLACES = 2

_NUTRIENT_ACCESSORS: dict[NutrientSelector, Callable[[Product], Decimal]] = {
    NutrientSelector.FAT: lambda product: product.fat,
    NutrientSelector.PROTEIN: lambda product: product.protein,
    NutrientSelector.CARBOHYDRATES: lambda product: product.carbohydrates,
}

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and their consumed products."""

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes."""

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""

    def get_recipe_by_name(self, name: str) -> Recipe | None:
        """Return a recipe by name, if present."""

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Insert a recipe with its consumed products and return it."""

    def replace_recipe(self, recipe: Recipe) -> Recipe:
        """Delete any recipe with the same name and insert this one atomically."""

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe by id if it exists."""

    def delete_recipe_by_name(self, name: str) -> None:
        """Delete a recipe by name if it exists."""

    def find_by_nutrient_values(
        self, fat: Decimal, protein: Decimal, carbohydrates: Decimal
    ) -> list[Recipe]:
        """Return recipes with a product meeting all three nutrient minimums."""


def parse_nutrient(value: NutrientSelector | str) -> NutrientSelector:
    """Return the selector for a raw value or raise for unknown nutrients."""
    try:
        return NutrientSelector(value)
    except ValueError as exc:
        raise UnknownNutrientSelectorError(
            f"Nutrient Value with name {value} not found"
        ) from exc


def consumption_ratio(consumed: ConsumedProduct) -> Decimal:
    """Consumed grams over reference grams, rounded half-up to 2 places."""
    return _divide_half_up(consumed.grams, consumed.product.grams, _RATIO_PLACES)


def score(recipe: Recipe, nutrient: NutrientSelector) -> Decimal:
    """Sum of the selected nutrient over a recipe, weighted by consumption."""
    density = _NUTRIENT_ACCESSORS[nutrient]
    total = Decimal(0)
    with localcontext() as ctx:
        # Only products and sums happen here, so an unbounded context is exact.
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        for consumed in recipe.products:
            # The ratio is rounded before multiplying; rounding the sum differs.
            total += density(consumed.product) * consumption_ratio(consumed)
    return total


def rank(recipes: list[Recipe], nutrient: NutrientSelector) -> list[Recipe]:
    """Order recipes by descending score, keeping input order for ties."""
    return sorted(recipes, key=lambda recipe: score(recipe, nutrient), reverse=True)


@dataclass
class RecipeService:
    """Application service for recipe lifecycle and ranking."""

    repository: RecipeRepository

    def find_all(self) -> list[Recipe]:
        """Return every stored recipe."""
        return self.repository.list_recipes()

    def find_by_name(self, name: str) -> Recipe:
        """Return a recipe by name."""
        recipe = self.repository.get_recipe_by_name(name)
        if recipe is None:
            raise EntityNotFoundError(f"Recipe with name {name} not found")
        return recipe

    def find_by_id(self, recipe_id: int) -> Recipe:
        """Return a recipe by id."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise EntityNotFoundError(f"Recipe with id {recipe_id} not found")
        return recipe

    def save(self, recipe: Recipe) -> Recipe:
        """Insert a new recipe."""
        _require_stored_products(recipe)
        created = self.repository.create_recipe(recipe)
        _logger.info("Recipe saved: id=%s name=%s", created.id, created.name)
        return created

    def update(self, recipe: Recipe) -> Recipe:
        """Fully replace the recipe with the same name.

        Previously consumed products are discarded, not merged. The delete and
        the insert run as one unit in the repository, so readers see either
        the old recipe or the new one.
        """
        _require_stored_products(recipe)
        replaced = self.repository.replace_recipe(recipe)
        _logger.info("Recipe replaced: id=%s name=%s", replaced.id, replaced.name)
        return replaced

    def delete_by_id(self, recipe_id: int) -> None:
        """Delete a recipe by id; missing recipes are ignored."""
        self.repository.delete_recipe(recipe_id)

    def delete_by_name(self, name: str) -> None:
        """Delete a recipe by name; missing recipes are ignored."""
        self.repository.delete_recipe_by_name(name)

    def find_by_nutrient_values(
        self,
        nutrient: NutrientSelector | str,
        fat: Decimal,
        protein: Decimal,
        carbohydrates: Decimal,
    ) -> list[Recipe]:
        """Return candidate recipes ranked by the selected nutrient."""
        selector = parse_nutrient(nutrient)
        candidates = self.repository.find_by_nutrient_values(
            fat, protein, carbohydrates
        )
        _logger.info(
            "Ranking recipes: nutrient=%s candidates=%s", selector, len(candidates)
        )
        return rank(candidates, selector)


def _divide_half_up(dividend: Decimal, divisor: Decimal, places: int) -> Decimal:
    """Exact quotient rounded half-up (away from zero) to ``places`` digits.

    Works on integer fractions, so the result does not depend on the
    precision of the active decimal context and is rounded only once.
    """
    dividend_num, dividend_den = dividend.as_integer_ratio()
    divisor_num, divisor_den = divisor.as_integer_ratio()
    numerator = dividend_num * divisor_den * 10**places
    denominator = dividend_den * divisor_num
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    quotient, remainder = divmod(abs(numerator), denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    sign = 1 if numerator < 0 else 0
    return Decimal((sign, tuple(int(digit) for digit in str(quotient)), -places))


def _require_stored_products(recipe: Recipe) -> None:
    for consumed in recipe.products:
        if consumed.product.id is None:
            raise InvalidRecipeError(
                f"Recipe {recipe.name} uses product {consumed.product.name} "
                "which has no id"
            )
