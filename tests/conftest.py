"""Shared test fixtures."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

import pytest

from food_helper.config import Settings
from food_helper.containers import AppContainer
from food_helper.domain.products import Product
from food_helper.domain.recipes import ConsumedProduct, Recipe
from food_helper.domain.weights import WeightEntry
from food_helper.services.products import ProductRepository, ProductService
from food_helper.services.recipes import RecipeRepository, RecipeService
from food_helper.services.weights import WeightRepository, WeightService


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[int, Product] = field(default_factory=dict)
    next_id: int = 1
    usage: Callable[[int], bool] = lambda _product_id: False

    def list_products(self) -> list[Product]:
        return [self.products[key] for key in sorted(self.products)]

    def get_product(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    def get_product_by_name(self, name: str) -> Product | None:
        for product in self.products.values():
            if product.name == name:
                return product
        return None

    def create_product(self, product: Product) -> Product:
        if self.get_product_by_name(product.name) is not None:
            raise RuntimeError(f"duplicate key value: {product.name}")
        created = replace(product, id=self.next_id)
        self.products[created.id] = created
        self.next_id += 1
        return created

    def update_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def delete_product(self, product_id: int) -> None:
        self.products.pop(product_id, None)

    def is_product_used(self, product_id: int) -> bool:
        return self.usage(product_id)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository; replace runs under one lock like a transaction.

    Only product ids and grams are stored, so reads resolve products from the
    product repository the way the database join does.
    """

    product_repository: InMemoryProductRepository = field(
        default_factory=InMemoryProductRepository
    )
    rows: dict[int, tuple[str, tuple[tuple[int, Decimal], ...]]] = field(
        default_factory=dict
    )
    next_id: int = 1
    fail_next_insert: bool = False
    calls: list[str] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def list_recipes(self) -> list[Recipe]:
        with self.lock:
            return [self._load(key) for key in sorted(self.rows)]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        with self.lock:
            if recipe_id not in self.rows:
                return None
            return self._load(recipe_id)

    def get_recipe_by_name(self, name: str) -> Recipe | None:
        with self.lock:
            recipe_id = self._id_for(name)
            return None if recipe_id is None else self._load(recipe_id)

    def create_recipe(self, recipe: Recipe) -> Recipe:
        self.calls.append("create")
        with self.lock:
            return self._load(self._insert(recipe))

    def replace_recipe(self, recipe: Recipe) -> Recipe:
        self.calls.append("replace")
        with self.lock:
            snapshot = dict(self.rows)
            self._delete_by_name(recipe.name)
            try:
                return self._load(self._insert(recipe))
            except RuntimeError:
                self.rows = snapshot
                raise

    def delete_recipe(self, recipe_id: int) -> None:
        self.calls.append("delete")
        with self.lock:
            self.rows.pop(recipe_id, None)

    def delete_recipe_by_name(self, name: str) -> None:
        self.calls.append("delete_by_name")
        with self.lock:
            self._delete_by_name(name)

    def find_by_nutrient_values(
        self, fat: Decimal, protein: Decimal, carbohydrates: Decimal
    ) -> list[Recipe]:
        with self.lock:
            recipes = [self._load(key) for key in sorted(self.rows)]
        return [
            recipe
            for recipe in recipes
            if any(
                consumed.product.fat >= fat
                and consumed.product.protein >= protein
                and consumed.product.carbohydrates >= carbohydrates
                for consumed in recipe.products
            )
        ]

    def uses_product(self, product_id: int) -> bool:
        with self.lock:
            return any(
                stored_id == product_id
                for _name, consumed in self.rows.values()
                for stored_id, _grams in consumed
            )

    def _id_for(self, name: str) -> int | None:
        for recipe_id, (stored_name, _consumed) in self.rows.items():
            if stored_name == name:
                return recipe_id
        return None

    def _delete_by_name(self, name: str) -> None:
        recipe_id = self._id_for(name)
        if recipe_id is not None:
            del self.rows[recipe_id]

    def _insert(self, recipe: Recipe) -> int:
        if self.fail_next_insert:
            self.fail_next_insert = False
            raise RuntimeError("Failed to create recipe")
        if self._id_for(recipe.name) is not None:
            raise RuntimeError(f"duplicate key value: {recipe.name}")
        for consumed in recipe.products:
            if self.product_repository.get_product(consumed.product.id) is None:
                raise RuntimeError(
                    f"foreign key violation: product {consumed.product.id}"
                )
        recipe_id = self.next_id
        self.rows[recipe_id] = (
            recipe.name,
            tuple(
                (consumed.product.id, consumed.grams) for consumed in recipe.products
            ),
        )
        self.next_id += 1
        return recipe_id

    def _load(self, recipe_id: int) -> Recipe:
        name, consumed = self.rows[recipe_id]
        return Recipe(
            id=recipe_id,
            name=name,
            products=tuple(
                ConsumedProduct(
                    product=self.product_repository.products[product_id],
                    grams=grams,
                )
                for product_id, grams in consumed
            ),
        )

@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository keyed by date."""

    entries: dict[date, WeightEntry] = field(default_factory=dict)

    def upsert_weight(self, entry: WeightEntry) -> None:
        self.entries[entry.entry_date] = entry

    def list_weights(self, from_date: date, to_date: date) -> list[WeightEntry]:
        return [
            self.entries[day]
            for day in sorted(self.entries)
            if from_date <= day <= to_date
        ]

    def get_latest_weight(self) -> WeightEntry | None:
        if not self.entries:
            return None
        return self.entries[max(self.entries)]


def make_product(  # noqa: PLR0913
    name: str = "egg",
    grams: str = "50",
    fat: str = "5.0",
    protein: str = "6.5",
    carbohydrates: str = "0.6",
    product_id: int | None = 1,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        grams=Decimal(grams),
        fat=Decimal(fat),
        protein=Decimal(protein),
        carbohydrates=Decimal(carbohydrates),
    )


def make_recipe(
    name: str, *entries: tuple[Product, str], recipe_id: int | None = None
) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=name,
        products=tuple(
            ConsumedProduct(product=product, grams=Decimal(grams))
            for product, grams in entries
        ),
    )


def stocked_recipe_repository(*products: Product) -> InMemoryRecipeRepository:
    """Recipe repository whose product store already holds ``products``."""
    product_repository = InMemoryProductRepository(
        products={product.id: product for product in products},
        next_id=max((product.id for product in products), default=0) + 1,
    )
    repository = InMemoryRecipeRepository(product_repository=product_repository)
    product_repository.usage = repository.uses_product
    return repository


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def recipe_repository(
    product_repository: InMemoryProductRepository,
) -> InMemoryRecipeRepository:
    repository = InMemoryRecipeRepository(product_repository=product_repository)
    product_repository.usage = repository.uses_product
    return repository


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def container(
    settings: Settings,
    product_repository: InMemoryProductRepository,
    recipe_repository: InMemoryRecipeRepository,
    weight_repository: InMemoryWeightRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        product_service=ProductService(product_repository),
        recipe_service=RecipeService(recipe_repository),
        weight_service=WeightService(weight_repository),
    )
