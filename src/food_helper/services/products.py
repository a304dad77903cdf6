"""Services for the product reference store."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from food_helper.domain.errors import (
    EntityNotFoundError,
    InvalidProductError,
    ProductInUseError,
)
from food_helper.domain.products import Product

_logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    """Persistence interface for products."""

    def list_products(self) -> list[Product]:
        """Return all products."""

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""

    def get_product_by_name(self, name: str) -> Product | None:
        """Return a product by name, if present."""

    def create_product(self, product: Product) -> Product:
        """Create a product and return it with its id."""

    def update_product(self, product: Product) -> Product:
        """Overwrite a stored product and return it."""

    def delete_product(self, product_id: int) -> None:
        """Delete a product if it exists."""

    def is_product_used(self, product_id: int) -> bool:
        """Return whether any recipe consumes the product."""


@dataclass
class ProductService:
    """Application service for product operations."""

    repository: ProductRepository

    def find_all(self) -> list[Product]:
        """Return every stored product."""
        return self.repository.list_products()

    def find_by_id(self, product_id: int) -> Product:
        """Return a product by id."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        return product

    def find_by_name(self, name: str) -> Product:
        """Return a product by name."""
        product = self.repository.get_product_by_name(name)
        if product is None:
            raise EntityNotFoundError(f"Product with name {name} not found")
        return product

    def save(self, product: Product) -> Product:
        """Create a new product."""
        _validate(product)
        created = self.repository.create_product(replace(product, id=None))
        _logger.info("Product saved: id=%s name=%s", created.id, created.name)
        return created

    def update(self, product_id: int, product: Product) -> Product:
        """Replace the nutrient profile of an existing product."""
        _validate(product)
        self.find_by_id(product_id)
        updated = self.repository.update_product(replace(product, id=product_id))
        _logger.info("Product updated: id=%s", product_id)
        return updated

    def delete_by_id(self, product_id: int) -> None:
        """Delete a product; missing products are ignored.

        Products consumed by a recipe are kept and raise ``ProductInUseError``.
        """
        if self.repository.is_product_used(product_id):
            raise ProductInUseError(
                f"Product with id {product_id} is used by a recipe"
            )
        self.repository.delete_product(product_id)
        _logger.info("Product deleted: id=%s", product_id)


def _validate(product: Product) -> None:
    if product.grams <= 0:
        raise InvalidProductError(
            f"Product {product.name} must have reference grams greater than zero"
        )
