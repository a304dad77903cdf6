"""Product reference store endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from food_helper.api.schemas import (
    ProductPayload,
    product_from_payload,
    product_to_payload,
)

if TYPE_CHECKING:
    from food_helper.containers import AppContainer

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(request: Request) -> list[ProductPayload]:
    """Return all products."""
    container: AppContainer = request.app.state.container
    return [product_to_payload(p) for p in container.product_service.find_all()]


@router.get("/name/{name}")
async def product_by_name(name: str, request: Request) -> ProductPayload:
    """Return a product by name."""
    container: AppContainer = request.app.state.container
    return product_to_payload(container.product_service.find_by_name(name))


@router.get("/{product_id}")
async def product_by_id(product_id: int, request: Request) -> ProductPayload:
    """Return a product by id."""
    container: AppContainer = request.app.state.container
    return product_to_payload(container.product_service.find_by_id(product_id))


@router.post("")
async def create_product(payload: ProductPayload, request: Request) -> ProductPayload:
    """Create a product."""
    container: AppContainer = request.app.state.container
    created = container.product_service.save(product_from_payload(payload))
    return product_to_payload(created)


@router.put("/{product_id}")
async def update_product(
    product_id: int, payload: ProductPayload, request: Request
) -> ProductPayload:
    """Replace a product's name and nutrient profile."""
    container: AppContainer = request.app.state.container
    updated = container.product_service.update(
        product_id, product_from_payload(payload)
    )
    return product_to_payload(updated)


@router.delete("/{product_id}")
async def delete_product(product_id: int, request: Request) -> Response:
    """Delete a product that no recipe uses."""
    container: AppContainer = request.app.state.container
    container.product_service.delete_by_id(product_id)
    return Response(status_code=status.HTTP_200_OK)
