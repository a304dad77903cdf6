"""Recipe endpoints, including nutrient ranking."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from food_helper.api.schemas import (
    NutrientFilterPayload,
    RecipePayload,
    recipe_from_payload,
    recipe_to_payload,
)

if TYPE_CHECKING:
    from food_helper.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(request: Request) -> list[RecipePayload]:
    """Return all recipes."""
    container: AppContainer = request.app.state.container
    return [recipe_to_payload(r) for r in container.recipe_service.find_all()]


@router.get("/name/{name}")
async def recipe_by_name(name: str, request: Request) -> RecipePayload:
    """Return a recipe by name."""
    container: AppContainer = request.app.state.container
    return recipe_to_payload(container.recipe_service.find_by_name(name))


@router.get("/{recipe_id}")
async def recipe_by_id(recipe_id: int, request: Request) -> RecipePayload:
    """Return a recipe by id."""
    container: AppContainer = request.app.state.container
    return recipe_to_payload(container.recipe_service.find_by_id(recipe_id))


@router.post("")
async def create_recipe(payload: RecipePayload, request: Request) -> RecipePayload:
    """Create a recipe."""
    container: AppContainer = request.app.state.container
    created = container.recipe_service.save(recipe_from_payload(payload))
    return recipe_to_payload(created)


@router.put("")
async def replace_recipe(payload: RecipePayload, request: Request) -> RecipePayload:
    """Replace the recipe with the same name."""
    container: AppContainer = request.app.state.container
    replaced = container.recipe_service.update(recipe_from_payload(payload))
    return recipe_to_payload(replaced)


@router.delete("/name/{name}")
async def delete_recipe_by_name(name: str, request: Request) -> Response:
    """Delete a recipe by name."""
    container: AppContainer = request.app.state.container
    container.recipe_service.delete_by_name(name)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: int, request: Request) -> Response:
    """Delete a recipe by id."""
    container: AppContainer = request.app.state.container
    container.recipe_service.delete_by_id(recipe_id)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/nutrients")
async def rank_recipes(
    payload: NutrientFilterPayload, request: Request
) -> list[RecipePayload]:
    """Return candidate recipes ordered by the selected nutrient, highest first."""
    container: AppContainer = request.app.state.container
    ranked = container.recipe_service.find_by_nutrient_values(
        payload.nutrient_value,
        fat=payload.fat,
        protein=payload.protein,
        carbohydrates=payload.carbohydrates,
    )
    return [recipe_to_payload(recipe) for recipe in ranked]
