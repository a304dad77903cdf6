"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_helper.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from food_helper.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from food_helper.adapters.supabase_weight_repository import SupabaseWeightRepository
from food_helper.config import Settings
from food_helper.services.products import ProductService
from food_helper.services.recipes import RecipeService
from food_helper.services.weights import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_service: ProductService
    recipe_service: RecipeService
    weight_service: WeightService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return AppContainer(
        settings=resolved_settings,
        product_service=ProductService(SupabaseProductRepository(supabase_client)),
        recipe_service=RecipeService(SupabaseRecipeRepository(supabase_client)),
        weight_service=WeightService(SupabaseWeightRepository(supabase_client)),
    )
