"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_helper.api.products import router as products_router
from food_helper.api.recipes import router as recipes_router
from food_helper.api.weights import router as weights_router
from food_helper.app_logging import configure_logging
from food_helper.containers import AppContainer
from food_helper.domain.errors import (
    EntityNotFoundError,
    FoodHelperError,
    InvalidDateRangeError,
    InvalidProductError,
    InvalidRecipeError,
    ProductInUseError,
    UnknownNutrientSelectorError,
)

_ERROR_STATUS: dict[type[FoodHelperError], int] = {
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    UnknownNutrientSelectorError: status.HTTP_404_NOT_FOUND,
    InvalidDateRangeError: status.HTTP_400_BAD_REQUEST,
    InvalidProductError: status.HTTP_400_BAD_REQUEST,
    InvalidRecipeError: status.HTTP_400_BAD_REQUEST,
    ProductInUseError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Food Helper")
    app.state.container = container

    app.include_router(weights_router)
    app.include_router(products_router)
    app.include_router(recipes_router)

    @app.exception_handler(FoodHelperError)
    async def handle_domain_error(
        request: Request, exc: FoodHelperError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.warning(
            "Request failed: %s %s -> %s: %s",
            request.method,
            request.url.path,
            status_code,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
