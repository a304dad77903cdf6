"""Weight tracking endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, Response, status

from food_helper.api.schemas import (
    WeightPayload,
    weight_from_payload,
    weight_to_payload,
)

if TYPE_CHECKING:
    from food_helper.containers import AppContainer

router = APIRouter(prefix="/weights", tags=["weights"])


@router.put("")
async def update_weight(payload: WeightPayload, request: Request) -> Response:
    """Upsert the weight for a date."""
    container: AppContainer = request.app.state.container
    container.weight_service.update(weight_from_payload(payload))
    return Response(status_code=status.HTTP_200_OK)


@router.post("")
async def save_weight(payload: WeightPayload, request: Request) -> Response:
    """Record the weight for a date."""
    container: AppContainer = request.app.state.container
    container.weight_service.save(weight_from_payload(payload))
    return Response(status_code=status.HTTP_200_OK)


@router.get("")
async def find_weights_between(
    request: Request,
    from_date: date = Query(alias="fromDate"),
    to_date: date = Query(alias="toDate"),
) -> list[WeightPayload]:
    """Return weights between two ISO dates, both inclusive."""
    container: AppContainer = request.app.state.container
    entries = container.weight_service.find_all_by_date_between(from_date, to_date)
    return [weight_to_payload(entry) for entry in entries]


@router.get("/latest")
async def latest_weight(request: Request) -> WeightPayload:
    """Return the most recently dated weight."""
    container: AppContainer = request.app.state.container
    return weight_to_payload(container.weight_service.find_latest())
