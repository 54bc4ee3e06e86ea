"""Trip route endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ...config import settings
from ...persistence.trips import StoreError, TripNotFoundError, TripStore
from ...schemas.routing import (
    ComputeRouteRequest,
    ComputeRouteResponse,
    PlaceModel,
    RouteDataModel,
    RouteErrorResponse,
    RouteLocations,
    StoredRouteResponse,
)
from ...services.geospatial import map_center
from ...services.routing.models import RouteErr, RouteRequest
from ...services.routing.service import RouteOrchestrator
from ..dependencies import get_orchestrator, get_trip_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["routes"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": RouteErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": RouteErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": RouteErrorResponse},
}


def _error(status_code: int, error: RouteErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(mode="json", exclude_none=True))


def _resolve_endpoints(payload: ComputeRouteRequest, trip_city: str | None) -> tuple[str, str]:
    origin = (payload.origin or "").strip() or settings.default_origin
    destination = (payload.destination or "").strip() or trip_city or settings.default_destination
    return origin, destination


def _failure_response(outcome: RouteErr) -> JSONResponse:
    locations = None
    if outcome.origin is not None or outcome.destination is not None:
        locations = RouteLocations(
            origin=PlaceModel.from_domain(outcome.origin) if outcome.origin else None,
            destination=PlaceModel.from_domain(outcome.destination) if outcome.destination else None,
        )
    status_code = status.HTTP_400_BAD_REQUEST if outcome.kind == "validation" else status.HTTP_404_NOT_FOUND
    return _error(status_code, RouteErrorResponse(error=outcome.message, kind=outcome.kind, locations=locations))


@router.post(
    "/map/route",
    response_model=ComputeRouteResponse,
    responses=_ERROR_RESPONSES,
    status_code=status.HTTP_200_OK,
)
async def compute_route(
    payload: ComputeRouteRequest,
    orchestrator: RouteOrchestrator = Depends(get_orchestrator),
    trip_store: TripStore = Depends(get_trip_store),
):
    """Compute a route for a chat/trip and store it on the record.

    Nothing is written when every routing strategy fails, so a previously
    stored route stays in place.
    """
    chat_id = (payload.chat_id or "").strip()
    if not chat_id:
        return _error(status.HTTP_400_BAD_REQUEST, RouteErrorResponse(error="chatId is required", kind="validation"))

    try:
        trip = await run_in_threadpool(trip_store.get_trip, chat_id)
        if trip is None:
            return _error(status.HTTP_404_NOT_FOUND, RouteErrorResponse(error="Chat not found"))

        origin, destination = _resolve_endpoints(payload, trip.city)
        outcome = await orchestrator.compute_route(
            RouteRequest(
                trip_id=chat_id,
                origin_text=origin,
                destination_text=destination,
                transport_mode=payload.transport_mode,
            )
        )
        if isinstance(outcome, RouteErr):
            return _failure_response(outcome)

        route_data = RouteDataModel.from_domain(outcome.result)
        center = map_center(outcome.result.geometry)
        await run_in_threadpool(trip_store.save_route, chat_id, route_data.model_dump(mode="json"), center)
    except TripNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, RouteErrorResponse(error="Chat not found"))
    except StoreError as exc:
        logger.error(f"Trip store failure for chat '{chat_id}': {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, RouteErrorResponse(error=str(exc)))
    except Exception as exc:
        logger.exception(f"Error in route computation for chat '{chat_id}': {exc}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            RouteErrorResponse(error=str(exc) or "Failed to process route request"),
        )

    logger.info(f"Route for chat '{chat_id}' computed via {outcome.source} and saved")
    return ComputeRouteResponse(route_data=route_data)


@router.get("/{chat_id}/route", response_model=StoredRouteResponse, status_code=status.HTTP_200_OK)
async def get_route(chat_id: str, trip_store: TripStore = Depends(get_trip_store)) -> StoredRouteResponse:
    """Return the route currently stored on a chat/trip."""
    try:
        trip = await run_in_threadpool(trip_store.get_trip, chat_id)
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
    if not trip.route_data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No route stored for chat '{chat_id}'")

    try:
        route_data = RouteDataModel.model_validate(trip.route_data)
    except PydanticValidationError as exc:
        logger.warning(f"Stored route for chat '{chat_id}' is malformed: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Stored route for chat '{chat_id}' is malformed",
        ) from exc

    return StoredRouteResponse(chat_id=trip.trip_id, route_data=route_data, map_center=trip.map_center)
