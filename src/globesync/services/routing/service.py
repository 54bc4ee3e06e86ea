"""Route orchestration service.

A single computation walks a fixed chain of strategies, each tried once:

    Start -> TryBackend -> {Success -> Done; Unavailable -> TryFallback}
          -> {Success -> Done; Fail -> Terminal}

The internal backend is authoritative whenever it answers. Otherwise both
places are geocoded concurrently and routed through OSRM. When that fails too
the caller gets an explicit error carrying whatever places resolved; no
synthetic route is ever produced.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Optional

from ...models.domain import Place, RouteLeg, RouteResult, RouteType, TransportMode
from .backend_client import TrustedBackendClient
from .errors import ProviderError, RoutingError, ValidationError
from .geocoder import Geocoder
from .models import RouteErr, RouteOk, RouteOutcome, RouteRequest
from .osrm_client import OSRMClient

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_travel_time(duration_seconds: float) -> str:
    """Human readable travel time: "N/A", "{m} mins" below an hour, else "{h}h {m}m"."""
    if duration_seconds <= 0:
        return "N/A"
    if duration_seconds < 3600:
        return f"{_round_half_up(duration_seconds / 60)} mins"
    hours = math.floor(duration_seconds / 3600)
    minutes = _round_half_up((duration_seconds % 3600) / 60)
    return f"{hours}h {minutes}m"


def build_route_result(
    origin: Place,
    destination: Place,
    leg: RouteLeg,
    mode: TransportMode,
) -> RouteResult:
    return RouteResult(
        origin=origin,
        destination=destination,
        distance_km=round(leg.distance_km, 1),
        travel_time_text=format_travel_time(leg.duration_seconds),
        transport_mode=mode,
        geometry=leg.geometry,
        route_type=RouteType.ROAD,
    )


def _validate(request: RouteRequest) -> None:
    if not request.trip_id or not str(request.trip_id).strip():
        raise ValidationError("chatId is required")
    if not request.origin_text or not request.origin_text.strip():
        raise ValidationError("Both origin and destination are required")
    if not request.destination_text or not request.destination_text.strip():
        raise ValidationError("Both origin and destination are required")


class RouteOrchestrator:
    """Coordinates the trusted backend, the geocoder and OSRM.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        route_finder: OSRMClient,
        backend: TrustedBackendClient,
    ) -> None:
        self._geocoder = geocoder
        self._route_finder = route_finder
        self._backend = backend

    async def compute_route(self, request: RouteRequest) -> RouteOutcome:
        try:
            _validate(request)
        except ValidationError as exc:
            return RouteErr(
                kind=exc.kind,
                message=exc.message,
                origin_text=request.origin_text,
                destination_text=request.destination_text,
            )

        origin_text = request.origin_text.strip()
        destination_text = request.destination_text.strip()
        logger.info(
            f"Route request for trip {request.trip_id}: {origin_text} -> {destination_text} "
            f"({request.transport_mode.value})"
        )

        result = await self._try_backend(origin_text, destination_text, request.transport_mode)
        if result is not None:
            return RouteOk(result=result, source="backend")

        return await self._try_fallback(origin_text, destination_text, request.transport_mode)

    async def _try_backend(
        self,
        origin_text: str,
        destination_text: str,
        mode: TransportMode,
    ) -> Optional[RouteResult]:
        if not self._backend.configured:
            logger.info("Routing backend not configured, going straight to geocoding + OSRM")
            return None
        try:
            result = await self._backend.fetch_route(origin_text, destination_text, mode)
        except RoutingError as exc:
            logger.warning(f"Backend unavailable: {exc.message}")
            return None
        logger.info("Backend route service successful")
        return result

    async def _try_fallback(
        self,
        origin_text: str,
        destination_text: str,
        mode: TransportMode,
    ) -> RouteOutcome:
        origin, destination, error = await self._geocode_pair(origin_text, destination_text)
        if error is not None:
            return self._terminal(origin_text, destination_text, error, origin, destination)

        logger.info(
            f"Geocoded {origin.city_name} ({origin.coordinate.latitude}, {origin.coordinate.longitude}) -> "
            f"{destination.city_name} ({destination.coordinate.latitude}, {destination.coordinate.longitude})"
        )
        try:
            leg = await self._route_finder.find_route(origin.coordinate, destination.coordinate, mode)
            result = build_route_result(origin, destination, leg, mode)
        except ValidationError as exc:
            unusable = ProviderError(f"Unusable route from routing service: {exc.message}")
            return self._terminal(origin_text, destination_text, unusable, origin, destination)
        except RoutingError as exc:
            return self._terminal(origin_text, destination_text, exc, origin, destination)

        return RouteOk(result=result, source="osrm")

    async def _geocode_pair(
        self,
        origin_text: str,
        destination_text: str,
    ) -> tuple[Optional[Place], Optional[Place], Optional[RoutingError]]:
        """Resolve both places concurrently, cancelling the other lookup on the first failure."""
        tasks = [
            asyncio.create_task(self._geocoder.resolve(origin_text)),
            asyncio.create_task(self._geocoder.resolve(destination_text)),
        ]
        try:
            _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        places: list[Optional[Place]] = []
        error: Optional[BaseException] = None
        for task in tasks:
            if task.cancelled():
                places.append(None)
                continue
            exc = task.exception()
            if exc is None:
                places.append(task.result())
            else:
                places.append(None)
                error = error or exc

        if error is not None and not isinstance(error, RoutingError):
            raise error
        return places[0], places[1], error

    @staticmethod
    def _terminal(
        origin_text: str,
        destination_text: str,
        error: RoutingError,
        origin: Optional[Place],
        destination: Optional[Place],
    ) -> RouteErr:
        message = f"Unable to find route between {origin_text} and {destination_text}: {error.message}"
        logger.error(f"All routing methods failed: {message}")
        return RouteErr(
            kind=error.kind,
            message=message,
            origin_text=origin_text,
            destination_text=destination_text,
            origin=origin,
            destination=destination,
        )
