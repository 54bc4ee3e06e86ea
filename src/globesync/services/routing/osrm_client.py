"""HTTP client for the OSRM route service."""

from __future__ import annotations

import asyncio
import logging
import math

import httpx

from ...config import settings
from ...models.domain import Coordinate, RouteLeg, TransportMode
from .errors import NoRouteError, ProviderError

logger = logging.getLogger(__name__)

# Public OSRM profile names. Transit has no profile of its own and is
# approximated with driving.
PROFILE_BY_MODE: dict[TransportMode, str] = {
    TransportMode.DRIVING: "driving",
    TransportMode.WALKING: "foot",
    TransportMode.CYCLING: "bike",
    TransportMode.TRANSIT: "driving",
}

# Two points in central Berlin, used as a connectivity probe.
_HEALTH_PROBE = "13.388860,52.517037;13.385983,52.496891"


def profile_for(mode: TransportMode) -> str:
    return PROFILE_BY_MODE.get(mode, "driving")


class OSRMClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._client = client
        self.base_url = base_url or settings.osrm_base_url
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.route_timeout_seconds
        self.user_agent = user_agent or settings.http_user_agent

    async def find_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: TransportMode = TransportMode.DRIVING,
    ) -> RouteLeg:
        """Get the best route geometry between two coordinates.

        Requests full-resolution GeoJSON geometry with alternatives and
        turn-by-turn steps disabled, and always takes the first route.

        Args:
            origin: Start coordinate
            destination: End coordinate
            mode: Transport mode, mapped onto an OSRM profile

        Returns:
            RouteLeg with (lon, lat) geometry, distance in km and duration in seconds
        """
        profile = profile_for(mode)
        coordinate_str = (
            f"{origin.longitude},{origin.latitude};{destination.longitude},{destination.latitude}"
        )
        url = f"{self.base_url}/route/v1/{profile}/{coordinate_str}"
        params = {
            "overview": "full",
            "alternatives": "false",
            "steps": "false",
            "geometries": "geojson",
        }

        logger.info(f"Requesting {profile} route from OSRM: {coordinate_str}")
        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=params, headers={"User-Agent": self.user_agent}),
                timeout=self.timeout,
            )
            data = response.json()
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(f"OSRM route request timed out after {self.timeout}s")
            raise ProviderError(f"OSRM route request timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Failed to connect to OSRM service at {self.base_url}: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"OSRM responded with {response.status_code} and an unreadable body") from exc

        if not isinstance(data, dict):
            data = {}
        code = data.get("code")
        # OSRM answers an unroutable pair with 400 + code "NoRoute".
        if code == "NoRoute":
            raise NoRouteError(data.get("message") or "No routes found between these locations")
        if response.is_error:
            raise ProviderError(f"OSRM API responded with {response.status_code}: {response.reason_phrase}")
        if code != "Ok":
            raise ProviderError(f"OSRM error: {data.get('message') or code}")

        routes = data.get("routes") or []
        if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
            raise NoRouteError("No routes found between these locations")

        route = routes[0]
        shape = route.get("geometry")
        coordinates = shape.get("coordinates") if isinstance(shape, dict) else None
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            raise NoRouteError("Invalid route geometry received")

        try:
            geometry = tuple((float(lon), float(lat)) for lon, lat, *_ in coordinates)
        except (TypeError, ValueError) as exc:
            raise NoRouteError(f"Invalid route geometry received: {exc}") from exc
        try:
            distance_km = float(route.get("distance", 0.0)) / 1000.0
            duration = float(route.get("duration", 0.0))
        except (TypeError, ValueError) as exc:
            raise ProviderError(f"OSRM route has unusable distance or duration: {exc}") from exc
        if not (math.isfinite(distance_km) and math.isfinite(duration)) or distance_km < 0 or duration < 0:
            raise ProviderError(f"OSRM route has invalid distance or duration ({distance_km}km, {duration}s)")
        logger.info(f"OSRM route found: {distance_km:.1f}km, {round(duration / 60)}min")

        return RouteLeg(
            geometry=geometry,
            distance_km=distance_km,
            duration_seconds=duration,
        )

    async def check_health(self) -> bool:
        """Check OSRM reachability with a minimal two-point route request."""
        url = f"{self.base_url}/route/v1/driving/{_HEALTH_PROBE}"
        try:
            response = await asyncio.wait_for(
                self._client.get(url, params={"overview": "false"}, headers={"User-Agent": self.user_agent}),
                timeout=5.0,
            )
            response.raise_for_status()
            return response.json().get("code") == "Ok"
        except (asyncio.TimeoutError, httpx.HTTPError, ValueError, AttributeError):
            return False
