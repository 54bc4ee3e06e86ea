"""Nominatim geocoding client."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ...config import settings
from ...models.domain import Coordinate, Place
from .errors import NotFoundError, ProviderError, ValidationError

logger = logging.getLogger(__name__)


class Geocoder:
    """Resolves free-text place names to a single best match.

    Each call is independent: no retries and no caching, a failed lookup
    propagates to the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._client = client
        self.base_url = base_url or settings.nominatim_base_url
        if not self.base_url:
            raise ValueError("Nominatim base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_seconds
        self.user_agent = user_agent or settings.http_user_agent

    async def resolve(self, place_name: str) -> Place:
        if not place_name or not place_name.strip():
            raise ValidationError("Place name must not be blank.")
        query = place_name.strip()

        params = {
            "format": "json",
            "q": query,
            "limit": 1,
            "addressdetails": 1,
        }
        url = f"{self.base_url}/search"

        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=params, headers={"User-Agent": self.user_agent}),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(f"Geocoding timed out for '{query}' after {self.timeout}s")
            raise ProviderError(f"Geocoding timed out for '{query}'") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(f"Geocoding API error: {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(f"Geocoding request failed for '{query}': {exc}") from exc

        if not isinstance(data, list):
            raise ProviderError(f"Unexpected geocoding response for '{query}'")
        if not data:
            raise NotFoundError(f"Location \"{query}\" not found")

        return _parse_match(data[0], query)


def _parse_match(match: dict, query: str) -> Place:
    try:
        coordinate = Coordinate(latitude=float(match["lat"]), longitude=float(match["lon"]))
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise ProviderError(f"Geocoding response for '{query}' has no usable coordinates") from exc

    address = match.get("address") or {}
    city = address.get("city") or address.get("town") or address.get("village") or query
    return Place(
        coordinate=coordinate,
        display_address=match.get("display_name") or query,
        city_name=city,
        country_name=address.get("country") or "Unknown",
    )
