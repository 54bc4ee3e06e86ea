"""Client for the internal routing backend."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from ...config import settings
from ...models.domain import RouteResult, TransportMode
from ...schemas.routing import RouteDataModel
from .errors import ProviderError, ValidationError

logger = logging.getLogger(__name__)


class TrustedBackendClient:
    """Forwards raw place names to the internal backend, which geocodes on its own.

    Any answer other than a 2xx with ``success: true`` and a well-formed
    ``route_data`` payload is reported as ``ProviderError``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self.base_url = base_url if base_url is not None else settings.backend_url
        self.timeout = timeout if timeout is not None else settings.backend_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def fetch_route(
        self,
        origin_text: str,
        destination_text: str,
        mode: TransportMode,
    ) -> RouteResult:
        if not self.configured:
            raise ProviderError("Routing backend is not configured.")

        url = f"{self.base_url}/maps/route"
        body = {
            "origin": origin_text,
            "destination": destination_text,
            "transport_mode": mode.value,
        }

        try:
            response = await asyncio.wait_for(self._client.post(url, json=body), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise ProviderError(f"Backend timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Backend unreachable at {self.base_url}: {exc}") from exc

        if not response.is_success:
            raise ProviderError(f"Backend responded with status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Backend returned a non-JSON body") from exc

        if not isinstance(payload, dict) or payload.get("success") is not True:
            error = payload.get("error") if isinstance(payload, dict) else None
            raise ProviderError(error or "Backend returned unsuccessful response")

        try:
            return RouteDataModel.model_validate(payload.get("route_data")).to_domain()
        except (PydanticValidationError, ValidationError) as exc:
            logger.warning(f"Backend route payload rejected: {exc}")
            raise ProviderError("Backend returned a malformed route payload") from exc
