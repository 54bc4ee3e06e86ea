"""Supabase persistence for trip records and their computed route."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import settings
from ..models.domain import Trip

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """The trip store is unavailable or rejected a query."""


class TripNotFoundError(LookupError):
    """No trip row exists for the given id."""


class TripStore:
    """Reads trips and replaces their route data wholesale (last writer wins)."""

    def __init__(self, client: Any, table: str | None = None) -> None:
        self._client = client
        self.table = table or settings.trips_table

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> Any:
        if self._client is None:
            raise StoreError(
                "Supabase not configured. Set GLOBESYNC_SUPABASE_URL and GLOBESYNC_SUPABASE_KEY environment variables."
            )
        return self._client

    def get_trip(self, trip_id: str) -> Optional[Trip]:
        client = self._require_client()
        try:
            response = (
                client.table(self.table)
                .select("id, basic_info, route_data, map_center")
                .eq("id", trip_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            logger.error(f"Failed to load trip '{trip_id}': {exc}")
            raise StoreError(f"Failed to load trip '{trip_id}': {exc}") from exc

        rows = response.data or []
        if not rows:
            return None
        return _row_to_trip(rows[0])

    def save_route(
        self,
        trip_id: str,
        route_data: dict[str, Any],
        map_center: Optional[tuple[float, float]] = None,
    ) -> None:
        """Replace the trip's route and map center with the given values."""
        client = self._require_client()
        record = {
            "route_data": route_data,
            "map_center": list(map_center) if map_center is not None else None,
        }
        try:
            response = client.table(self.table).update(record).eq("id", trip_id).execute()
        except Exception as exc:
            logger.error(f"Failed to save route for trip '{trip_id}': {exc}")
            raise StoreError(f"Failed to save route for trip '{trip_id}': {exc}") from exc

        if not response.data:
            raise TripNotFoundError(f"Trip '{trip_id}' not found")
        logger.info(f"Route data saved for trip '{trip_id}'")

    def ping(self) -> bool:
        client = self._require_client()
        try:
            client.table(self.table).select("id").limit(1).execute()
        except Exception as exc:
            logger.warning(f"Trip store ping failed: {exc}")
            return False
        return True


def _row_to_trip(row: dict[str, Any]) -> Trip:
    map_center = row.get("map_center")
    center: Optional[tuple[float, float]] = None
    if isinstance(map_center, (list, tuple)) and len(map_center) == 2:
        center = (float(map_center[0]), float(map_center[1]))

    route_data = row.get("route_data")
    return Trip(
        trip_id=str(row.get("id")),
        basic_info=row.get("basic_info") or {},
        # Rows default to an empty object before the first route is stored.
        route_data=route_data if route_data else None,
        map_center=center,
    )
