"""Stand-ins for the routing collaborators and the Supabase client."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

from globesync.models.domain import Coordinate, Place, RouteLeg, RouteResult, RouteType, TransportMode
from globesync.services.routing.errors import ProviderError


def make_place(city: str, lat: float, lon: float, country: str = "India") -> Place:
    return Place(
        coordinate=Coordinate(latitude=lat, longitude=lon),
        display_address=f"{city}, {country}",
        city_name=city,
        country_name=country,
    )


DELHI = make_place("Delhi", 28.6139, 77.2090)
MUMBAI = make_place("Mumbai", 19.0760, 72.8777)
GOA = make_place("Goa", 15.2993, 74.1240)

DELHI_MUMBAI_LEG = RouteLeg(
    geometry=((77.2090, 28.6139), (75.7873, 26.9124), (72.8777, 19.0760)),
    distance_km=1408.36,
    duration_seconds=91800.0,
)


def backend_route(origin: Place = DELHI, destination: Place = MUMBAI) -> RouteResult:
    return RouteResult(
        origin=origin,
        destination=destination,
        distance_km=1400.0,
        travel_time_text="24h 0m",
        transport_mode=TransportMode.DRIVING,
        geometry=(
            (origin.coordinate.longitude, origin.coordinate.latitude),
            (destination.coordinate.longitude, destination.coordinate.latitude),
        ),
        route_type=RouteType.ROAD,
    )


class FakeGeocoder:
    def __init__(self, places: dict[str, Any], delays: dict[str, float] | None = None) -> None:
        self.places = places
        self.delays = delays or {}
        self.calls: list[str] = []
        self.cancelled: list[str] = []

    async def resolve(self, place_name: str) -> Place:
        self.calls.append(place_name)
        delay = self.delays.get(place_name)
        if delay:
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                self.cancelled.append(place_name)
                raise
        value = self.places[place_name]
        if isinstance(value, Exception):
            raise value
        return value


class FakeRouteFinder:
    def __init__(self, leg: RouteLeg | Exception = DELHI_MUMBAI_LEG) -> None:
        self.leg = leg
        self.calls: list[tuple[Coordinate, Coordinate, TransportMode]] = []

    async def find_route(self, origin: Coordinate, destination: Coordinate, mode: TransportMode) -> RouteLeg:
        self.calls.append((origin, destination, mode))
        if isinstance(self.leg, Exception):
            raise self.leg
        return self.leg


class FakeBackend:
    def __init__(self, result: RouteResult | Exception | None = None, configured: bool = True) -> None:
        self.result = result if result is not None else ProviderError("Backend responded with status 503")
        self.configured = configured
        self.calls: list[tuple[str, str, TransportMode]] = []

    async def fetch_route(self, origin_text: str, destination_text: str, mode: TransportMode) -> RouteResult:
        self.calls.append((origin_text, destination_text, mode))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.operation = "select"
        self.record: dict[str, Any] | None = None
        self.filters: list[tuple[str, Any]] = []

    def select(self, columns: str) -> "FakeQuery":
        self.operation = "select"
        return self

    def update(self, record: dict[str, Any]) -> "FakeQuery":
        self.operation = "update"
        self.record = record
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        return self

    def execute(self) -> SimpleNamespace:
        if self.client.fail:
            raise ConnectionError("supabase unreachable")
        rows = [
            row for row in self.client.rows.values()
            if all(row.get(column) == value for column, value in self.filters)
        ]
        if self.operation == "update":
            self.client.updates.append((dict(self.filters), self.record))
            for row in rows:
                row.update(self.record or {})
        return SimpleNamespace(data=[dict(row) for row in rows])


class FakeSupabase:
    def __init__(self, rows: list[dict[str, Any]] | None = None, fail: bool = False) -> None:
        self.rows = {row["id"]: dict(row) for row in rows or []}
        self.fail = fail
        self.tables: list[str] = []
        self.updates: list[tuple[dict[str, Any], dict[str, Any] | None]] = []

    def table(self, name: str) -> FakeQuery:
        self.tables.append(name)
        return FakeQuery(self, name)
