"""Domain models for places, routes and trips."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..services.routing.errors import ValidationError


class TransportMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"
    TRANSIT = "transit"


class RouteType(str, Enum):
    ROAD = "road"
    FALLBACK = "fallback"


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Latitude {self.latitude} is outside [-90, 90].")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Longitude {self.longitude} is outside [-180, 180].")


@dataclass(slots=True, frozen=True)
class Place:
    """A geocoded location."""

    coordinate: Coordinate
    display_address: str
    city_name: str
    country_name: str


@dataclass(slots=True, frozen=True)
class RouteLeg:
    """Raw routing answer: geometry as (lon, lat) pairs, distance in km, duration in seconds."""

    geometry: tuple[tuple[float, float], ...]
    distance_km: float
    duration_seconds: float


@dataclass(slots=True, frozen=True)
class RouteResult:
    """Normalized, storage-ready route between two places."""

    origin: Place
    destination: Place
    distance_km: float
    travel_time_text: str
    transport_mode: TransportMode
    geometry: tuple[tuple[float, float], ...]
    route_type: RouteType = RouteType.ROAD

    def __post_init__(self) -> None:
        if self.distance_km < 0:
            raise ValidationError(f"Route distance must be non-negative, got {self.distance_km}.")
        if len(self.geometry) < 2:
            raise ValidationError("Route geometry needs at least two points.")


@dataclass(slots=True)
class Trip:
    """Trip/chat record that owns at most one route."""

    trip_id: str
    basic_info: dict = field(default_factory=dict)
    route_data: Optional[dict] = None
    map_center: Optional[tuple[float, float]] = None

    @property
    def city(self) -> Optional[str]:
        city = self.basic_info.get("city") if isinstance(self.basic_info, dict) else None
        if isinstance(city, str) and city.strip():
            return city.strip()
        return None
