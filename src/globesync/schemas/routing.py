"""Route request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Coordinate, Place, RouteResult, RouteType, TransportMode


class PlaceModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    city: str
    address: Optional[str] = None
    country: str = "Unknown"

    @classmethod
    def from_domain(cls, place: Place) -> "PlaceModel":
        return cls(
            lat=place.coordinate.latitude,
            lng=place.coordinate.longitude,
            city=place.city_name,
            address=place.display_address,
            country=place.country_name,
        )

    def to_domain(self) -> Place:
        return Place(
            coordinate=Coordinate(latitude=self.lat, longitude=self.lng),
            display_address=self.address or self.city,
            city_name=self.city,
            country_name=self.country,
        )


class RouteOptionModel(BaseModel):
    route_name: str
    distance: float
    duration: str
    distance_text: str


class RouteDataModel(BaseModel):
    """Route payload exchanged with the internal backend, clients and the trip store."""

    origin: PlaceModel
    destination: PlaceModel
    distance: float = Field(..., ge=0)
    travel_time: str
    transportation_mode: TransportMode
    route_geometry: List[tuple[float, float]] = Field(..., min_length=2)
    route_options: List[RouteOptionModel] = Field(default_factory=list)
    route_type: RouteType = RouteType.ROAD

    @classmethod
    def from_domain(cls, result: RouteResult) -> "RouteDataModel":
        return cls(
            origin=PlaceModel.from_domain(result.origin),
            destination=PlaceModel.from_domain(result.destination),
            distance=result.distance_km,
            travel_time=result.travel_time_text,
            transportation_mode=result.transport_mode,
            route_geometry=[tuple(point) for point in result.geometry],
            route_options=[
                RouteOptionModel(
                    route_name="Optimal Route",
                    distance=result.distance_km,
                    duration=result.travel_time_text,
                    distance_text=f"{result.distance_km} km",
                )
            ],
            route_type=result.route_type,
        )

    def to_domain(self) -> RouteResult:
        return RouteResult(
            origin=self.origin.to_domain(),
            destination=self.destination.to_domain(),
            distance_km=self.distance,
            travel_time_text=self.travel_time,
            transport_mode=self.transportation_mode,
            geometry=tuple((float(lon), float(lat)) for lon, lat in self.route_geometry),
            route_type=self.route_type,
        )


class ComputeRouteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chat_id: Optional[str] = Field(default=None, alias="chatId")
    origin: Optional[str] = None
    destination: Optional[str] = None
    transport_mode: TransportMode = Field(default=TransportMode.DRIVING, alias="transportMode")


class ComputeRouteResponse(BaseModel):
    success: bool = True
    route_data: RouteDataModel


class RouteLocations(BaseModel):
    origin: Optional[PlaceModel] = None
    destination: Optional[PlaceModel] = None


class RouteErrorResponse(BaseModel):
    success: bool = False
    error: str
    kind: Optional[str] = None
    locations: Optional[RouteLocations] = None


class StoredRouteResponse(BaseModel):
    chat_id: str
    route_data: RouteDataModel
    map_center: Optional[tuple[float, float]] = None
