"""Request-scoped access to the services built in the application lifespan."""

from __future__ import annotations

from fastapi import Request

from ..persistence.trips import TripStore
from ..services.routing.osrm_client import OSRMClient
from ..services.routing.service import RouteOrchestrator


def get_orchestrator(request: Request) -> RouteOrchestrator:
    return request.app.state.orchestrator


def get_trip_store(request: Request) -> TripStore:
    return request.app.state.trip_store


def get_osrm_client(request: Request) -> OSRMClient:
    return request.app.state.osrm_client
