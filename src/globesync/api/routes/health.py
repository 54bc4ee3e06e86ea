"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from ...persistence.trips import TripStore
from ...services.routing.osrm_client import OSRMClient
from ..dependencies import get_osrm_client, get_trip_store

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
async def health_osrm(osrm_client: OSRMClient = Depends(get_osrm_client)) -> dict:
    """Check OSRM service health."""
    healthy = await osrm_client.check_health()
    return {"service": "osrm", "base_url": osrm_client.base_url, "healthy": healthy}


@router.get("/health/database", status_code=status.HTTP_200_OK)
async def check_database(trip_store: TripStore = Depends(get_trip_store)) -> dict:
    """Check the trip store connection."""
    if not trip_store.configured:
        return {
            "configured": False,
            "message": "Supabase not configured. Set GLOBESYNC_SUPABASE_URL and GLOBESYNC_SUPABASE_KEY environment variables.",
        }

    connected = await run_in_threadpool(trip_store.ping)
    return {
        "configured": True,
        "connected": connected,
        "table": trip_store.table,
        "message": "Database connected." if connected else "Database connection error.",
    }
