"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import health, routes
from .config import settings
from .db.supabase import close_supabase_client, create_supabase_client
from .persistence.trips import TripStore
from .services.routing.backend_client import TrustedBackendClient
from .services.routing.geocoder import Geocoder
from .services.routing.osrm_client import OSRMClient
from .services.routing.service import RouteOrchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    http_client = httpx.AsyncClient(follow_redirects=True)
    supabase_client = create_supabase_client(settings)

    osrm_client = OSRMClient(http_client)
    app.state.osrm_client = osrm_client
    app.state.trip_store = TripStore(supabase_client)
    app.state.orchestrator = RouteOrchestrator(
        geocoder=Geocoder(http_client),
        route_finder=osrm_client,
        backend=TrustedBackendClient(http_client),
    )
    try:
        yield
    finally:
        await http_client.aclose()
        close_supabase_client(supabase_client)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": details or "Invalid request", "kind": "validation"},
    )


def create_app() -> FastAPI:
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    return app


app = create_app()
