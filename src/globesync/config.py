"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GLOBESYNC_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "GlobeSync Route Service"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim geocoding service.",
    )
    osrm_base_url: str = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service.",
    )
    backend_url: Optional[str] = Field(
        default=None,
        description="Internal routing backend tried before geocoding + OSRM. Unset to skip it.",
    )
    http_user_agent: str = Field(
        default="GlobeSync-TravelApp/1.0",
        description="User-Agent sent to public geocoding/routing services.",
    )
    geocode_timeout_seconds: float = Field(default=10.0, gt=0.0)
    route_timeout_seconds: float = Field(default=15.0, gt=0.0)
    backend_timeout_seconds: float = Field(default=10.0, gt=0.0)

    default_origin: str = Field(default="Delhi, India", description="Origin used when a request omits one.")
    default_destination: str = Field(
        default="Mumbai, India",
        description="Destination used when neither the request nor the trip names one.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    trips_table: str = Field(default="trips", description="Table holding trip/chat records.")

    @field_validator("nominatim_base_url", "osrm_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @field_validator("backend_url", mode="before")
    @classmethod
    def _optional_backend_url(cls, value: Any) -> Any:
        """An empty value disables the backend strategy."""
        if isinstance(value, str):
            return value.strip().rstrip("/") or None
        return value

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
