"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TOURCRM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Tour CRM API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Directory holding the local snapshot files.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
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
        description="Supabase API key used for the clients table.",
    )
    supabase_table: str = Field(default="clients", description="Table holding one row per client (id, data).")
    supabase_batch_size: int = Field(default=100, ge=1)

    # Sync
    sync_debounce_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Quiescence window before a change is uploaded to the remote store.",
    )

    # Radar
    radar_default_radius_km: float = Field(default=50.0, gt=0.0)

    # Fallback location used when an address cannot be geocoded
    fallback_latitude: float = Field(default=41.9, ge=-90.0, le=90.0)
    fallback_longitude: float = Field(default=12.4, ge=-180.0, le=180.0)
    fallback_jitter_degrees: float = Field(default=0.1, ge=0.0)

    # Geocoding
    geocoder_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of a Nominatim-compatible geocoder (e.g., https://nominatim.openstreetmap.org).",
    )
    geocoder_user_agent: str = "tourcrm/0.1"
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoder_max_retries: int = Field(default=2, ge=0)
    geocoder_backoff_seconds: float = Field(default=0.5, ge=0.0)

    # Weather for the next stop
    weather_base_url: Optional[str] = Field(
        default="https://api.open-meteo.com/v1",
        description="Base URL of an Open-Meteo compatible forecast API; empty disables the lookup.",
    )
    weather_timeout_seconds: float = Field(default=5.0, gt=0.0)
    weather_max_retries: int = Field(default=1, ge=0)

    # Position provider
    position_max_age_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Readings older than this are not reused as the current position.",
    )
    position_timeout_seconds: float = Field(
        default=20.0,
        gt=0.0,
        description="Time without any reading after which the position status becomes 'error'.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
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

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


settings = Settings()
