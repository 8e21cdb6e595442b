"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TOPT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Transport Optimization Client API"
    api_prefix: str = "/api"
    optimizer_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the remote transport optimization service.",
    )
    optimizer_path: str = Field(
        default="/optimize-transport/",
        description="Path of the optimization endpoint on the remote service.",
    )
    optimizer_timeout_seconds: float = Field(default=120.0, gt=0.0)
    export_filename: str = Field(
        default="grouped_transport_optimization.csv",
        description="File name offered for the grouped CSV export.",
    )
    currency_symbol: str = Field(default="₹", description="Prefix for cost labels in the results table.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @property
    def optimizer_url(self) -> str:
        return f"{self.optimizer_base_url.rstrip('/')}/{self.optimizer_path.lstrip('/')}"

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


settings = Settings()
