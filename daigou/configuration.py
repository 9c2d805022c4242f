"""Mini README: Centralised configuration for the daigou ledger.

Structure:
    * DaigouSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values come from ``DAIGOU_``-prefixed environment variables or a ``.env``
    file. The Gemini key is optional; without it the analysis action is
    refused rather than attempted.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class DaigouSettings(BaseSettings):
    """Runtime configuration for the ledger service and CLI."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger and exported CSV files.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface exposes.",
        ge=1,
        le=65535,
    )
    transactions_key: str = Field(
        "daigou_transactions",
        description="Storage key holding the serialised transaction ledger.",
    )
    default_rate_key: str = Field(
        "daigou_default_rate",
        description="Storage key holding the last-used default exchange rate.",
    )
    fallback_default_rate: float = Field(
        0.28,
        description="Default exchange rate used when none has been stored yet.",
        ge=0,
    )
    export_prefix: str = Field(
        "代購銷售紀錄",
        description="Filename prefix for CSV exports.",
    )
    gemini_api_key: Optional[str] = Field(
        None,
        description="Google Gemini API key enabling the sales analysis action.",
    )
    gemini_model: str = Field(
        "gemini-2.0-flash",
        description="Gemini model used for sales analysis.",
    )

    class Config:
        env_prefix = "DAIGOU_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure the data directory expands user paths and exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> DaigouSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return DaigouSettings()
