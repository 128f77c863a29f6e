"""
RecordStore — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py and the entry point; tests build their own instance.
When:  Loaded once at module import time.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running the service from the
    directory that should hold the data file.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # Whole collection lives in this one file as a JSON array
    data_file: str = Field(
        default="./veri.json",
        description="Path of the JSON file backing the record collection",
    )

    # Serialize load-mutate-save cycles with a single in-process lock
    serialize_writes: bool = Field(default=False)

    # ── Static Files ──────────────────────────────────────────────────────
    # Served at "/" for paths the API does not claim; empty string disables
    static_dir: Optional[str] = Field(default=".")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance used by the module-level app and the entry point
settings = Settings()
