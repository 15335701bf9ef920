"""Configuration settings for the SSRF Guard MCP server."""

import os
import sys
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    # Classification
    allow_documentation_ranges: bool = Field(default=False)
    max_bulk_addresses: int = Field(default=100, ge=1, le=1000)

    model_config = SettingsConfigDict(
        env_prefix="SSRF_GUARD_",
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def resolve_allow_documentation(self, value: object) -> bool:
        """Per-call documentation override; absent or null falls back to the setting."""
        if value is None:
            return self.allow_documentation_ranges
        if not isinstance(value, bool):
            raise ValueError("allow_documentation must be a boolean")
        return value

    def __init__(self, _env_file: str | None = None, **data: object) -> None:
        if _env_file is None:
            config_env_file = self.model_config.get("env_file")
            if config_env_file is not None:
                _env_file = config_env_file
            else:
                running_tests = 'pytest' in sys.modules or os.environ.get('PYTEST_CURRENT_TEST') is not None
                if not running_tests:
                    # Look for .env in the working directory and its parents
                    import pathlib
                    current_dir = pathlib.Path.cwd()
                    for path in [current_dir] + list(current_dir.parents):
                        env_file = path / '.env'
                        if env_file.exists():
                            _env_file = str(env_file)
                            break

        if _env_file and os.path.exists(_env_file):
            print(f"[MCP SSRF Guard] Loading environment from: {_env_file}", file=sys.stderr)

        super().__init__(_env_file=_env_file, **data)
