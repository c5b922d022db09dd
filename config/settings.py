"""
Configuration management for Commit Ledger.

This module provides centralized configuration with:
- Repository and traversal settings
- Extension filtering
- Logging configuration
- Environment and .env overrides (nested delimiter "__", e.g. LEDGER__DEPTH=10)
"""

from typing import Optional, List, Dict, Any
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings


class LedgerSettings(BaseSettings):
    """Repository traversal configuration settings."""

    repo_path: str = Field(default=".", description="Path to the Git repository")
    output_file: Optional[str] = Field(default=None, description="Where to write the result JSON")
    depth: int = Field(default=0, description="Maximum non-merge commits to visit (0 or negative = all)")
    extensions: str = Field(default="", description="Comma-separated extension allow-list")

    model_config = {"env_prefix": "LEDGER_", "extra": "ignore"}

    @field_validator("repo_path")
    @classmethod
    def validate_repo_path(cls, v):
        if not v or not v.strip():
            raise ValueError("Repository path cannot be empty")
        return v

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def extension_list(self) -> List[str]:
        """Return the parsed extension allow-list."""
        from services.file_ledger.ledger import parse_extensions

        return parse_extensions(self.extensions)


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    model_config = {"env_prefix": "MONITORING_", "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class Settings(PydanticBaseSettings):
    """
    Main application settings.

    Values come from, in order of precedence: constructor arguments,
    environment variables, the .env file, then defaults.
    """

    app_name: str = Field(default="Commit Ledger", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")

    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Example:
        >>> settings = get_settings()
        >>> print(settings.ledger.repo_path)
    """
    return Settings()


def export_config(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Export the effective configuration as a plain dictionary."""
    settings = settings or get_settings()
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "ledger": {
            "repo_path": settings.ledger.repo_path,
            "output_file": settings.ledger.output_file,
            "depth": settings.ledger.depth,
            "extensions": settings.ledger.extension_list(),
        },
        "monitoring": {
            "log_level": settings.monitoring.log_level,
        },
    }


if __name__ == "__main__":
    import json

    print(json.dumps(export_config(), indent=2))
