from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError
from .constants import DEFAULT_OUTPUT_PATH, LOOKUP_ROW_LIMIT

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    # Output settings
    default_output_path: str = Field(
        DEFAULT_OUTPUT_PATH, description="Report path used when none is given"
    )
    sort_report: bool = Field(False, description="Sort report rows by tag and port")

    # Parsing settings
    skip_malformed: bool = Field(
        False, description="Skip malformed rows/lines instead of aborting the run"
    )
    encoding: str = Field("utf-8", description="Encoding of every input and output file")
    lookup_row_limit: int = Field(
        LOOKUP_ROW_LIMIT, description="Lookup rows above which a capacity warning is logged"
    )

    # Logging settings
    log_level: str = Field("INFO", description="Level applied to package loggers")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level

    class Config:
        env_prefix = "FLOWLOG_TAGGER_"
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    """Return a singleton settings instance."""
    return Settings()


def _read_config_file(config_path: Path) -> dict[str, Any]:
    suffix = config_path.suffix.lower()
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            if suffix in {".yaml", ".yml"}:
                config = yaml.safe_load(fh)
            elif suffix == ".json":
                config = json.load(fh)
            else:
                raise ConfigurationError(
                    f"Unsupported configuration file format: '{config_path.suffix}'.",
                    suggestion="Supported formats are YAML (.yaml, .yml) and JSON (.json).",
                )
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read configuration file '{config_path}': {exc}"
        ) from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            f"Invalid configuration file '{config_path}': {exc}"
        ) from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at top level."
        )
    return config


def load_settings(path: str | Path | None = None, **overrides: Any) -> Settings:
    """Return settings from the environment overlaid with ``path`` and ``overrides``.

    ``overrides`` whose value is ``None`` are ignored so CLI flags that were
    not given leave the file/environment value in place.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_config_file(Path(path)))
    values.update({key: val for key, val in overrides.items() if val is not None})
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


settings = get_settings()
