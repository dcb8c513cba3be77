"""Editor settings and logging setup.

Settings come from, in increasing priority: field defaults, an optional YAML
settings file, and ``STATECANVAS_*`` environment variables.
"""

import logging
import sys
from pathlib import Path

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import EditorError


class ConfigError(EditorError):
    """Raised when a settings file cannot be used."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class EditorSettings(BaseSettings):
    """Tunables of one editing session."""

    model_config = SettingsConfigDict(
        env_prefix="STATECANVAS_",
        case_sensitive=False,
        extra="ignore",
    )

    node_radius: float = Field(default=30, gt=0, description="Radius of a drawn state")
    arrow_padding: float = Field(
        default=5, ge=0, description="Gap between an arrow head and the node outline"
    )
    history_limit: int | None = Field(
        default=100, description="Maximum undo depth, unbounded when null"
    )
    snap_to_grid: bool = False
    grid_size: float = Field(default=25, gt=0)
    epsilon_symbol: str = Field(default="ε", min_length=1)
    log_level: str = "WARNING"

    @field_validator("history_limit")
    @classmethod
    def positive_limit(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("history_limit must be at least 1 or null")
        return value

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{value}'")
        return value


def load_settings(path: str | Path | None = None) -> EditorSettings:
    """Load settings, layering a YAML file under the environment.

    Args:
        path: Optional YAML settings file.

    Returns:
        The resolved EditorSettings.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or invalid.
    """
    file_values: dict = {}
    if path is not None:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", str(path)) from e
        except OSError as e:
            raise ConfigError(f"Cannot read settings file: {e}", str(path)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
            )
        file_values = data

    try:
        env_values = EditorSettings().model_dump(exclude_unset=True)
        return EditorSettings(**{**file_values, **env_values})
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}", str(path) if path else None) from e


def configure_logging(level: str = "WARNING") -> None:
    """Configure the root logger for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
