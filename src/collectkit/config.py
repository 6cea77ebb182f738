import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

__all__ = ["Settings", "settings"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_settings_path() -> Path:
    return Path().home() / ".collectkit.json"


class Settings(BaseModel):
    LOG_LEVEL: str = "INFO"
    ATOMIC_SEED: bool = False
    SETTINGS_PATH: Path = Field(default_factory=_default_settings_path)

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {value}"
            )
        return value

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Build settings from the optional JSON file, then environment overrides.

        Environment variables win over the file: ``COLLECTKIT_LOG_LEVEL``
        (falling back to ``LOG_LEVEL``) and ``COLLECTKIT_ATOMIC_SEED``.
        """
        settings_path = Path(path) if path is not None else _default_settings_path()

        values = {}
        if settings_path.exists():
            with open(settings_path, "r") as f:
                values.update(json.load(f))

        log_level = os.getenv("COLLECTKIT_LOG_LEVEL") or os.getenv("LOG_LEVEL")
        if log_level:
            values["LOG_LEVEL"] = log_level

        atomic_seed = os.getenv("COLLECTKIT_ATOMIC_SEED")
        if atomic_seed:
            values["ATOMIC_SEED"] = atomic_seed

        values["SETTINGS_PATH"] = settings_path
        return cls(**values)


settings = Settings.load()
