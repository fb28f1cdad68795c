"""Configuration model and the `~/.shsuggest` dotfile loader."""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from shsuggest.common.errors import ConfigError

LOGGER = logging.getLogger("shsuggest.config")

DOTFILE = ".shsuggest"
CONFIG_ENV = "SHSUGGEST_CONFIG"


class Config(BaseModel):
    """Settings consumed by the client and the CLI."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    model: str = "gemma3"
    ollama_endpoint: str = "http://127.0.0.1:11434"
    num_suggestions: int = 1
    temperature: float = 0.3
    num_thread: int | None = None
    pipe_first_into: str | None = None
    request_timeout: int = 30

    @field_validator("ollama_endpoint")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("num_suggestions", "request_timeout")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)

    @field_validator("num_thread")
    @classmethod
    def _positive_or_none(cls, value: int | None) -> int | None:
        return value if value is not None and value > 0 else None

    @field_validator("pipe_first_into")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_values(cls, values: dict[str, Any]) -> "Config":
        # null on a non-optional setting falls back to its default
        values = {
            key: value for key, value in values.items()
            if value is not None or (key in cls.model_fields and cls.model_fields[key].default is None)
        }
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def normalize_value(raw: str) -> Any:
    """
    Read a dotfile value as a YAML scalar.

    Numbers become int/float, `null`, `~`, `none` and empty become None;
    anything else is kept as text with surrounding quotes removed.
    """
    raw = raw.strip()
    if raw.lower() == "none":
        return None
    try:
        value = yaml.safe_load(raw) if raw else None
    except yaml.YAMLError:
        value = raw
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return raw.strip("\"'")


class ConfigLoader:
    """Loads `key = value` settings from the user's dotfile."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        if path is None:
            path = os.environ.get(CONFIG_ENV) or None
        if path is None:
            home = os.environ.get("HOME") or os.environ.get("USERPROFILE")
            if not home:
                raise ConfigError("Unable to determine home directory for configuration file.")
            path = Path(home) / DOTFILE
        self.path = Path(path)

    def load(self) -> Config:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            LOGGER.debug("No readable config at %s; using defaults", self.path)
            return Config()

        values: dict[str, Any] = {}
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith(("#", ";")) or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            if key:
                values[key] = normalize_value(value)
        LOGGER.debug("Loaded %d config keys from %s", len(values), self.path)
        return Config.from_values(values)
