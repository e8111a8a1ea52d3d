"""Layered configuration models and loader.

Configuration is assembled from up to two YAML documents: an optional
system-wide file and one local file (explicit path, working directory, or
per-user config directory, in that order). Scalars in the later document win;
``system_prompts`` and ``services`` are merged key by key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from askme.errors import ConfigError, MissingConfigField, NoConfigurationFound
from askme.runtime_paths import global_config_path, local_config_candidates

_LOGGER = logging.getLogger(__name__)

_V = TypeVar("_V")


def _scalar_text(value: Any) -> Any:
    """Return YAML-resolved scalars (numbers, booleans, dates) as text."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class ServiceSpec(BaseModel):
    """One named provider endpoint declared under ``services``."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    provider_class: str = Field(alias="class")
    url: str | None = None
    model: str | None = None
    api_key: str | None = None
    system_prompt: str | None = None
    description: str | None = None

    @field_validator(
        "provider_class",
        "url",
        "model",
        "api_key",
        "system_prompt",
        "description",
        mode="before",
    )
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        return _scalar_text(value)


class PartialConfiguration(BaseModel):
    """A single configuration layer; every field is optional."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    default_service: str | None = None
    default_prompt: str | None = None
    system_prompts: dict[str, str] | None = None
    services: dict[str, ServiceSpec] | None = None

    @field_validator("default_service", "default_prompt", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        return _scalar_text(value)

    @field_validator("system_prompts", mode="before")
    @classmethod
    def _coerce_prompts(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {_scalar_text(key): _scalar_text(text) for key, text in value.items()}

    @field_validator("services", mode="before")
    @classmethod
    def _coerce_service_names(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {_scalar_text(key): service for key, service in value.items()}

    def merge(self, other: PartialConfiguration) -> PartialConfiguration:
        """Return a new layer with ``other`` applied on top of this one."""

        return PartialConfiguration(
            default_service=(
                other.default_service
                if other.default_service is not None
                else self.default_service
            ),
            default_prompt=(
                other.default_prompt if other.default_prompt is not None else self.default_prompt
            ),
            system_prompts=_extend(self.system_prompts, other.system_prompts),
            services=_extend(self.services, other.services),
        )

    def to_configuration(self) -> Configuration:
        """Validate required scalars and build the final configuration."""

        if not self.default_service:
            raise MissingConfigField("default_service")
        if not self.default_prompt:
            raise MissingConfigField("default_prompt")
        return Configuration(
            default_service=self.default_service,
            default_prompt=self.default_prompt,
            system_prompts=dict(self.system_prompts or {}),
            services=dict(self.services or {}),
        )


class Configuration(BaseModel):
    """Merged, immutable configuration for one invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_service: str = Field(min_length=1)
    default_prompt: str = Field(min_length=1)
    system_prompts: dict[str, str] = Field(default_factory=dict)
    services: dict[str, ServiceSpec] = Field(default_factory=dict)

    @classmethod
    def load(cls, explicit_path: str | Path | None = None) -> Configuration:
        """Load configuration from the standard locations."""

        return load_config(explicit_path)


def _extend(
    base: Mapping[str, _V] | None, override: Mapping[str, _V] | None
) -> dict[str, _V] | None:
    if override is None:
        return dict(base) if base is not None else None
    merged = dict(base or {})
    merged.update(override)
    return merged


def _format_validation_error(path: Path, error: ValidationError) -> str:
    lines = [f"Configuration validation failed for '{path}':"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}")
    return "\n".join(lines)


def load_partial(path: str | Path) -> PartialConfiguration:
    """Parse one YAML configuration layer."""

    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Unable to read config file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{config_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file '{config_path}' must contain a top-level mapping/object."
        )

    try:
        return PartialConfiguration.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(config_path, exc)) from exc


def _select_local_path(explicit_path: str | Path | None, checked: list[Path]) -> Path | None:
    if explicit_path is not None:
        path = Path(explicit_path).expanduser()
        checked.append(path)
        return path

    for candidate in local_config_candidates():
        checked.append(candidate)
        if candidate.is_file():
            return candidate
    return None


def load_config(explicit_path: str | Path | None = None) -> Configuration:
    """Load and merge the global and local configuration layers.

    A global file that cannot be read or parsed is skipped. A local file,
    whether explicit or discovered, must load cleanly.
    """

    merged = PartialConfiguration()
    loaded_any = False
    checked: list[Path] = []

    global_path = global_config_path()
    if global_path is not None:
        checked.append(global_path)
        if global_path.is_file():
            try:
                merged = merged.merge(load_partial(global_path))
            except ConfigError as exc:
                _LOGGER.debug("Skipping global config %s: %s", global_path, exc)
            else:
                loaded_any = True
                _LOGGER.debug("Loaded global config: %s", global_path)

    local_path = _select_local_path(explicit_path, checked)
    if local_path is not None:
        merged = merged.merge(load_partial(local_path))
        _LOGGER.debug("Loaded local config: %s", local_path)
    elif not loaded_any:
        raise NoConfigurationFound(checked)

    return merged.to_configuration()
