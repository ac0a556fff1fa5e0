"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tool_inspector.config.domain.config import InspectorConfig
from tool_inspector.config.domain.observer import ConfigObserver
from tool_inspector.config.infrastructure.env_interpolation import (
    collect_defaulted_vars,
    collect_missing_vars,
    interpolate,
)
from tool_inspector.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an InspectorConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> InspectorConfig:
        """
        Load, interpolate, validate, and return an InspectorConfig.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references without a default
                are unset (all collected first).
            ConfigValidationError: if the schema is violated.
        """
        raw = _parse_yaml(path=path)
        missing = collect_missing_vars(raw)
        if missing:
            raise MissingEnvVarsError(missing)
        for variable in collect_defaulted_vars(raw):
            self._observer.config_default_used(variable=variable)

        cfg = _build_config(resolved=interpolate(raw))
        self._observer.config_loaded(
            name=cfg.name,
            server_type=cfg.mcp_server.type,
            model=cfg.model.model,
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(path=path, reason="top-level mapping expected")
    return data


def _build_config(resolved: Any) -> InspectorConfig:
    try:
        return InspectorConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
