"""Recursive ${ENV_VAR} / ${ENV_VAR:-default} interpolation for raw config data."""

import os
import re
from typing import TypeAlias

_ENV_VAR_PATTERN = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
)

RawValue: TypeAlias = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def _walk_strings(data: RawValue) -> list[str]:
    if isinstance(data, str):
        return [data]
    if isinstance(data, list):
        return [text for item in data for text in _walk_strings(item)]
    if isinstance(data, dict):
        return [text for value in data.values() for text in _walk_strings(value)]
    return []


def collect_missing_vars(data: RawValue) -> list[str]:
    """
    Return the names of all referenced env vars that are unset and carry no
    default. Every missing var is collected before returning, in order of
    first reference.
    """
    missing: list[str] = []
    for text in _walk_strings(data):
        for match in _ENV_VAR_PATTERN.finditer(text):
            name = match.group("name")
            if match.group("default") is not None or name in os.environ:
                continue
            if name not in missing:
                missing.append(name)
    return missing


def collect_defaulted_vars(data: RawValue) -> list[str]:
    """Return the names of unset env vars that will fall back to their default."""
    defaulted: list[str] = []
    for text in _walk_strings(data):
        for match in _ENV_VAR_PATTERN.finditer(text):
            name = match.group("name")
            if match.group("default") is None or name in os.environ:
                continue
            if name not in defaulted:
                defaulted.append(name)
    return defaulted


def _substitute(match: re.Match[str]) -> str:
    name = match.group("name")
    if name in os.environ:
        return os.environ[name]
    return match.group("default") or ""


def interpolate(data: RawValue) -> RawValue:
    """
    Recursively substitute every ${ENV_VAR} occurrence with its runtime value,
    or with the inline default for ${ENV_VAR:-default}.

    Call `collect_missing_vars` first: a bare reference to an unset variable
    is substituted with an empty string here.
    """
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(_substitute, data)
    if isinstance(data, list):
        return [interpolate(item) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value) for key, value in data.items()}
    return data
