"""Utility helpers shared by the sitepress configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from .models import LogLevel, SiteConfigError


def _resolve_path(base: Path, value: object, *, field: str) -> Path:
    """Return ``value`` as a path anchored at ``base`` unless already absolute."""
    if not isinstance(value, str | Path) or not str(value).strip():
        msg = f"'{field}' must be a non-empty path string."
        raise SiteConfigError(msg)
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return base / path


def _normalize_extension(value: object) -> str:
    """Return a template extension that always starts with a dot."""
    if not isinstance(value, str) or not value.strip(".").strip():
        msg = "'template_extension' must be a non-empty string such as '.jinja'."
        raise SiteConfigError(msg)
    text = value.strip()
    return text if text.startswith(".") else f".{text}"


def _parse_plugins(value: object) -> list[str]:
    """Normalize the plugin list into non-empty identifier strings."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = "'plugins' must be a list of module names or file paths."
        raise SiteConfigError(msg)
    plugins: list[str] = []
    for entry in value:
        text = str(entry).strip()
        if text:
            plugins.append(text)
    return plugins


def _parse_global_meta(value: object) -> dict[str, typ.Any]:
    """Return a plain dict copy of the ``global_meta`` mapping."""
    if value is None:
        return {}
    if not isinstance(value, typ.Mapping):
        msg = "'global_meta' must be a mapping."
        raise SiteConfigError(msg)
    return {str(key): item for key, item in value.items()}


def _parse_log_level(value: object) -> LogLevel:
    """Coerce a raw ``logs`` setting into a :class:`LogLevel`."""
    if value is None:
        return LogLevel.MINIMUM
    try:
        return LogLevel(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(level.value for level in LogLevel)
        msg = f"'logs' must be one of: {choices}."
        raise SiteConfigError(msg) from exc


def _parse_timestamp(value: dt.datetime | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "_normalize_extension",
    "_parse_global_meta",
    "_parse_log_level",
    "_parse_plugins",
    "_parse_timestamp",
    "_resolve_path",
]
