"""Typed dataclasses describing sitepress site configuration."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path

from sitepress._constants import (
    CONTENT_TEMPLATE_DIR,
    CONTENT_TEMPLATE_STEM,
    DEFAULT_TEMPLATE_EXTENSION,
)


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class LogLevel(enum.StrEnum):
    """Verbosity of build diagnostics printed to stdout."""

    MINIMUM = "minimum"
    COMPLETE = "complete"


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved locations and options for a single site build.

    Attributes
    ----------
    source_path : Path
        Directory holding page templates, partials, static files, and the
        shared content template.
    content_path : Path
        Directory whose subdirectories hold markdown content items.
    destination_path : Path
        Output directory the rendered site is written into.
    template_extension : str
        File extension identifying page templates (``".jinja"`` by default).
    plugins : list[str]
        Plugin identifiers, either dotted module names or ``.py`` paths, in
        the order their hooks run.
    global_meta : dict[str, Any]
        Free-form values exposed to every template as ``global_meta``.
    logs : LogLevel
        Diagnostic verbosity.
    root_dir : Path
        Directory relative plugin paths are resolved against.
    """

    source_path: Path = Path("theme")
    content_path: Path = Path("content")
    destination_path: Path = Path("dist")
    template_extension: str = DEFAULT_TEMPLATE_EXTENSION
    plugins: list[str] = dc.field(default_factory=list)
    global_meta: dict[str, typ.Any] = dc.field(default_factory=dict)
    logs: LogLevel = LogLevel.MINIMUM
    root_dir: Path = Path()

    @property
    def content_template_path(self) -> Path:
        """Return the conventional location of the shared content template."""
        return (
            self.source_path
            / CONTENT_TEMPLATE_DIR
            / f"{CONTENT_TEMPLATE_STEM}{self.template_extension}"
        )


__all__ = ["LogLevel", "SiteConfig", "SiteConfigError"]
