"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from sitepress._constants import DEFAULT_TEMPLATE_EXTENSION

from .helpers import (
    _normalize_extension,
    _parse_global_meta,
    _parse_log_level,
    _parse_plugins,
    _resolve_path,
)
from .models import SiteConfig, SiteConfigError

DEFAULT_CONFIG_NAME = "site.yaml"


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing where a site lives.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``). Relative paths inside the file are resolved against
        the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration. When ``path`` does not exist the conventional
        defaults (``theme``, ``content``, ``dist``) are returned, anchored at
        the directory that would have held the file.

    Raises
    ------
    SiteConfigError
        If the top-level YAML structure is not a mapping or a field is
        invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sitepress.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.destination_path.name  # doctest: +SKIP
    'dist'
    """
    root_dir = path.parent
    raw: dict[str, typ.Any] = {}
    if path.exists():
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict):
            msg = f"Top-level YAML structure in '{path}' must be a mapping."
            raise SiteConfigError(msg)
        raw = dict(loaded)

    return SiteConfig(
        source_path=_resolve_path(
            root_dir, raw.get("source_path", "theme"), field="source_path"
        ),
        content_path=_resolve_path(
            root_dir, raw.get("content_path", "content"), field="content_path"
        ),
        destination_path=_resolve_path(
            root_dir, raw.get("destination_path", "dist"), field="destination_path"
        ),
        template_extension=_normalize_extension(
            raw.get("template_extension", DEFAULT_TEMPLATE_EXTENSION)
        ),
        plugins=_parse_plugins(raw.get("plugins")),
        global_meta=_parse_global_meta(raw.get("global_meta")),
        logs=_parse_log_level(raw.get("logs")),
        root_dir=root_dir,
    )


__all__ = ["DEFAULT_CONFIG_NAME", "load_site_config"]
