"""Load and validate site configuration YAML for sitepress builds.

This subpackage parses the project's ``site.yaml`` file, applies the
conventional defaults for missing entries, resolves relative paths against the
file's directory, and produces a :class:`SiteConfig` that the build pipeline
consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sitepress.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> site.content_template_path.name  # doctest: +SKIP
'index.jinja'
"""

from .loader import DEFAULT_CONFIG_NAME, load_site_config
from .models import LogLevel, SiteConfig, SiteConfigError

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "LogLevel",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
