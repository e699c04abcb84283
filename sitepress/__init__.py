"""Static-site builder that renders Jinja pages and markdown content trees.

This package exposes the CLI entry points used by the ``sitepress`` console
script and the programmatic :func:`build_site` helper.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build_site``: Run the full build pipeline for a loaded configuration.

Examples
--------
>>> from sitepress import main
>>> main()  # doctest: +SKIP
>>> from sitepress import build_site
>>> from sitepress.config import load_site_config
>>> build_site(load_site_config(Path("site.yaml")))  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .pipeline import build_site

__all__ = ["app", "build_site", "main"]
