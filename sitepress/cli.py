"""Cyclopts CLI entrypoint for building sitepress sites.

The ``sitepress`` console script defined here reads ``site.yaml``, runs the
build pipeline, and reports every file it wrote. Typical usage involves running
``sitepress build`` locally or in CI.

Examples
--------
Build the site described by ``site.yaml`` in the working directory:

>>> from sitepress.cli import main
>>> main()  # doctest: +SKIP

Build another project with verbose plugin diagnostics:

>>> from sitepress.cli import app
>>> app(["build", "--config", "blog/site.yaml", "--logs", "complete"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import traceback
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import DEFAULT_CONFIG_NAME, LogLevel, load_site_config
from .pipeline import BuildPipeline

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_NAME)

app = App(name="sitepress", config=cyclopts.config.Env("SITEPRESS_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render pages and content into the destination directory.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="SITEPRESS_CONFIG")
    ] = DEFAULT_CONFIG,
    logs: typ.Annotated[
        LogLevel | None,
        Parameter(help="Diagnostic verbosity (minimum or complete)"),
    ] = None,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``SITEPRESS_CONFIG``). A missing file means conventional defaults.
    logs : LogLevel or None, optional
        Override for the configured log level.

    Returns
    -------
    None
        Writes the site and prints every written path.

    Raises
    ------
    SystemExit
        With status 1 when a stage fails, after printing the stage name and
        the original traceback. Output written before the failure is left
        in place.
    """
    site_config = load_site_config(config)
    if logs is not None:
        site_config.logs = logs

    report = BuildPipeline(site_config).run()
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    failed = report.failed_stage
    if failed is not None:
        print(f"error in {failed.name}: {failed.error}", file=sys.stderr)
        if failed.error is not None:
            traceback.print_exception(failed.error, file=sys.stderr)
        raise SystemExit(1)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sitepress`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
