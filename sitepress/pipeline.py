"""Run a site build as an ordered list of stages.

The build is a fixed sequence:

``index``
    Scan the content tree, load the shared content template, and build the
    :class:`~sitepress.context.BuildContext`.
``before-hooks``
    Resolve plugins and run their ``before_build`` hooks in order.
``copy-static``
    Mirror static files from the source tree into the destination and
    write the code-highlighting stylesheet.
``render-pages``
    Render every page template.
``render-content``
    Render the content template once per content item, newest first.
``after-hooks``
    Run plugin ``after_build`` hooks in order.

The driver stops at the first stage that raises. Output written by earlier
stages stays on disk; nothing is rolled back.

Example
-------
>>> from pathlib import Path
>>> from sitepress.config import load_site_config
>>> from sitepress.pipeline import BuildPipeline
>>> report = BuildPipeline(load_site_config(Path("site.yaml"))).run()  # doctest: +SKIP
>>> report.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from sitepress.context import BuildContext, create_build_context
from sitepress.generator import (
    ContentBuilder,
    PageBuilder,
    Renderer,
    copy_static_files,
    discover_pages,
    write_code_stylesheet,
)
from sitepress.plugins import Plugin, PluginRunner, load_plugins

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sitepress.config import SiteConfig

STAGES = (
    "index",
    "before-hooks",
    "copy-static",
    "render-pages",
    "render-content",
    "after-hooks",
)


@dc.dataclass(slots=True)
class StageResult:
    """Outcome of a single pipeline stage."""

    name: str
    written: list[Path] = dc.field(default_factory=list)
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dc.dataclass(slots=True)
class BuildReport:
    """Results of every stage that ran, in order."""

    stages: list[StageResult] = dc.field(default_factory=list)
    context: BuildContext | None = None

    @property
    def ok(self) -> bool:
        return all(stage.ok for stage in self.stages)

    @property
    def failed_stage(self) -> StageResult | None:
        return next((stage for stage in self.stages if not stage.ok), None)

    @property
    def error(self) -> BaseException | None:
        failed = self.failed_stage
        return failed.error if failed else None

    @property
    def written(self) -> list[Path]:
        """Return every file written by the build, in write order."""
        return [path for stage in self.stages for path in stage.written]

    def raise_for_error(self) -> None:
        """Re-raise the original exception of the failed stage, if any."""
        error = self.error
        if error is not None:
            raise error


class BuildPipeline:
    """Drive the build stages for one site configuration."""

    def __init__(self, config: SiteConfig, *, renderer: Renderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or Renderer(config.source_path)
        self.context: BuildContext | None = None
        self.plugins: list[Plugin] = []

    def run(self) -> BuildReport:
        """Execute every stage until one fails.

        Returns
        -------
        BuildReport
            Per-stage results. A failed stage carries the exception it raised;
            later stages are not attempted.
        """
        report = BuildReport()
        steps: dict[str, typ.Callable[[], list[Path]]] = {
            "index": self._index,
            "before-hooks": self._before_hooks,
            "copy-static": self._copy_static,
            "render-pages": self._render_pages,
            "render-content": self._render_content,
            "after-hooks": self._after_hooks,
        }
        for name in STAGES:
            result = StageResult(name=name)
            report.stages.append(result)
            try:
                result.written = steps[name]()
            except Exception as exc:  # noqa: BLE001 - recorded and re-raised by callers
                result.error = exc
                break
            finally:
                report.context = self.context
        return report

    def _require_context(self) -> BuildContext:
        if self.context is None:  # pragma: no cover - stages run in order
            msg = "The index stage has not run."
            raise RuntimeError(msg)
        return self.context

    def _index(self) -> list[Path]:
        self.context = create_build_context(self.config)
        return []

    def _before_hooks(self) -> list[Path]:
        self.plugins = load_plugins(self.config.plugins, self.config.root_dir)
        PluginRunner(self.plugins).run_before_build(self._require_context())
        return []

    def _copy_static(self) -> list[Path]:
        written = copy_static_files(self.config)
        stylesheet = write_code_stylesheet(self.config, self.renderer.html.stylesheet)
        if stylesheet is not None:
            written.append(stylesheet)
        return written

    def _render_pages(self) -> list[Path]:
        context = self._require_context()
        builder = PageBuilder(context, self.renderer)
        return [
            builder.build(page)
            for page in discover_pages(
                self.config.source_path, self.config.template_extension
            )
        ]

    def _render_content(self) -> list[Path]:
        return ContentBuilder(self._require_context(), self.renderer).build_all()

    def _after_hooks(self) -> list[Path]:
        PluginRunner(self.plugins).run_after_build(self._require_context())
        return []


def build_site(config: SiteConfig) -> BuildReport:
    """Build the site described by ``config``, raising on the first failure.

    Raises
    ------
    SitepressError
        For metadata, template, markdown, page, and plugin-loading failures.
    OSError
        For filesystem failures, carrying the failing path.
    Exception
        Whatever a plugin hook raised, unchanged.
    """
    report = BuildPipeline(config).run()
    report.raise_for_error()
    return report


__all__ = ["STAGES", "BuildPipeline", "BuildReport", "StageResult", "build_site"]
