"""Render the shared content template once per content item."""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path, PurePosixPath

from sitepress._constants import ASSETS_DIR

from .importer import ContentImporter
from .link_rewriter import prefix_html_paths, relative_root

if typ.TYPE_CHECKING:
    from sitepress.context import BuildContext

    from .renderer import Renderer


class ContentBuilder:
    """Emit ``<dest>/<dir>/index.html`` and assets for each content item."""

    def __init__(self, context: BuildContext, renderer: Renderer) -> None:
        self.context = context
        self.renderer = renderer

    @property
    def enabled(self) -> bool:
        """Return True when a shared content template was found."""
        return self.context.content_template is not None

    def build(self, dir_rel_path: str) -> Path | None:
        """Render one content item and copy its assets.

        Parameters
        ----------
        dir_rel_path : str
            ``/``-separated item directory, a key of ``content_obj``.

        Returns
        -------
        Path or None
            Path of the written ``index.html``; ``None`` when the build has no
            content template.

        Raises
        ------
        TemplateRenderError
            If the content template fails to render.
        OSError
            If the output directory, HTML file, or assets cannot be written.
        """
        if self.context.content_template is None:
            return None

        config = self.context.config
        record = self.context.index.by_path[dir_rel_path]
        parts = PurePosixPath(dir_rel_path).parts
        output_dir = config.destination_path.joinpath(*parts)
        output_dir.mkdir(parents=True, exist_ok=True)

        variables = {
            **self.context.vars,
            "path": record.path,
            "root": record.root,
            "meta": record,
        }
        view = {
            **variables,
            "import_content": ContentImporter(
                config.content_path, variables, self.renderer
            ),
        }
        html = self.renderer.render_template(
            self.context.content_template,
            view,
            base_path=config.content_template_path.parent,
            source_path=config.content_template_path,
        )

        if len(parts) > 1:
            html = prefix_html_paths(
                html, relative_root(len(parts) - 1), skip_prefix=record.root
            )

        output_path = output_dir / "index.html"
        output_path.write_text(html, encoding="utf-8")

        assets_source = config.content_path.joinpath(*parts, ASSETS_DIR)
        if assets_source.is_dir():
            shutil.copytree(assets_source, output_dir / ASSETS_DIR, dirs_exist_ok=True)
        return output_path

    def build_all(self) -> list[Path]:
        """Render every indexed item, newest first; no-op without a template."""
        if not self.enabled:
            return []
        written: list[Path] = []
        for record in self.context.index.ordered:
            output_path = self.build(record.path)
            if output_path is not None:
                written.append(output_path)
        return written


__all__ = ["ContentBuilder"]
