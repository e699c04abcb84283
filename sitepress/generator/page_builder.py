"""Render top-level page templates into static HTML.

Pages are every template file under the site source root apart from the
shared content template directory and ``_``-prefixed partials. Each page is
rendered once with the build globals plus a ``root`` prefix matching its
output depth and an ``import_content`` helper. The landing page (``index``)
additionally receives prefetch hints for the resources the content template
references, so visitors start loading article styles before clicking through.

Example
-------
>>> from sitepress.generator import PageBuilder
>>> builder = PageBuilder(context, renderer)  # doctest: +SKIP
>>> builder.build("blog/archive")  # doctest: +SKIP
PosixPath('dist/blog/archive.html')
"""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePosixPath

from sitepress._constants import CONTENT_TEMPLATE_DIR, INDEX_PAGE
from sitepress.errors import PageTemplateNotFoundError

from .importer import ContentImporter
from .link_rewriter import inject_prefetch_links, relative_root

if typ.TYPE_CHECKING:
    from sitepress.context import BuildContext

    from .renderer import Renderer


def _is_partial(rel_path: PurePosixPath) -> bool:
    return rel_path.name.startswith("_")


def is_page_template(rel_path: PurePosixPath, extension: str) -> bool:
    """Return True when ``rel_path`` (relative to the source root) is a page."""
    return (
        rel_path.name.endswith(extension)
        and len(rel_path.name) > len(extension)
        and CONTENT_TEMPLATE_DIR not in rel_path.parts[:-1]
        and not _is_partial(rel_path)
    )


def discover_pages(source_root: Path, extension: str) -> list[str]:
    """List page templates under ``source_root`` without their extension.

    Returns
    -------
    list[str]
        Sorted ``/``-separated paths such as ``["about", "blog/index"]``.
    """
    if not source_root.is_dir():
        return []
    pages: list[str] = []
    for file_path in source_root.rglob(f"*{extension}"):
        if not file_path.is_file():
            continue
        rel_path = PurePosixPath(file_path.relative_to(source_root).as_posix())
        if is_page_template(rel_path, extension):
            pages.append(rel_path.as_posix()[: -len(extension)])
    return sorted(pages)


class PageBuilder:
    """Render individual page templates for a build."""

    def __init__(self, context: BuildContext, renderer: Renderer) -> None:
        self.context = context
        self.renderer = renderer

    def build(self, page_rel_path: str) -> Path:
        """Render one page and write it next to its mirrored location.

        Parameters
        ----------
        page_rel_path : str
            ``/``-separated page path relative to the source root, without the
            template extension.

        Returns
        -------
        Path
            Path of the written ``.html`` file.

        Raises
        ------
        PageTemplateNotFoundError
            If the template file does not exist.
        TemplateRenderError
            If rendering fails.
        """
        config = self.context.config
        rel_path = PurePosixPath(page_rel_path)
        template_path = config.source_path.joinpath(
            *rel_path.parent.parts, f"{rel_path.name}{config.template_extension}"
        )
        if not template_path.is_file():
            raise PageTemplateNotFoundError(template_path)
        page_template = template_path.read_text(encoding="utf-8")

        if page_rel_path == INDEX_PAGE:
            page_template = inject_prefetch_links(
                self.context.content_template, page_template
            )

        variables = self.context.vars
        view = {
            **variables,
            "root": relative_root(len(rel_path.parent.parts)),
            "import_content": ContentImporter(
                config.content_path, variables, self.renderer
            ),
        }
        html = self.renderer.render_template(
            page_template,
            view,
            base_path=template_path.parent,
            source_path=template_path,
        )

        output_path = config.destination_path.joinpath(
            *rel_path.parent.parts, f"{rel_path.name}.html"
        )
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path


__all__ = ["PageBuilder", "discover_pages", "is_page_template"]
