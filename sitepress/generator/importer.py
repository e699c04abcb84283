"""Expose markdown imports to templates as a small callable value."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path, PurePosixPath

from markupsafe import Markup

if typ.TYPE_CHECKING:
    from .renderer import Renderer


@dc.dataclass(frozen=True, slots=True)
class ContentImporter:
    """Render markdown files under the content root on behalf of a template.

    Templates receive an instance as ``import_content`` and call it with a
    path relative to the content root::

        {{ import_content("posts/hello/index.md") }}

    The markdown is rendered with ``variables`` (the same globals the calling
    template sees, minus per-render overrides) and converted to HTML.
    """

    content_root: Path
    variables: typ.Mapping[str, typ.Any]
    renderer: Renderer

    def __call__(self, rel_path: str) -> Markup:
        """Return the rendered HTML of ``rel_path`` as safe markup."""
        return Markup(self.render(rel_path))  # noqa: S704 - rendered by our converter

    def render(self, rel_path: str) -> str:
        """Read, template, and convert the markdown file at ``rel_path``.

        Raises
        ------
        FileNotFoundError
            If the file does not exist under the content root.
        TemplateRenderError, MarkdownParseError
            Propagated from the renderer, tagged with the file path.
        """
        source = self.content_root.joinpath(*PurePosixPath(rel_path).parts)
        text = source.read_text(encoding="utf-8")
        return self.renderer.render_markdown(
            text,
            self.variables,
            base_path=source.parent,
            source_path=source,
        )


__all__ = ["ContentImporter"]
