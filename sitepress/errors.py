"""Exception hierarchy raised by the sitepress build pipeline."""

from __future__ import annotations

from pathlib import Path


class SitepressError(RuntimeError):
    """Base class for every fatal build error raised by sitepress."""


class MetadataParseError(SitepressError):
    """Raised when a content directory carries malformed explicit metadata."""

    def __init__(self, directory: str | Path, reason: str) -> None:
        self.directory = str(directory)
        self.reason = reason
        super().__init__(f"Invalid metadata in '{self.directory}': {reason}")


class _SourceTaggedError(SitepressError):
    """Error tagged with the template or markdown source that triggered it."""

    kind = "source"

    def __init__(self, source_path: str | Path | None, reason: str) -> None:
        self.source_path = str(source_path) if source_path is not None else None
        self.reason = reason
        location = self.source_path or "<string>"
        super().__init__(f"Failed to render {self.kind} '{location}': {reason}")


class TemplateRenderError(_SourceTaggedError):
    """Raised when Jinja fails to compile or render a template."""

    kind = "template"


class MarkdownParseError(_SourceTaggedError):
    """Raised when the markdown converter rejects a content body."""

    kind = "markdown"


class PageTemplateNotFoundError(SitepressError):
    """Raised when a page template requested for rendering is missing."""

    def __init__(self, template_path: Path) -> None:
        self.template_path = template_path
        super().__init__(f"Page template '{template_path}' not found.")


class PluginLoadError(SitepressError):
    """Raised when a configured plugin identifier cannot be resolved."""


class AsyncHookError(SitepressError):
    """Raised when a coroutine hook cannot be driven because a loop is running."""

    def __init__(self, plugin_name: str) -> None:
        self.plugin_name = plugin_name
        super().__init__(
            f"Plugin '{plugin_name}' returned a coroutine while an event loop is "
            "running; run the build outside the loop, e.g. with asyncio.to_thread."
        )


__all__ = [
    "AsyncHookError",
    "MarkdownParseError",
    "MetadataParseError",
    "PageTemplateNotFoundError",
    "PluginLoadError",
    "SitepressError",
    "TemplateRenderError",
]
