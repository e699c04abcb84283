"""Per-build state shared by every stage of the pipeline."""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ

from sitepress.config import LogLevel, SiteConfig
from sitepress.content import ContentIndex, build_content_index

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(slots=True)
class BuildContext:
    """Everything a build needs, constructed once and passed by reference.

    Attributes
    ----------
    config : SiteConfig
        Resolved site configuration.
    index : ContentIndex
        Content metadata, built before any render starts.
    content_template : str or None
        Raw text of the shared content template; ``None`` disables content
        rendering for the whole build.
    vars : dict[str, Any]
        Globals visible to every render: ``content_array``, ``content_obj``,
        ``global_meta``, and anything plugins add in ``before_build``.
    logs : LogLevel
        Diagnostic verbosity; may be raised by plugins.
    """

    config: SiteConfig
    index: ContentIndex
    content_template: str | None
    vars: dict[str, typ.Any]
    logs: LogLevel = LogLevel.MINIMUM

    @property
    def content_template_path(self) -> Path:
        return self.config.content_template_path

    @property
    def source_path(self) -> Path:
        return self.config.source_path

    @property
    def content_path(self) -> Path:
        return self.config.content_path

    @property
    def destination_path(self) -> Path:
        return self.config.destination_path


def create_build_context(config: SiteConfig) -> BuildContext:
    """Index the content tree and load the shared content template.

    The returned context owns a deep copy of ``config.global_meta`` so plugins
    mutating ``vars["global_meta"]`` never alter the loaded configuration.
    """
    index = build_content_index(config.content_path)
    template_path = config.content_template_path
    content_template = None
    if template_path.is_file():
        content_template = template_path.read_text(encoding="utf-8")
    return BuildContext(
        config=config,
        index=index,
        content_template=content_template,
        vars={
            "content_array": list(index.ordered),
            "content_obj": dict(index.by_path),
            "global_meta": copy.deepcopy(config.global_meta),
        },
        logs=config.logs,
    )


__all__ = ["BuildContext", "create_build_context"]
