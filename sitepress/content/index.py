"""Aggregate content metadata into an ordered, addressable index."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from sitepress._constants import CONTENT_EXTENSIONS

from .meta import MetaRecord, load_content_meta


@dc.dataclass(frozen=True, slots=True)
class ContentIndex:
    """Every content item discovered under the content root.

    Attributes
    ----------
    by_path : Mapping[str, MetaRecord]
        Records keyed by their ``/``-separated directory path.
    ordered : tuple[MetaRecord, ...]
        The same records, newest ``created_at`` first. Items created at the
        same instant keep their scan order.
    """

    by_path: typ.Mapping[str, MetaRecord] = dc.field(default_factory=dict)
    ordered: tuple[MetaRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.by_path)


def find_content_directories(content_root: Path) -> list[str]:
    """Return ``/``-separated directories holding at least one content file.

    Files placed directly in ``content_root`` are ignored because they have no
    addressable directory. Each directory is listed once, in sorted scan
    order.
    """
    directories: dict[str, None] = {}
    for file_path in sorted(content_root.rglob("*")):
        if not file_path.is_file() or file_path.suffix.lower() not in CONTENT_EXTENSIONS:
            continue
        rel_dir = file_path.parent.relative_to(content_root)
        if rel_dir == Path():
            continue
        directories.setdefault(rel_dir.as_posix(), None)
    return list(directories)


def build_content_index(content_root: Path) -> ContentIndex:
    """Scan ``content_root`` and build the content index.

    Parameters
    ----------
    content_root : Path
        Root of the content tree. A missing directory yields an empty index.

    Returns
    -------
    ContentIndex
        Keyed lookup plus the ``created_at``-descending ordering.

    Raises
    ------
    MetadataParseError
        Propagated from :func:`~sitepress.content.meta.load_content_meta`.
    """
    if not content_root.is_dir():
        return ContentIndex()

    by_path = {
        rel_dir: load_content_meta(content_root, rel_dir)
        for rel_dir in find_content_directories(content_root)
    }
    ordered = tuple(
        sorted(by_path.values(), key=lambda record: record.created_at, reverse=True)
    )
    return ContentIndex(by_path=by_path, ordered=ordered)


__all__ = ["ContentIndex", "build_content_index", "find_content_directories"]
