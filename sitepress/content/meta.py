"""Read per-item metadata for content directories.

Each content item is a directory below the content root. Its metadata is the
merge of generated defaults (derived from the directory name) with an optional
explicit source: ``meta.json`` or, when no JSON file exists, a ``meta.py``
module exposing a ``meta`` mapping. Filesystem timestamps fill in creation and
modification dates unless the explicit source pins them through the reserved
``$createdAt`` / ``$modifiedAt`` keys.

Example
-------
>>> from pathlib import Path
>>> from sitepress.content.meta import load_content_meta
>>> record = load_content_meta(Path("content"), "posts/hello")  # doctest: +SKIP
>>> record.title, record.root  # doctest: +SKIP
('hello', '../..')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import importlib.util
import json
import typing as typ
from pathlib import Path, PurePath, PurePosixPath

from sitepress._constants import (
    CREATED_AT_KEY,
    DEFAULT_DESCRIPTION_TEMPLATE,
    META_JSON,
    META_PY,
    META_PY_ATTRIBUTE,
    MODIFIED_AT_KEY,
)
from sitepress.config.helpers import _parse_timestamp
from sitepress.errors import MetadataParseError
from sitepress.generator.link_rewriter import relative_root

RESERVED_KEYS = (CREATED_AT_KEY, MODIFIED_AT_KEY)


@dc.dataclass(slots=True)
class MetaRecord:
    """Metadata describing a single content item.

    Attributes
    ----------
    slug : str
        Final path segment of the content directory.
    title : Any
        Explicit title, or the slug when none was supplied.
    description : Any
        Explicit description, or ``"Hi, This is <slug>..."``.
    created_at : datetime
        Creation time, UTC-aware.
    modified_at : datetime
        Last modification time, UTC-aware.
    path : str
        ``/``-separated directory path relative to the content root.
    root : str
        One ``..`` marker per segment of ``path``; addresses the output root
        from the item's ``index.html``.
    fields : dict[str, Any]
        Every merged metadata key (defaults included) minus reserved keys.
        Extra keys are reachable as attributes or items, so templates can use
        ``meta.author`` or ``meta["author"]``.
    """

    slug: str
    title: typ.Any
    description: typ.Any
    created_at: dt.datetime
    modified_at: dt.datetime
    path: str
    root: str
    fields: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __getattr__(self, name: str) -> typ.Any:  # noqa: ANN401
        if name.startswith("_") or name == "fields":
            raise AttributeError(name)
        try:
            return self.fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: str) -> typ.Any:  # noqa: ANN401
        if key in _RECORD_ATTRIBUTES:
            return getattr(self, key)
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in _RECORD_ATTRIBUTES or key in self.fields

    def get(self, key: str, default: typ.Any = None) -> typ.Any:  # noqa: ANN401
        """Return ``key`` like :meth:`dict.get`, checking record attributes first."""
        try:
            return self[key]
        except KeyError:
            return default


_RECORD_ATTRIBUTES = (
    "slug",
    "title",
    "description",
    "created_at",
    "modified_at",
    "path",
    "root",
)


def default_meta(slug: str) -> dict[str, typ.Any]:
    """Return the metadata every content item starts from."""
    return {
        "title": slug,
        "description": DEFAULT_DESCRIPTION_TEMPLATE.format(slug=slug),
    }


def merge_meta(
    defaults: typ.Mapping[str, typ.Any], explicit: typ.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Merge explicit metadata over defaults.

    Explicit values always win, key by key. Nested mappings are replaced, not
    merged, and keys absent from ``defaults`` pass through unchanged.

    Examples
    --------
    >>> merge_meta({"title": "a", "tags": {"x": 1}}, {"tags": {"y": 2}, "n": 3})
    {'title': 'a', 'tags': {'y': 2}, 'n': 3}
    """
    merged = dict(defaults)
    merged.update(explicit)
    return merged


def load_content_meta(
    content_root: Path, dir_rel_path: str | PurePath
) -> MetaRecord:
    """Build the :class:`MetaRecord` for one content directory.

    Parameters
    ----------
    content_root : Path
        Root directory holding every content item.
    dir_rel_path : str or PurePath
        Directory of the item relative to ``content_root``, using the native
        separator or ``/``. Record paths always use ``/``.

    Returns
    -------
    MetaRecord
        Metadata with defaults applied and timestamps resolved.

    Raises
    ------
    MetadataParseError
        If ``meta.json`` is malformed, ``meta.py`` fails or does not expose a
        ``meta`` mapping, or a reserved date key cannot be parsed.
    """
    rel_path = PurePath(dir_rel_path)
    directory = content_root.joinpath(*rel_path.parts)
    slug = rel_path.name

    explicit = _read_explicit_meta(directory, rel_path.as_posix())
    merged = merge_meta(default_meta(slug), explicit)

    created_at, modified_at = _filesystem_times(directory)
    if merged.get(CREATED_AT_KEY):
        created_at = _reserved_timestamp(merged, CREATED_AT_KEY, rel_path.as_posix())
    if merged.get(MODIFIED_AT_KEY):
        modified_at = _reserved_timestamp(
            merged, MODIFIED_AT_KEY, rel_path.as_posix()
        )

    fields = {key: value for key, value in merged.items() if key not in RESERVED_KEYS}
    return MetaRecord(
        slug=slug,
        title=fields["title"],
        description=fields["description"],
        created_at=created_at,
        modified_at=modified_at,
        path=rel_path.as_posix(),
        root=relative_root(len(rel_path.parts)),
        fields=fields,
    )


def _read_explicit_meta(directory: Path, label: str) -> dict[str, typ.Any]:
    """Return the explicit metadata mapping, consulting exactly one source."""
    json_path = directory / META_JSON
    if json_path.is_file():
        try:
            payload = json.loads(json_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MetadataParseError(label, f"{META_JSON}: {exc}") from exc
        if not isinstance(payload, dict):
            raise MetadataParseError(label, f"{META_JSON} must contain an object.")
        return payload

    code_path = directory / META_PY
    if code_path.is_file():
        return _exec_meta_module(code_path, label)
    return {}


def _exec_meta_module(code_path: Path, label: str) -> dict[str, typ.Any]:
    """Execute ``meta.py`` and return its ``meta`` mapping."""
    module_name = "sitepress_meta_" + "_".join(
        "".join(ch if ch.isalnum() else "_" for ch in part)
        for part in PurePosixPath(label).parts
    )
    spec = importlib.util.spec_from_file_location(module_name, code_path)
    if spec is None or spec.loader is None:
        raise MetadataParseError(label, f"{META_PY} could not be loaded.")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - user code may raise anything
        raise MetadataParseError(label, f"{META_PY} raised {exc!r}") from exc
    payload = getattr(module, META_PY_ATTRIBUTE, None)
    if not isinstance(payload, typ.Mapping):
        msg = f"{META_PY} must define a '{META_PY_ATTRIBUTE}' mapping."
        raise MetadataParseError(label, msg)
    return dict(payload)


def _filesystem_times(directory: Path) -> tuple[dt.datetime, dt.datetime]:
    """Return the directory's (created, modified) times as UTC datetimes."""
    stat = directory.stat()
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return (
        dt.datetime.fromtimestamp(created, tz=dt.UTC),
        dt.datetime.fromtimestamp(stat.st_mtime, tz=dt.UTC),
    )


def _reserved_timestamp(
    merged: typ.Mapping[str, typ.Any], key: str, label: str
) -> dt.datetime:
    """Parse a reserved date key, raising when the value is not a date."""
    raw = merged[key]
    parsed = _parse_timestamp(raw)
    if parsed is None:
        msg = f"'{key}' value {raw!r} is not an ISO-8601 date."
        raise MetadataParseError(label, msg)
    return parsed


__all__ = [
    "RESERVED_KEYS",
    "MetaRecord",
    "default_meta",
    "load_content_meta",
    "merge_meta",
]
