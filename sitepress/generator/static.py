"""Mirror non-template files from the source tree into the output tree."""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path, PurePosixPath

from sitepress._constants import CODE_STYLESHEET, CONTENT_TEMPLATE_DIR

if typ.TYPE_CHECKING:
    from sitepress.config import SiteConfig


def _is_static(rel_path: PurePosixPath, extension: str) -> bool:
    return (
        not rel_path.name.endswith(extension)
        and CONTENT_TEMPLATE_DIR not in rel_path.parts[:-1]
    )


def copy_static_files(config: SiteConfig) -> list[Path]:
    """Copy stylesheets, images, and other static files to the destination.

    Template files and the content template directory are skipped; existing
    destination files with the same name are overwritten.

    Returns
    -------
    list[Path]
        Destination paths of the copied files, in sorted source order.
    """
    source_root = config.source_path
    if not source_root.is_dir():
        return []
    destination_root = config.destination_path.resolve()
    copied: list[Path] = []
    for file_path in sorted(source_root.rglob("*")):
        if not file_path.is_file():
            continue
        if file_path.resolve().is_relative_to(destination_root):
            continue
        rel_path = PurePosixPath(file_path.relative_to(source_root).as_posix())
        if not _is_static(rel_path, config.template_extension):
            continue
        target = config.destination_path.joinpath(*rel_path.parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file_path, target)
        copied.append(target)
    return copied


def write_code_stylesheet(config: SiteConfig, css: str) -> Path | None:
    """Write the syntax-highlighting stylesheet to the destination root.

    A ``codehilite.css`` shipped by the theme is left in place.

    Returns
    -------
    Path or None
        The written path, or ``None`` when the theme provides its own file.
    """
    target = config.destination_path / CODE_STYLESHEET
    if (config.source_path / CODE_STYLESHEET).is_file():
        return None
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(css, encoding="utf-8")
    return target


__all__ = ["copy_static_files", "write_code_stylesheet"]
