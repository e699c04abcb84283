"""Discover content items and load their metadata."""

from .index import ContentIndex, build_content_index, find_content_directories
from .meta import MetaRecord, default_meta, load_content_meta, merge_meta

__all__ = [
    "ContentIndex",
    "MetaRecord",
    "build_content_index",
    "default_meta",
    "find_content_directories",
    "load_content_meta",
    "merge_meta",
]
