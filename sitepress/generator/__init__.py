"""Utilities for rendering pages, content items, and their links."""

from .content_builder import ContentBuilder
from .importer import ContentImporter
from .link_rewriter import inject_prefetch_links, prefix_html_paths, relative_root
from .page_builder import PageBuilder, discover_pages
from .renderer import HtmlContentRenderer, Renderer, TemplateRenderer
from .static import copy_static_files, write_code_stylesheet

__all__ = [
    "ContentBuilder",
    "ContentImporter",
    "HtmlContentRenderer",
    "PageBuilder",
    "Renderer",
    "TemplateRenderer",
    "copy_static_files",
    "discover_pages",
    "inject_prefetch_links",
    "prefix_html_paths",
    "relative_root",
    "write_code_stylesheet",
]
