"""Helpers for keeping emitted links valid at any output depth.

Content items are rendered from one shared template whose author writes asset
and link references as if every item sat one directory below the output root.
Nested items live deeper, so their relative ``href``/``src`` references are
prefixed with extra ``..`` markers after rendering. The landing page also
borrows the content template's stylesheet and script references as prefetch
hints.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from sitepress._constants import PARENT_MARKER, URL_SEP

PATH_ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<lead>\s(?:href|src)\s*=\s*)(?P<quote>["'])(?P<target>.*?)(?P=quote)""",
    re.IGNORECASE | re.DOTALL,
)
STYLESHEET_LINK_PATTERN = re.compile(r"<link\b[^>]*>", re.IGNORECASE | re.DOTALL)
SCRIPT_TAG_PATTERN = re.compile(r"<script\b[^>]*>", re.IGNORECASE | re.DOTALL)
ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<name>[a-zA-Z-]+)\s*=\s*(?P<quote>["'])(?P<value>.*?)(?P=quote)""",
    re.DOTALL,
)
HEAD_CLOSE_PATTERN = re.compile(r"</head\s*>", re.IGNORECASE)
TEMPLATE_MARKERS = ("{{", "{%", "{#")


def relative_root(depth: int) -> str:
    """Return the prefix that climbs ``depth`` directories back to the root.

    Examples
    --------
    >>> relative_root(0)
    ''
    >>> relative_root(3)
    '../../..'
    """
    return URL_SEP.join([PARENT_MARKER] * depth)


def _is_rewritable(target: str, skip_prefix: str | None) -> bool:
    """Return True when ``target`` is a relative reference needing a prefix."""
    if not target or target.startswith(("#", "?", "/", "./")):
        return False
    if any(marker in target for marker in TEMPLATE_MARKERS):
        return False
    if skip_prefix and (
        target == skip_prefix or target.startswith(f"{skip_prefix}{URL_SEP}")
    ):
        return False
    parsed = urlsplit(target)
    return not (parsed.scheme or parsed.netloc)


def prefix_html_paths(html: str, prefix: str, *, skip_prefix: str | None = None) -> str:
    """Prefix every relative ``href``/``src`` value in ``html`` with ``prefix``.

    Parameters
    ----------
    html : str
        Rendered HTML.
    prefix : str
        Path prepended (with a ``/`` separator) to rewritable references.
        An empty prefix returns ``html`` unchanged.
    skip_prefix : str, optional
        References already starting with this prefix are left alone; pass the
        item's own ``root`` so links built from it are not prefixed twice.

    Returns
    -------
    str
        HTML with rewritten references. Absolute URLs, ``/``-rooted paths,
        fragments, ``./`` item-local paths, and scheme URLs such as
        ``mailto:`` or ``data:`` are never touched.

    Examples
    --------
    >>> prefix_html_paths('<a href="../style.css">', "..")
    '<a href="../../style.css">'
    >>> prefix_html_paths('<img src="https://x.io/a.png">', "..")
    '<img src="https://x.io/a.png">'
    """
    if not prefix:
        return html

    def _repl(match: re.Match[str]) -> str:
        target = match.group("target")
        if not _is_rewritable(target, skip_prefix):
            return match.group(0)
        quote = match.group("quote")
        return f"{match.group('lead')}{quote}{prefix}{URL_SEP}{target}{quote}"

    return PATH_ATTRIBUTE_PATTERN.sub(_repl, html)


def _tag_attributes(tag: str) -> dict[str, str]:
    return {
        match.group("name").lower(): match.group("value")
        for match in ATTRIBUTE_PATTERN.finditer(tag)
    }


def collect_prefetch_targets(template: str) -> list[str]:
    """Return stylesheet and script references declared in ``template``.

    References are returned in document order without duplicates. Template
    expressions inside them are kept verbatim so they render in the context
    of the page that receives the hints.
    """
    targets: list[str] = []
    for tag in STYLESHEET_LINK_PATTERN.findall(template):
        attrs = _tag_attributes(tag)
        rel = attrs.get("rel", "").lower().split()
        href = attrs.get("href")
        if href and "stylesheet" in rel and href not in targets:
            targets.append(href)
    for tag in SCRIPT_TAG_PATTERN.findall(template):
        src = _tag_attributes(tag).get("src")
        if src and src not in targets:
            targets.append(src)
    return targets


def inject_prefetch_links(from_template: str | None, into_template: str) -> str:
    """Splice prefetch hints for ``from_template``'s resources into a page.

    Parameters
    ----------
    from_template : str or None
        Raw text of the shared content template; ``None`` leaves the page
        unchanged.
    into_template : str
        Raw text of the page template that receives the hints.

    Returns
    -------
    str
        Page template with ``<link rel="prefetch">`` tags inserted before
        ``</head>``, or appended when the page has no head element.
    """
    if not from_template:
        return into_template
    targets = collect_prefetch_targets(from_template)
    if not targets:
        return into_template
    block = "".join(f'<link rel="prefetch" href="{target}" />\n' for target in targets)
    match = HEAD_CLOSE_PATTERN.search(into_template)
    if match is None:
        return f"{into_template}{block}"
    return f"{into_template[: match.start()]}{block}{into_template[match.start() :]}"


__all__ = [
    "collect_prefetch_targets",
    "inject_prefetch_links",
    "prefix_html_paths",
    "relative_root",
]
