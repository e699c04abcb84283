"""Shared fixtures that lay out throwaway site trees for build tests."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from sitepress.config import SiteConfig, load_site_config


@dc.dataclass(slots=True)
class SiteTree:
    """Filesystem helper rooted at a temporary project directory."""

    root: Path

    @property
    def theme(self) -> Path:
        return self.root / "theme"

    @property
    def content(self) -> Path:
        return self.root / "content"

    @property
    def dist(self) -> Path:
        return self.root / "dist"

    def write(self, rel_path: str, text: str) -> Path:
        """Write ``text`` to ``rel_path`` under the project root."""
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def add_content(
        self,
        rel_dir: str,
        body: str = "# Heading\n\nBody text.\n",
        meta: dict[str, typ.Any] | None = None,
    ) -> Path:
        """Create a content item with an ``index.md`` and optional ``meta.json``."""
        directory = self.content / rel_dir
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "index.md").write_text(body, encoding="utf-8")
        if meta is not None:
            (directory / "meta.json").write_bytes(msgspec_json.encode(meta))
        return directory

    def config(self) -> SiteConfig:
        """Load ``site.yaml`` (or the defaults) for this tree."""
        return load_site_config(self.root / "site.yaml")

    def read_output(self, rel_path: str) -> str:
        return (self.dist / rel_path).read_text(encoding="utf-8")


CONTENT_TEMPLATE = (
    "<html><head>"
    '<link rel="stylesheet" href="../style.css">'
    "</head><body>"
    "<h1>{{ meta.title }}</h1>"
    '<p class="description">{{ meta.description }}</p>'
    '<a class="home" href="{{ root }}/index.html">home</a>'
    '<img src="../logo.png">'
    "</body></html>\n"
)


@pytest.fixture
def site(tmp_path: Path) -> SiteTree:
    """Return an empty site tree rooted in ``tmp_path``."""
    return SiteTree(tmp_path)


@pytest.fixture
def blog_site(site: SiteTree) -> SiteTree:
    """Return a site with a landing page, a content template, and two posts."""
    site.write(
        "theme/index.jinja",
        "<html><head><title>{{ global_meta.site_name }}</title></head><body>"
        "{% for item in content_array %}"
        '<a class="post" href="{{ item.path }}/index.html">{{ item.title }}</a>'
        "{% endfor %}"
        "</body></html>\n",
    )
    site.write("theme/[path]/index.jinja", CONTENT_TEMPLATE)
    site.write("theme/style.css", "body { margin: 0; }\n")
    site.add_content(
        "posts/a", meta={"title": "Hello", "$createdAt": "2024-03-01T00:00:00Z"}
    )
    site.add_content("posts/b", meta={"$createdAt": "2024-01-01T00:00:00Z"})
    return site
