"""Tests for rendering top-level page templates."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from sitepress.context import create_build_context
from sitepress.errors import PageTemplateNotFoundError
from sitepress.generator import PageBuilder, Renderer, discover_pages

if typ.TYPE_CHECKING:
    from conftest import SiteTree


def _builder(site: SiteTree) -> PageBuilder:
    config = site.config()
    return PageBuilder(create_build_context(config), Renderer(config.source_path))


def test_discover_pages_skips_partials_and_content_template(site: SiteTree) -> None:
    site.write("theme/index.jinja", "")
    site.write("theme/about.jinja", "")
    site.write("theme/blog/archive.jinja", "")
    site.write("theme/_layout.jinja", "")
    site.write("theme/[path]/index.jinja", "")
    site.write("theme/style.css", "")
    assert discover_pages(site.theme, ".jinja") == ["about", "blog/archive", "index"]


def test_page_is_written_as_sibling_html(site: SiteTree) -> None:
    site.write("theme/about.jinja", "<p>root=[{{ root }}]</p>\n")
    output = _builder(site).build("about")
    assert output == site.dist / "about.html"
    assert output.read_text(encoding="utf-8") == "<p>root=[]</p>\n"


def test_nested_page_root_excludes_its_own_name(site: SiteTree) -> None:
    """A page two directories deep climbs two levels, not three."""
    site.write("theme/docs/guides/setup.jinja", "{{ root }}")
    output = _builder(site).build("docs/guides/setup")
    assert output == site.dist / "docs" / "guides" / "setup.html"
    assert output.read_text(encoding="utf-8") == "../.."


def test_existing_output_is_overwritten(site: SiteTree) -> None:
    site.write("theme/about.jinja", "new")
    site.write("dist/about.html", "old")
    _builder(site).build("about")
    assert site.read_output("about.html") == "new"


def test_missing_page_template_is_fatal(site: SiteTree) -> None:
    with pytest.raises(PageTemplateNotFoundError) as excinfo:
        _builder(site).build("ghost")
    assert excinfo.value.template_path == site.theme / "ghost.jinja"


def test_pages_see_content_collections(blog_site: SiteTree) -> None:
    output = _builder(blog_site).build("index")
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    titles = [anchor.get_text() for anchor in soup.select("a.post")]
    assert titles == ["Hello", "b"]


def test_landing_page_gets_prefetch_hints(blog_site: SiteTree) -> None:
    output = _builder(blog_site).build("index")
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    prefetch = soup.head.find_all("link", rel="prefetch")
    assert [link["href"] for link in prefetch] == ["../style.css"]


def test_other_pages_get_no_prefetch_hints(blog_site: SiteTree) -> None:
    blog_site.write("theme/about.jinja", "<html><head></head></html>")
    output = _builder(blog_site).build("about")
    assert "prefetch" not in output.read_text(encoding="utf-8")


def test_pages_can_import_content(blog_site: SiteTree) -> None:
    blog_site.add_content("pages/intro", body="Welcome to *{{ global_meta.site_name }}*.\n")
    blog_site.write("site.yaml", "global_meta:\n  site_name: Example\n")
    blog_site.write(
        "theme/intro.jinja", '<main>{{ import_content("pages/intro/index.md") }}</main>'
    )
    output = _builder(blog_site).build("intro")
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one("main p em").get_text() == "Example"
