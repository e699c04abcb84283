"""End-to-end tests for the staged build pipeline."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from sitepress.errors import MetadataParseError, TemplateRenderError
from sitepress.pipeline import STAGES, BuildPipeline, build_site

if typ.TYPE_CHECKING:
    from conftest import SiteTree


def test_full_build_writes_pages_content_and_static(blog_site: SiteTree) -> None:
    report = build_site(blog_site.config())
    assert report.ok
    assert [stage.name for stage in report.stages] == list(STAGES)
    for rel_path in (
        "index.html",
        "style.css",
        "posts/a/index.html",
        "posts/b/index.html",
    ):
        assert (blog_site.dist / rel_path).is_file(), rel_path
    assert not (blog_site.dist / "[path]").exists()
    assert set(report.written) >= {
        blog_site.dist / "index.html",
        blog_site.dist / "posts" / "a" / "index.html",
    }


def test_content_output_echoes_authored_metadata(blog_site: SiteTree) -> None:
    build_site(blog_site.config())
    soup = BeautifulSoup(blog_site.read_output("posts/a/index.html"), "html.parser")
    assert soup.h1.get_text() == "Hello"
    assert soup.select_one("p.description").get_text() == "Hi, This is a..."


def test_missing_content_template_still_builds_pages(site: SiteTree) -> None:
    site.write("theme/index.jinja", "<p>{{ content_array|length }} items</p>")
    site.add_content("posts/a")
    report = build_site(site.config())
    assert report.ok
    assert site.read_output("index.html") == "<p>1 items</p>"
    assert not (site.dist / "posts").exists()


def test_before_hook_globals_reach_every_render(blog_site: SiteTree) -> None:
    blog_site.write(
        "plugins/site_name.py",
        "def before_build(context):\n"
        "    context.vars['global_meta']['site_name'] = 'X'\n",
    )
    blog_site.write("site.yaml", "plugins:\n  - plugins/site_name.py\n")
    blog_site.write(
        "theme/[path]/index.jinja", "<title>{{ global_meta.site_name }}</title>"
    )
    build_site(blog_site.config())
    assert "<title>X</title>" in blog_site.read_output("index.html")
    assert blog_site.read_output("posts/a/index.html") == "<title>X</title>"
    assert blog_site.read_output("posts/b/index.html") == "<title>X</title>"


def test_after_hooks_run_after_output_exists(blog_site: SiteTree) -> None:
    blog_site.write(
        "plugins/report.py",
        "def after_build(context):\n"
        "    out = context.destination_path\n"
        "    names = sorted(p.name for p in out.rglob('index.html'))\n"
        "    (out / 'report.txt').write_text(','.join(names))\n",
    )
    blog_site.write("site.yaml", "plugins: [plugins/report.py]\n")
    build_site(blog_site.config())
    assert blog_site.read_output("report.txt") == "index.html,index.html,index.html"


def test_failing_stage_halts_and_keeps_earlier_output(blog_site: SiteTree) -> None:
    blog_site.write("theme/[path]/index.jinja", "{{ meta.title }")
    report = BuildPipeline(blog_site.config()).run()
    assert not report.ok
    assert report.failed_stage is not None
    assert report.failed_stage.name == "render-content"
    assert isinstance(report.error, TemplateRenderError)
    assert [stage.name for stage in report.stages] == list(STAGES[:-1])
    assert (blog_site.dist / "index.html").is_file()
    with pytest.raises(TemplateRenderError):
        report.raise_for_error()


def test_before_hook_failure_aborts_before_rendering(blog_site: SiteTree) -> None:
    blog_site.write(
        "plugins/broken.py",
        "def before_build(context):\n    raise LookupError('plugin broke')\n",
    )
    blog_site.write("site.yaml", "plugins: [plugins/broken.py]\n")
    with pytest.raises(LookupError, match="plugin broke"):
        build_site(blog_site.config())
    assert not blog_site.dist.exists()


def test_malformed_metadata_fails_the_index_stage(site: SiteTree) -> None:
    directory = site.add_content("posts/bad")
    (directory / "meta.json").write_text("{oops", encoding="utf-8")
    report = BuildPipeline(site.config()).run()
    assert report.failed_stage is not None
    assert report.failed_stage.name == "index"
    assert isinstance(report.error, MetadataParseError)


def test_code_stylesheet_unless_theme_ships_one(blog_site: SiteTree) -> None:
    report = build_site(blog_site.config())
    stylesheet = blog_site.dist / "codehilite.css"
    assert stylesheet in report.stages[STAGES.index("copy-static")].written
    assert ".codehilite" in stylesheet.read_text(encoding="utf-8")

    blog_site.write("theme/codehilite.css", "/* theme */\n")
    build_site(blog_site.config())
    assert blog_site.read_output("codehilite.css") == "/* theme */\n"
