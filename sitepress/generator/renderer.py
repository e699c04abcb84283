"""Render Jinja templates and markdown bodies into HTML.

Two adapters live here. :class:`TemplateRenderer` evaluates template text
with Jinja2, resolving ``{% include %}`` and ``{% import %}`` relative to a
base path first and the site source root second. :class:`HtmlContentRenderer`
converts markdown with Python-Markdown, keeping raw HTML, adding heading
anchors, and highlighting fenced code with Pygments. :class:`Renderer`
composes both: markdown bodies pass through the template evaluator before
conversion so they can use the same expressions as templates.
"""

from __future__ import annotations

import importlib
import re
import typing as typ
from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError
from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from sitepress.errors import MarkdownParseError, SitepressError, TemplateRenderError

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
CODE_EXTENSIONS = ("jinja2.ext.do", "jinja2.ext.loopcontrols")
# Errors raised by expressions inside templates, as opposed to I/O failures.
EVALUATION_ERRORS = (TemplateError, ArithmeticError, LookupError, TypeError, ValueError)


class HtmlContentRenderer:
    """Render markdown with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks.

        The static stage writes it to ``codehilite.css`` in the output root.
        """
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str, *, source_path: str | Path | None = None) -> str:
        """Render markdown into HTML using the configured extensions.

        Raw HTML in ``text`` is passed through and every heading receives an
        ``id`` anchor.

        Raises
        ------
        MarkdownParseError
            If the converter or one of its extensions fails.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        try:
            html = md.convert(normalized)
        except Exception as exc:  # noqa: BLE001 - extensions raise arbitrary errors
            raise MarkdownParseError(source_path, str(exc)) from exc
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


class TemplateRenderer:
    """Evaluate template text with Jinja2."""

    def __init__(self, search_root: Path | None = None) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        search_root : Path, optional
            Directory searched after the per-render base path when resolving
            includes and imports; usually the site source root.
        """
        self.search_root = search_root
        self._environments: dict[str, Environment] = {}

    def render(
        self,
        template_text: str,
        view: typ.Mapping[str, typ.Any],
        *,
        base_path: Path,
        source_path: str | Path | None = None,
    ) -> str:
        """Render ``template_text`` with ``view`` as its variables.

        Templates are trusted site input: values are inserted verbatim, and
        the ``do`` statement, loop controls, and the ``import_module`` global
        let them run Python code.

        Parameters
        ----------
        template_text : str
            Raw template source.
        view : Mapping[str, Any]
            Variables visible to the template.
        base_path : Path
            Directory that relative includes and imports resolve against.
        source_path : str or Path, optional
            Path reported in error messages.

        Raises
        ------
        TemplateRenderError
            If the template fails to compile or an expression fails.
        """
        env = self._environment(base_path)
        try:
            template = env.from_string(template_text)
            return template.render(**view)
        except SitepressError:
            raise
        except EVALUATION_ERRORS as exc:
            raise TemplateRenderError(source_path, str(exc)) from exc

    def _environment(self, base_path: Path) -> Environment:
        key = str(base_path)
        env = self._environments.get(key)
        if env is None:
            search_path = [key]
            if self.search_root is not None and str(self.search_root) not in search_path:
                search_path.append(str(self.search_root))
            env = Environment(
                loader=FileSystemLoader(search_path),
                autoescape=False,  # noqa: S701 - templates are trusted site input
                keep_trailing_newline=True,
                extensions=list(CODE_EXTENSIONS),
            )
            env.globals["import_module"] = importlib.import_module
            self._environments[key] = env
        return env


class Renderer:
    """Template and markdown rendering used by every builder."""

    def __init__(
        self,
        search_root: Path | None = None,
        *,
        html_renderer: HtmlContentRenderer | None = None,
    ) -> None:
        self.templates = TemplateRenderer(search_root)
        self.html = html_renderer or HtmlContentRenderer()

    def render_template(
        self,
        template_text: str,
        view: typ.Mapping[str, typ.Any],
        *,
        base_path: Path,
        source_path: str | Path | None = None,
    ) -> str:
        """Render a page or content template; embedded code is always allowed."""
        return self.templates.render(
            template_text,
            view,
            base_path=base_path,
            source_path=source_path,
        )

    def render_markdown(
        self,
        markdown_text: str,
        variables: typ.Mapping[str, typ.Any],
        *,
        base_path: Path,
        source_path: str | Path | None = None,
    ) -> str:
        """Substitute template expressions in markdown, then convert it to HTML."""
        substituted = self.templates.render(
            markdown_text,
            variables,
            base_path=base_path,
            source_path=source_path,
        )
        return self.html.markdown(substituted, source_path=source_path)


__all__ = [
    "CODE_BLOCK_PATTERN",
    "HtmlContentRenderer",
    "Renderer",
    "TemplateRenderer",
]
