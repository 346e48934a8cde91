"""Wrap rendered fragments into a standalone Bootstrap page."""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from .markdown import MarkdownDocument


BOOTSTRAP_VERSION = "5.3.3"
BOOTSTRAP_CSS = (
    f"https://cdn.jsdelivr.net/npm/bootstrap@{BOOTSTRAP_VERSION}/dist/css/bootstrap.min.css"
)
BOOTSTRAP_JS = (
    f"https://cdn.jsdelivr.net/npm/bootstrap@{BOOTSTRAP_VERSION}/dist/js/bootstrap.bundle.min.js"
)

_ENVIRONMENT: Environment | None = None


def _environment() -> Environment:
    global _ENVIRONMENT
    if _ENVIRONMENT is None:
        _ENVIRONMENT = Environment(
            loader=PackageLoader("mdoffcanvas", "resources"),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
    return _ENVIRONMENT


def document_title(document: MarkdownDocument, fallback: str = "Document") -> str:
    title = document.front_matter.get("title")
    return str(title) if title else fallback


def render_standalone(
    document: MarkdownDocument,
    *,
    title: str | None = None,
    lang: str = "en",
    bootstrap: bool = True,
    scripting: bool = True,
) -> str:
    """Return a full HTML page embedding ``document`` and its stylesheets."""
    template = _environment().get_template("standalone.html.jinja")
    return template.render(
        title=title or document_title(document),
        lang=document.front_matter.get("lang") or lang,
        body=document.html,
        dependencies=document.dependencies,
        bootstrap=bootstrap,
        scripting=scripting,
        bootstrap_css=BOOTSTRAP_CSS,
        bootstrap_js=BOOTSTRAP_JS,
    )


__all__ = ["BOOTSTRAP_CSS", "BOOTSTRAP_JS", "document_title", "render_standalone"]
