"""Markdown conversion helpers for documents carrying offcanvas panels."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
import re
from typing import Any

import markdown

from .core.assets import HtmlDependency
from .core.diagnostics import DiagnosticEmitter
from .core.exceptions import OffcanvasError
from .core.frontmatter import split_front_matter
from .extension import OffcanvasExtension


__all__ = [
    "DEFAULT_EXTENSION_CONFIGS",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownConversionError",
    "MarkdownDocument",
    "normalize_markdown_extensions",
    "render_markdown",
    "resolve_markdown_extensions",
    "split_front_matter",
]


DEFAULT_MARKDOWN_EXTENSIONS = [
    "abbr",
    "admonition",
    "attr_list",
    "def_list",
    "footnotes",
    "md_in_html",
    "tables",
    "toc",
    "pymdownx.blocks.html",
    "pymdownx.superfences",
]

DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "toc": {"permalink": False},
}

# Names that would register the extension a second time.
_OFFCANVAS_ALIASES = frozenset({"offcanvas", "mdoffcanvas", "mdoffcanvas.extension"})


class MarkdownConversionError(Exception):
    """Raised when Markdown cannot be converted into HTML."""


@dataclass(slots=True)
class MarkdownDocument:
    """Result of converting Markdown into HTML."""

    html: str
    front_matter: dict[str, Any]
    dependencies: list[HtmlDependency] = field(default_factory=list)


def normalize_markdown_extensions(values: Iterable[str] | str | None) -> list[str]:
    """Flatten CLI-friendly extension lists (``"a,b c"``) into names."""
    if values is None:
        return []
    candidates = [values] if isinstance(values, str) else list(values)
    normalized: list[str] = []
    for value in candidates:
        if not isinstance(value, str):
            continue
        normalized.extend(chunk for chunk in re.split(r"[,\s]+", value) if chunk)
    return normalized


def resolve_markdown_extensions(requested: Iterable[str] | str | None) -> list[str]:
    """Return the defaults followed by ``requested``, deduplicated, without this extension."""
    seen: set[str] = set()
    resolved: list[str] = []
    for name in [*DEFAULT_MARKDOWN_EXTENSIONS, *normalize_markdown_extensions(requested)]:
        key = name.lower()
        if key in seen or key in _OFFCANVAS_ALIASES:
            continue
        seen.add(key)
        resolved.append(name)
    return resolved


def render_markdown(
    source: str,
    extensions: Sequence[str] | None = None,
    *,
    options: Mapping[str, Any] | None = None,
    target: str = "html",
    scripting: bool = True,
    bootstrap: bool = True,
    emitter: DiagnosticEmitter | None = None,
) -> MarkdownDocument:
    """Convert Markdown ``source`` into HTML with offcanvas panels.

    Front matter is split here and handed to the extension as metadata; the
    returned ``front_matter`` carries the resolved ``extensions.offcanvas``
    table. :class:`~mdoffcanvas.core.exceptions.OffcanvasConfigError`
    propagates unchanged.
    """
    metadata, body = split_front_matter(source)

    offcanvas = OffcanvasExtension(
        emitter=emitter,
        options=dict(options or {}),
        metadata=metadata,
        front_matter=False,
        target=target,
        scripting=scripting,
        bootstrap=bootstrap,
    )
    active_extensions = resolve_markdown_extensions(extensions)
    extension_configs = {
        name: dict(DEFAULT_EXTENSION_CONFIGS[name])
        for name in active_extensions
        if name in DEFAULT_EXTENSION_CONFIGS
    }

    try:
        processor = markdown.Markdown(
            extensions=[*active_extensions, offcanvas],
            extension_configs=extension_configs,
        )
        html = processor.convert(body)
    except OffcanvasError:
        raise
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to convert Markdown source: {exc}") from exc

    return MarkdownDocument(
        html=html,
        front_matter=dict(processor.offcanvas_metadata),
        dependencies=list(processor.offcanvas_dependencies),
    )
