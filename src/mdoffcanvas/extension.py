"""Python-Markdown extension turning annotated blocks into offcanvas panels.

Panels are written with ``md_in_html``::

    <div class="offcanvas" placement="end" markdown>
    ## Filters
    Panel body.
    </div>

When ``overtake-margins`` is enabled, ``column-margin``/``aside``/``margin``
blocks and bracketed spans such as ``[note]{.aside}`` become panels too.
"""

from __future__ import annotations

import copy
from typing import Any
import xml.etree.ElementTree as ElementTree

from markdown import Markdown
from markdown.extensions import Extension
from markdown.extensions.attr_list import AttrListExtension
from markdown.extensions.md_in_html import MarkdownInHtmlExtension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from .core.assets import OFFCANVAS_DEPENDENCY, register_dependency
from .core.content import HEADING_TAGS, PROTECTED_HEADING_TAG, restore_protected_headings
from .core.context import OffcanvasContext, TargetCapabilities
from .core.diagnostics import DiagnosticEmitter, LoggingEmitter, attributed
from .core.dispatch import OffcanvasFilter
from .core.frontmatter import split_front_matter
from .core.metadata import defaults_from_options
from .core.options import DocumentDefaults
from .spans import BRACKETED_SPAN_PATTERN, BracketedSpanProcessor


# Blocks that may only hold phrasing content; inline panels are hoisted out.
PHRASING_HOSTS = frozenset(
    {"p", "dt", "summary", "caption", "figcaption", PROTECTED_HEADING_TAG, *HEADING_TAGS}
)


class OffcanvasMetadataPreprocessor(Preprocessor):
    """Run the metadata phase before any block is parsed."""

    def __init__(self, md: Markdown, extension: OffcanvasExtension) -> None:
        super().__init__(md)
        self._extension = extension

    def run(self, lines: list[str]) -> list[str]:
        # Every document starts from the configured defaults and a fresh counter.
        self._extension.reset()
        metadata: dict[str, Any] = copy.deepcopy(dict(self._extension.getConfig("metadata") or {}))
        if self._extension.getConfig("front_matter"):
            front_matter, body = split_front_matter("\n".join(lines))
            if front_matter:
                metadata.update(front_matter)
                lines = body.split("\n")

        self.md.offcanvas_metadata = self._extension.filter.transform_metadata(metadata)
        return lines


class OffcanvasTreeprocessor(Treeprocessor):
    """Replace panel blocks bottom-up, then margin spans in document order."""

    def __init__(self, md: Markdown, extension: OffcanvasExtension) -> None:
        super().__init__(md)
        self._extension = extension

    def run(self, root: ElementTree.Element) -> ElementTree.Element | None:
        hooks = self._extension.filter
        if not hooks.context.transforms_enabled:
            return None
        self._walk_blocks(root, hooks)
        self._walk_inline(root, hooks, None)
        return None

    def _walk_blocks(self, parent: ElementTree.Element, hooks: OffcanvasFilter) -> None:
        for index, child in enumerate(list(parent)):
            self._walk_blocks(child, hooks)
            replacement = hooks.block(child)
            if replacement is not child:
                parent[index] = replacement

    def _walk_inline(
        self,
        parent: ElementTree.Element,
        hooks: OffcanvasFilter,
        pending: list[ElementTree.Element] | None,
    ) -> None:
        for child in list(parent):
            tag = child.tag if isinstance(child.tag, str) else ""
            if tag in PHRASING_HOSTS:
                hoisted: list[ElementTree.Element] = []
                self._walk_inline(child, hooks, hoisted)
                if hoisted:
                    position = list(parent).index(child) + 1
                    for offset, container in enumerate(hoisted):
                        parent.insert(position + offset, container)
                continue

            self._walk_inline(child, hooks, pending)
            result = hooks.inline(child)
            if result is child or not isinstance(result, list):
                continue

            trigger, *containers = result
            position = list(parent).index(child)
            parent[position] = trigger
            if pending is not None:
                pending.extend(containers)
            else:
                for offset, container in enumerate(containers, start=1):
                    parent.insert(position + offset, container)


class OffcanvasOutlineTreeprocessor(Treeprocessor):
    """Restore panel headings once the table of contents has been built."""

    def run(self, root: ElementTree.Element) -> None:
        restore_protected_headings(root)


def _ensure_host_extensions(md: Markdown) -> None:
    missing: list[Extension] = []
    if "markdown_block" not in md.parser.blockprocessors:
        missing.append(MarkdownInHtmlExtension())
    if "attr_list" not in md.treeprocessors:
        missing.append(AttrListExtension())
    if missing:
        md.registerExtensions(missing, {})


class OffcanvasExtension(Extension):
    """Register the offcanvas metadata, span, and panel processors."""

    def __init__(self, *, emitter: DiagnosticEmitter | None = None, **kwargs: Any) -> None:
        self.config = {
            "options": [{}, "Document-wide offcanvas defaults."],
            "metadata": [
                {},
                "Metadata merged under the front matter (for hosts that strip it).",
            ],
            "front_matter": [True, "Read YAML front matter from the source."],
            "target": ["html", "Output format name, e.g. html, revealjs, latex."],
            "scripting": [True, "Whether the output runs JavaScript."],
            "bootstrap": [True, "Whether the output page ships Bootstrap."],
        }
        super().__init__(**kwargs)
        self.emitter: DiagnosticEmitter = emitter or LoggingEmitter()
        self._md: Markdown | None = None
        self._base_defaults = DocumentDefaults()
        self.context = OffcanvasContext(emitter=self.emitter)
        self.filter = OffcanvasFilter(self.context)

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802 - markdown hook
        md.registerExtension(self)
        self._md = md
        _ensure_host_extensions(md)

        self._base_defaults = defaults_from_options(
            self.getConfig("options"),
            warn=lambda message: self.emitter.warning(attributed(message)),
        )
        md.offcanvas_dependencies = []
        self.reset()
        if self.context.transforms_enabled:
            register_dependency(md.offcanvas_dependencies, OFFCANVAS_DEPENDENCY)

        md.preprocessors.register(
            OffcanvasMetadataPreprocessor(md, self), "offcanvas_metadata", 25
        )
        md.inlinePatterns.register(
            BracketedSpanProcessor(BRACKETED_SPAN_PATTERN, md), "offcanvas_span", 172
        )
        md.treeprocessors.register(OffcanvasTreeprocessor(md, self), "offcanvas", 6)
        md.treeprocessors.register(OffcanvasOutlineTreeprocessor(md), "offcanvas_outline", 4)

    def capabilities(self) -> TargetCapabilities:
        return TargetCapabilities(
            format=str(self.getConfig("target") or "html").lower(),
            scripting=bool(self.getConfig("scripting")),
            bootstrap=bool(self.getConfig("bootstrap")),
        )

    def reset(self) -> None:
        self.context = OffcanvasContext(
            defaults=self._base_defaults,
            capabilities=self.capabilities(),
            emitter=self.emitter,
        )
        md = self._md
        self.filter = OffcanvasFilter(
            self.context,
            raw=md.htmlStash.store if md is not None else None,
            md=md,
        )
        if md is not None:
            md.offcanvas_metadata = {}


def makeExtension(**kwargs: Any) -> OffcanvasExtension:  # noqa: N802 - markdown hook
    return OffcanvasExtension(**kwargs)


__all__ = [
    "PHRASING_HOSTS",
    "OffcanvasExtension",
    "OffcanvasMetadataPreprocessor",
    "OffcanvasOutlineTreeprocessor",
    "OffcanvasTreeprocessor",
    "makeExtension",
]
