"""Classify document nodes and route them to the panel synthesizer."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any
import xml.etree.ElementTree as ElementTree

from .content import (
    ContentSplit,
    element_blocks,
    flatten_text,
    inline_blocks,
    partition,
    protect_headings,
)
from .context import OffcanvasContext
from .metadata import transform_metadata
from .options import resolve_options
from .synthesis import RawStash, build_panel, keep_markup, render_trigger


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown import Markdown


BLOCK_TAGS = frozenset({"div", "aside", "section"})
INLINE_TAGS = frozenset({"span"})
PANEL_CLASS = "offcanvas"
MARGIN_CLASSES = ("column-margin", "aside", "margin")

MAX_TEXT_EXTRACT = 50
MAX_TRIGGER_LENGTH = 30
TRUNCATE_LENGTH = 27
MARGIN_HEADER = "Margin Content"
MARGIN_TRIGGER_FALLBACK = "View margin content"

# Margin notes have no responsive mode and always get a trigger.
_MARGIN_DEFAULT_OVERRIDES = {"responsive": "", "trigger-position": "inline", "trigger-text": ""}
_MARGIN_IGNORED_ATTRIBUTES = frozenset({"responsive", "trigger-position"})


@dataclass(frozen=True, slots=True)
class ExplicitPanel:
    element: ElementTree.Element


@dataclass(frozen=True, slots=True)
class MarginCandidate:
    element: ElementTree.Element
    classes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Ordinary:
    element: ElementTree.Element


Classification = ExplicitPanel | MarginCandidate | Ordinary


def element_classes(element: ElementTree.Element) -> list[str]:
    return element.get("class", "").split()


def classify(
    element: ElementTree.Element, context: OffcanvasContext, *, inline: bool = False
) -> Classification:
    """Decide how ``element`` is handled; no state is touched."""
    if not context.transforms_enabled:
        return Ordinary(element)

    tag = element.tag.lower() if isinstance(element.tag, str) else ""
    if tag not in (INLINE_TAGS if inline else BLOCK_TAGS):
        return Ordinary(element)

    classes = element_classes(element)
    if not inline and PANEL_CLASS in classes:
        return ExplicitPanel(element)

    if context.defaults.overtake_margins_enabled:
        margin_classes = tuple(name for name in classes if name in MARGIN_CLASSES)
        if margin_classes:
            return MarginCandidate(element, margin_classes)

    return Ordinary(element)


def margin_trigger_text(text: str) -> str:
    """Derive a trigger label from the flattened text of a margin note."""
    excerpt = text[:MAX_TEXT_EXTRACT]
    if not excerpt:
        return MARGIN_TRIGGER_FALLBACK
    if len(excerpt) > MAX_TRIGGER_LENGTH:
        return excerpt[:TRUNCATE_LENGTH] + "..."
    return excerpt


class OffcanvasFilter:
    """Host-facing hooks: metadata, block nodes, and inline nodes."""

    def __init__(
        self,
        context: OffcanvasContext,
        *,
        raw: RawStash | None = None,
        md: Markdown | None = None,
    ) -> None:
        self.context = context
        self.raw = raw or keep_markup
        self.md = md

    def transform_metadata(self, meta: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        return transform_metadata(meta, self.context)

    def block(self, element: ElementTree.Element) -> ElementTree.Element:
        """Return the replacement for a block container (or ``element`` itself)."""
        kind = classify(element, self.context)
        match kind:
            case ExplicitPanel(element=node):
                return self._explicit_panel(node)
            case MarginCandidate(element=node, classes=classes):
                wrapper, container = self._margin_panel(
                    node, classes, element_blocks(node), wrapper_tag="div"
                )
                wrapper.tail = "\n"
                group = ElementTree.Element("div")
                group.extend([wrapper, container])
                group.tail = node.tail
                return group
            case Ordinary():
                return element
        raise TypeError(f"Unhandled classification {kind!r}")

    def inline(
        self, element: ElementTree.Element
    ) -> ElementTree.Element | list[ElementTree.Element]:
        """Return ``[trigger_wrapper, container]`` for inline margin notes."""
        kind = classify(element, self.context, inline=True)
        match kind:
            case MarginCandidate(element=node, classes=classes):
                wrapper, container = self._margin_panel(
                    node, classes, inline_blocks(node), wrapper_tag="span"
                )
                wrapper.tail = node.tail
                return [wrapper, container]
            case ExplicitPanel() | Ordinary():
                return element
        raise TypeError(f"Unhandled classification {kind!r}")

    # -- handlers --------------------------------------------------------------
    def _explicit_panel(self, element: ElementTree.Element) -> ElementTree.Element:
        identifier = element.get("id") or self.context.next_identifier()
        config = resolve_options(
            element.attrib,
            self.context.defaults,
            identifier=identifier,
            warn=self.context.warn,
        )

        split = partition(element_blocks(element), self.md)
        protected = ContentSplit(
            header_text=split.header_text,
            body_blocks=tuple(protect_headings(split.body_blocks, identifier, md=self.md)),
            footer_blocks=tuple(protect_headings(split.footer_blocks, None, md=self.md)),
        )
        container = build_panel(config, protected, raw=self.raw)

        trigger = render_trigger(config)
        if trigger is None:
            container.tail = element.tail
            return container

        container.tail = "\n"
        group = ElementTree.Element("div")
        group.text = self.raw(trigger)
        group.append(container)
        group.tail = element.tail
        return group

    def _margin_panel(
        self,
        element: ElementTree.Element,
        classes: tuple[str, ...],
        blocks: Sequence[ElementTree.Element],
        *,
        wrapper_tag: str,
    ) -> tuple[ElementTree.Element, ElementTree.Element]:
        identifier = element.get("id") or self.context.next_identifier()
        attributes = {
            key: value
            for key, value in element.attrib.items()
            if key not in _MARGIN_IGNORED_ATTRIBUTES
        }
        config = resolve_options(
            attributes,
            self.context.defaults.merged(_MARGIN_DEFAULT_OVERRIDES),
            identifier=identifier,
            warn=self.context.warn,
        )
        # Nested panels contribute their body text, not their stashed trigger or title.
        label = config.trigger_text or margin_trigger_text(
            flatten_text(blocks, self.md, raw=False)
        )
        config = replace(
            config,
            header_text=config.header_text or MARGIN_HEADER,
            trigger_text=label,
        )

        container = build_panel(
            config, ContentSplit(header_text=None, body_blocks=tuple(blocks)), raw=self.raw
        )
        container.tail = "\n"

        wrapper = ElementTree.Element(wrapper_tag, {"class": " ".join(classes)})
        wrapper.text = self.raw(render_trigger(config) or "")
        return wrapper, container


__all__ = [
    "BLOCK_TAGS",
    "INLINE_TAGS",
    "MARGIN_CLASSES",
    "PANEL_CLASS",
    "Classification",
    "ExplicitPanel",
    "MarginCandidate",
    "OffcanvasFilter",
    "Ordinary",
    "classify",
    "margin_trigger_text",
]
