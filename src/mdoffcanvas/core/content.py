"""Content partitioning and heading outline protection for panel bodies."""

from __future__ import annotations

from collections.abc import Iterable
import copy
from dataclasses import dataclass
import html
from typing import TYPE_CHECKING
import xml.etree.ElementTree as ElementTree

from markdown.extensions.toc import run_postprocessors, strip_tags
from markdown.treeprocessors import UnescapeTreeprocessor
from markdown.util import HTML_PLACEHOLDER_RE
from slugify import slugify


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown import Markdown


HEADING_TAGS = frozenset(f"h{level}" for level in range(1, 7))
DIVIDER_TAG = "hr"

# Headings inside panels are parked under this tag until the outline has been
# built, then restored by :func:`restore_protected_headings`.
PROTECTED_HEADING_TAG = "offcanvas-heading"
LEVEL_ATTRIBUTE = "data-offcanvas-level"
UNLISTED_CLASS = "unlisted"

_UNESCAPER = UnescapeTreeprocessor()


@dataclass(frozen=True, slots=True)
class ContentSplit:
    """Title, body, and footer carved out of a panel's blocks."""

    header_text: str | None
    body_blocks: tuple[ElementTree.Element, ...]
    footer_blocks: tuple[ElementTree.Element, ...] = ()


def _tag(element: ElementTree.Element) -> str:
    tag = element.tag
    return tag.lower() if isinstance(tag, str) else ""


def element_blocks(element: ElementTree.Element) -> list[ElementTree.Element]:
    """Return the block children of ``element``.

    Loose leading text is wrapped in a paragraph so that it survives being
    moved into a synthesized container.
    """
    blocks = list(element)
    if element.text and element.text.strip():
        paragraph = ElementTree.Element("p")
        paragraph.text = element.text.strip()
        blocks.insert(0, paragraph)
    return blocks


def inline_blocks(element: ElementTree.Element) -> list[ElementTree.Element]:
    """Wrap the inline content of ``element`` into a single paragraph."""
    paragraph = ElementTree.Element("p")
    paragraph.text = element.text
    paragraph.extend(list(element))
    return [paragraph]


def flatten_text(
    node: ElementTree.Element | Iterable[ElementTree.Element],
    md: Markdown | None = None,
    *,
    raw: bool = True,
) -> str:
    """Return the visible text of ``node`` with whitespace collapsed.

    Stashed markup is rendered and stripped of its tags, or dropped entirely
    when ``raw`` is false.
    """
    if isinstance(node, ElementTree.Element):
        text = "".join(node.itertext())
    else:
        text = " ".join("".join(element.itertext()) for element in node)
    text = _UNESCAPER.unescape(text)
    if md is not None:
        if not raw:
            text = HTML_PLACEHOLDER_RE.sub(" ", text)
        text = run_postprocessors(html.escape(text, quote=False), md)
        text = html.unescape(strip_tags(text))
    return " ".join(text.split())


def partition(
    blocks: Iterable[ElementTree.Element], md: Markdown | None = None
) -> ContentSplit:
    """Split ``blocks`` into title, body, and footer in a single pass.

    The first heading seen before any divider becomes the title. The first
    ``<hr>`` separates body from footer; later dividers are ordinary content.
    """
    header_text: str | None = None
    header_taken = False
    divider_seen = False
    body: list[ElementTree.Element] = []
    footer: list[ElementTree.Element] = []

    for block in blocks:
        if divider_seen:
            footer.append(block)
            continue
        tag = _tag(block)
        if tag == DIVIDER_TAG:
            divider_seen = True
            continue
        if not header_taken and tag in HEADING_TAGS:
            header_text = flatten_text(block, md)
            header_taken = True
            continue
        body.append(block)

    return ContentSplit(
        header_text=header_text, body_blocks=tuple(body), footer_blocks=tuple(footer)
    )


def protect_headings(
    blocks: Iterable[ElementTree.Element],
    scope_id: str | None = None,
    *,
    md: Markdown | None = None,
) -> list[ElementTree.Element]:
    """Return copies of ``blocks`` whose headings are hidden from the outline.

    With ``scope_id`` every heading id is prefixed so anchors stay unique
    inside the panel; without it ids are left as they are.
    """
    protected = [copy.deepcopy(block) for block in blocks]
    used_ids: set[str] = set()
    for block in protected:
        for element in list(block.iter()):
            if _tag(element) in HEADING_TAGS:
                _protect_heading(element, scope_id, used_ids, md)
    return protected


def _protect_heading(
    element: ElementTree.Element,
    scope_id: str | None,
    used_ids: set[str],
    md: Markdown | None,
) -> None:
    level = _tag(element)[1]
    element.tag = PROTECTED_HEADING_TAG
    element.set(LEVEL_ATTRIBUTE, level)

    classes = element.get("class", "").split()
    if UNLISTED_CLASS not in classes:
        classes.append(UNLISTED_CLASS)
    element.set("class", " ".join(classes))

    if scope_id is None:
        return

    base = element.get("id") or slugify(flatten_text(element, md)) or "section"
    candidate = f"{scope_id}-{base}"
    unique = candidate
    suffix = 1
    while unique in used_ids:
        unique = f"{candidate}-{suffix}"
        suffix += 1
    used_ids.add(unique)
    element.set("id", unique)


def restore_protected_headings(root: ElementTree.Element) -> int:
    """Turn protected placeholders back into ``h1``-``h6``; return the count."""
    restored = 0
    for element in list(root.iter(PROTECTED_HEADING_TAG)):
        level = element.attrib.pop(LEVEL_ATTRIBUTE, "2")
        element.tag = f"h{level}"
        restored += 1
    return restored


__all__ = [
    "DIVIDER_TAG",
    "HEADING_TAGS",
    "PROTECTED_HEADING_TAG",
    "UNLISTED_CLASS",
    "ContentSplit",
    "element_blocks",
    "flatten_text",
    "inline_blocks",
    "partition",
    "protect_headings",
    "restore_protected_headings",
]
