from __future__ import annotations

import xml.etree.ElementTree as ElementTree

from markdown import Markdown

from mdoffcanvas.core.content import (
    LEVEL_ATTRIBUTE,
    PROTECTED_HEADING_TAG,
    element_blocks,
    flatten_text,
    partition,
    protect_headings,
    restore_protected_headings,
)


def _el(tag: str, text: str | None = None, **attrib: str) -> ElementTree.Element:
    element = ElementTree.Element(tag, attrib)
    element.text = text
    return element


def test_partition_takes_first_heading_and_first_divider() -> None:
    blocks = [
        _el("h2", "Title"),
        _el("p", "Body one"),
        _el("h3", "Later heading"),
        _el("hr"),
        _el("p", "Footer"),
        _el("hr"),
        _el("p", "Still footer"),
    ]

    split = partition(blocks)

    assert split.header_text == "Title"
    assert [block.text for block in split.body_blocks] == ["Body one", "Later heading"]
    assert [block.tag for block in split.footer_blocks] == ["p", "hr", "p"]


def test_partition_without_heading_or_divider() -> None:
    blocks = [_el("p", "one"), _el("p", "two")]
    split = partition(blocks)
    assert split.header_text is None
    assert list(split.body_blocks) == blocks
    assert split.footer_blocks == ()


def test_heading_after_divider_stays_in_footer() -> None:
    split = partition([_el("p", "body"), _el("hr"), _el("h2", "Not a title")])
    assert split.header_text is None
    assert [block.tag for block in split.footer_blocks] == ["h2"]


def test_heading_then_divider_gives_empty_body() -> None:
    split = partition([_el("h2", "Title"), _el("hr"), _el("p", "Footer")])
    assert split.header_text == "Title"
    assert split.body_blocks == ()
    assert [block.text for block in split.footer_blocks] == ["Footer"]


def test_flatten_text_collapses_whitespace() -> None:
    heading = _el("h2", "  Hello\n")
    strong = ElementTree.SubElement(heading, "strong")
    strong.text = "big"
    strong.tail = "   world "
    assert flatten_text(heading) == "Hello big world"


def test_flatten_text_renders_stashed_markup() -> None:
    md = Markdown()
    placeholder = md.htmlStash.store("<em>Fish &amp; Chips</em>")
    paragraph = _el("p", f"Order {placeholder} now")
    assert flatten_text(paragraph, md) == "Order Fish & Chips now"


def test_flatten_text_can_drop_stashed_markup() -> None:
    md = Markdown()
    placeholder = md.htmlStash.store("<button>Open</button>")
    paragraph = _el("p", f"{placeholder}inner body")
    assert flatten_text(paragraph, md, raw=False) == "inner body"


def test_element_blocks_wraps_loose_text() -> None:
    container = _el("div", "  loose text ")
    container.append(_el("p", "para"))
    blocks = element_blocks(container)
    assert [(block.tag, block.text) for block in blocks] == [("p", "loose text"), ("p", "para")]


def test_protect_headings_scopes_ids_and_keeps_input() -> None:
    original = [
        _el("h2", "Intro"),
        _el("h3", "Intro"),
        _el("h2", "Named", id="custom"),
    ]
    wrapper = _el("div")
    wrapper.append(_el("h4", "Nested"))
    original.append(wrapper)

    protected = protect_headings(original, "oc-3")

    assert [block.tag for block in original[:3]] == ["h2", "h3", "h2"]
    assert original[2].get("id") == "custom"

    assert protected[0].tag == PROTECTED_HEADING_TAG
    assert protected[0].get(LEVEL_ATTRIBUTE) == "2"
    assert protected[0].get("class") == "unlisted"
    assert [block.get("id") for block in protected[:3]] == [
        "oc-3-intro",
        "oc-3-intro-1",
        "oc-3-custom",
    ]
    nested = protected[3][0]
    assert nested.tag == PROTECTED_HEADING_TAG
    assert nested.get(LEVEL_ATTRIBUTE) == "4"
    assert nested.get("id") == "oc-3-nested"


def test_protect_headings_without_scope_leaves_ids() -> None:
    protected = protect_headings([_el("h2", "Footer heading", id="keep", **{"class": "x"})])
    assert protected[0].get("id") == "keep"
    assert protected[0].get("class") == "x unlisted"


def test_restore_protected_headings() -> None:
    root = _el("div")
    root.extend(protect_headings([_el("h5", "Deep")], "oc-1"))

    assert restore_protected_headings(root) == 1

    heading = root[0]
    assert heading.tag == "h5"
    assert heading.text == "Deep"
    assert LEVEL_ATTRIBUTE not in heading.attrib
    assert heading.get("id") == "oc-1-deep"
