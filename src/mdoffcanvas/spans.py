"""Inline processor for bracketed spans: ``[text]{.class #id key=value}``."""

from __future__ import annotations

from dataclasses import dataclass
import re
import shlex
from xml.etree import ElementTree

from markdown.inlinepatterns import InlineProcessor


BRACKETED_SPAN_PATTERN = r"(?<!\!)\[(?!\^)(?P<text>[^\[\]\n]+)\]\{:?\s*(?P<attrs>[^{}\n]*)\}"


@dataclass(slots=True)
class AttributePayload:
    classes: list[str]
    identifier: str | None
    attributes: dict[str, str]


def parse_attributes(raw: str | None) -> AttributePayload:
    """Parse ``.class #id key=value`` tokens, honouring shell-style quotes."""
    if not raw:
        return AttributePayload([], None, {})

    classes: list[str] = []
    attributes: dict[str, str] = {}
    identifier: str | None = None

    lexer = shlex.shlex(raw.strip(), posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""

    try:
        tokens = list(lexer)
    except ValueError:
        # Unbalanced quotes: fall back to whitespace splitting.
        tokens = raw.split()

    for token in tokens:
        if not token:
            continue
        if token.startswith("."):
            classes.append(token[1:])
        elif token.startswith("#"):
            identifier = token[1:] or identifier
        elif "=" in token:
            key, value = token.split("=", 1)
            attributes[key] = value

    return AttributePayload(classes, identifier, attributes)


class BracketedSpanProcessor(InlineProcessor):
    """Turn ``[text]{...}`` into a ``<span>`` carrying the attributes."""

    def handleMatch(  # noqa: N802 - Markdown inline API requires camelCase
        self,
        m: re.Match[str],
        data: str,
    ) -> tuple[ElementTree.Element, int, int]:  # type: ignore[override]
        del data
        payload = parse_attributes(m.group("attrs"))

        element = ElementTree.Element("span")
        if payload.identifier:
            element.set("id", payload.identifier)
        if payload.classes:
            element.set("class", " ".join(payload.classes))
        for key, value in payload.attributes.items():
            element.set(key, value)
        element.text = m.group("text")
        return element, m.start(0), m.end(0)


__all__ = [
    "BRACKETED_SPAN_PATTERN",
    "AttributePayload",
    "BracketedSpanProcessor",
    "parse_attributes",
]
