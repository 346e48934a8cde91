"""YAML front matter splitting."""

from __future__ import annotations

import re
from typing import Any

import yaml


_FRONT_MATTER = re.compile(
    r"\A(?P<bom>﻿?)---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)``; the source is returned whole when no block parses.

    The block must open on the first line with ``---`` and close with ``---``
    or ``...``. A block that is not a YAML mapping yields empty metadata but
    is still stripped.
    """
    match = _FRONT_MATTER.match(source)
    if match is None:
        return {}, source

    try:
        metadata = yaml.safe_load(match.group("yaml")) or {}
    except yaml.YAMLError:
        return {}, source

    if not isinstance(metadata, dict):
        metadata = {}
    return metadata, match.group("bom") + source[match.end() :]


__all__ = ["split_front_matter"]
