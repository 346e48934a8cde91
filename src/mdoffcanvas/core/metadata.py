"""Metadata phase: fold document-wide options into the panel defaults."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from .context import OffcanvasContext
from .diagnostics import EXTENSION_NAME
from .exceptions import OffcanvasConfigError
from .options import DocumentDefaults
from .schema import validate_options


def defaults_from_options(
    options: Mapping[str, Any] | None,
    *,
    base: DocumentDefaults | None = None,
    warn: Callable[[str], None] | None = None,
    source: str = "options",
) -> DocumentDefaults:
    """Validate ``options`` and overlay them on ``base`` (built-ins by default)."""
    validated = validate_options(options, source=source)
    if warn is not None:
        for key in validated.unknown_keys:
            warn(f'Unknown option "{key}" in {source}. Ignoring.')
    return (base or DocumentDefaults()).merged(validated.values)


def transform_metadata(
    meta: MutableMapping[str, Any], context: OffcanvasContext
) -> MutableMapping[str, Any]:
    """Merge ``meta['extensions']['offcanvas']`` into ``context.defaults``.

    The resolved table, including values inherited from lower tiers, is
    written back into ``meta`` for downstream consumers.
    """
    extensions = meta.get("extensions")
    if extensions is not None and not isinstance(extensions, Mapping):
        raise OffcanvasConfigError(
            f"'extensions' must be a mapping, got {type(extensions).__name__}.",
            problems=["extensions"],
        )

    raw = extensions.get(EXTENSION_NAME) if extensions else None
    context.defaults = defaults_from_options(
        raw,
        base=context.defaults,
        warn=context.warn,
        source=f"extensions.{EXTENSION_NAME}",
    )

    section: dict[str, Any] = dict(raw) if isinstance(raw, Mapping) else {}
    section.update(context.defaults.as_metadata())
    updated = dict(extensions or {})
    updated[EXTENSION_NAME] = section
    meta["extensions"] = updated
    return meta


__all__ = ["defaults_from_options", "transform_metadata"]
