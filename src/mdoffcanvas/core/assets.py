"""Static HTML dependencies required by synthesized panels."""

from __future__ import annotations

from collections.abc import Iterator, MutableSequence
from dataclasses import dataclass
from importlib import resources
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from importlib.resources.abc import Traversable


RESOURCE_PACKAGE = "mdoffcanvas"
RESOURCE_DIR = "resources"


@dataclass(frozen=True, slots=True)
class HtmlDependency:
    """Named bundle of stylesheets shipped with the package."""

    name: str
    version: str
    stylesheets: tuple[str, ...] = ()

    def iter_stylesheets(self) -> Iterator[tuple[str, Traversable]]:
        """Yield ``(filename, resource)`` pairs for every stylesheet."""
        root = resources.files(RESOURCE_PACKAGE) / RESOURCE_DIR
        for name in self.stylesheets:
            yield name, root / name

    def read_stylesheets(self) -> str:
        """Return the concatenated stylesheet sources."""
        chunks = [resource.read_text(encoding="utf-8") for _, resource in self.iter_stylesheets()]
        return "\n".join(chunks)


OFFCANVAS_DEPENDENCY = HtmlDependency(
    name="markdown-offcanvas",
    version="1.0.0",
    stylesheets=("offcanvas.css",),
)


def register_dependency(
    registry: MutableSequence[HtmlDependency], dependency: HtmlDependency
) -> bool:
    """Add ``dependency`` unless one with the same name is present."""
    if any(existing.name == dependency.name for existing in registry):
        return False
    registry.append(dependency)
    return True


__all__ = ["OFFCANVAS_DEPENDENCY", "HtmlDependency", "register_dependency"]
