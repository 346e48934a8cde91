"""Exception hierarchy for the offcanvas transform."""

from __future__ import annotations


class OffcanvasError(RuntimeError):
    """Base exception for offcanvas failures."""


class OffcanvasConfigError(OffcanvasError, ValueError):
    """Raised when the offcanvas configuration fails schema validation."""

    def __init__(self, message: str, *, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems or [])


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = ["OffcanvasConfigError", "OffcanvasError", "exception_messages"]
