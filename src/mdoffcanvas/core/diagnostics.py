"""Diagnostic abstractions shared by the offcanvas transform."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


logger = logging.getLogger("mdoffcanvas")

EXTENSION_NAME = "offcanvas"


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings and errors."""

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)


def attributed(message: str) -> str:
    """Prefix a message with the extension name."""
    return f"[{EXTENSION_NAME}] {message}"


__all__ = [
    "EXTENSION_NAME",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "attributed",
]
