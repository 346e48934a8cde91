"""Diagnostic emitter bridging the offcanvas transform with CLI rendering."""

from __future__ import annotations

from mdoffcanvas.core.diagnostics import DiagnosticEmitter

from .state import emit_error, emit_warning


class CliEmitter(DiagnosticEmitter):
    """Emit diagnostics using the rich-enabled CLI helpers."""

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)


__all__ = ["CliEmitter"]
