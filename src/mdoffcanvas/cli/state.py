"""Shared CLI state management utilities."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING

from mdoffcanvas.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Shared state controlling CLI diagnostics."""

    verbosity: int = 0
    warnings: list[str] = field(default_factory=list, init=False)
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Return a lazily instantiated stdout console."""
        from rich.console import Console

        current = getattr(self._console, "file", None)
        if self._console is None or current is not sys.stdout:
            self._console = Console(file=sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        """Return a lazily instantiated stderr console."""
        from rich.console import Console

        current = getattr(self._err_console, "file", None)
        if self._err_console is None or current is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("mdoffcanvas_cli_state", default=None)


def get_cli_state() -> CLIState:
    """Return the active CLI state, creating it on first use."""
    state = _STATE_VAR.get(None)
    if state is None:
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int | None = None) -> CLIState:
    """Start a fresh CLI state for one invocation."""
    state = CLIState(verbosity=max(0, verbosity or 0))
    _STATE_VAR.set(state)
    return state


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Render a formatted message on stderr, with details at higher verbosity."""
    from rich.text import Text

    state = get_cli_state()
    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    if exception is not None and state.verbosity >= 1:
        extra_lines = [f"type: {type(exception).__name__}"]
        problems = getattr(exception, "problems", None)
        if problems:
            extra_lines.extend(f"  - {problem}" for problem in problems)
        if state.verbosity >= 2:
            causes = exception_messages(exception)[1:]
            if causes:
                extra_lines.append("caused by:")
                extra_lines.extend(f"  {entry}" for entry in causes)
        text.append("\n")
        text.append("\n".join(extra_lines), style=style)

    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    """Print a warning on stderr and remember it for the run summary."""
    get_cli_state().warnings.append(message)
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Print an error on stderr."""
    render_message("error", message, exception=exception)
