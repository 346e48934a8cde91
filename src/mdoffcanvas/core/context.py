"""Per-document state threaded through the offcanvas transform."""

from __future__ import annotations

from dataclasses import dataclass, field

from .diagnostics import DiagnosticEmitter, LoggingEmitter, attributed
from .options import DocumentDefaults


HTML_FORMATS = frozenset({"html", "html4", "html5", "xhtml", "revealjs", "dashboard"})


@dataclass(frozen=True, slots=True)
class TargetCapabilities:
    """Describe the output the converted document ends up in."""

    format: str = "html"
    scripting: bool = True
    bootstrap: bool = True

    def is_format(self, selector: str) -> bool:
        """Match selectors such as ``html`` or ``html:js`` against the target."""
        name, _, feature = selector.partition(":")
        if name == "html":
            matches = self.format in HTML_FORMATS
        else:
            matches = self.format == name
        if feature == "js":
            matches = matches and self.scripting
        return matches

    @property
    def has_bootstrap(self) -> bool:
        return self.bootstrap and self.is_format("html")


@dataclass(slots=True)
class OffcanvasContext:
    """State shared by every hook during one document conversion."""

    defaults: DocumentDefaults = field(default_factory=DocumentDefaults)
    capabilities: TargetCapabilities = field(default_factory=TargetCapabilities)
    emitter: DiagnosticEmitter = field(default_factory=LoggingEmitter)
    _counter: int = field(default=0, init=False, repr=False)

    @property
    def transforms_enabled(self) -> bool:
        """Return whether panels can be synthesized for this target."""
        return self.capabilities.is_format("html:js") and self.capabilities.has_bootstrap

    def next_identifier(self) -> str:
        """Return a fresh ``oc-<n>`` identifier."""
        self._counter += 1
        return f"oc-{self._counter}"

    def warn(self, message: str) -> None:
        self.emitter.warning(attributed(message))


__all__ = ["HTML_FORMATS", "OffcanvasContext", "TargetCapabilities"]
