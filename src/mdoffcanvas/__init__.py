"""Bootstrap offcanvas panels for Python-Markdown."""

from __future__ import annotations

from mdoffcanvas.core.assets import OFFCANVAS_DEPENDENCY, HtmlDependency
from mdoffcanvas.core.content import ContentSplit, partition, protect_headings
from mdoffcanvas.core.context import OffcanvasContext, TargetCapabilities
from mdoffcanvas.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from mdoffcanvas.core.dispatch import OffcanvasFilter, classify
from mdoffcanvas.core.exceptions import OffcanvasConfigError, OffcanvasError
from mdoffcanvas.core.options import (
    DocumentDefaults,
    PanelConfig,
    Placement,
    resolve_options,
)
from mdoffcanvas.core.synthesis import build_panel, render_trigger
from mdoffcanvas.extension import OffcanvasExtension, makeExtension
from mdoffcanvas.markdown import MarkdownDocument, render_markdown
from mdoffcanvas.version import get_version


__version__ = get_version()

__all__ = [
    "OFFCANVAS_DEPENDENCY",
    "ContentSplit",
    "DiagnosticEmitter",
    "DocumentDefaults",
    "HtmlDependency",
    "LoggingEmitter",
    "MarkdownDocument",
    "NullEmitter",
    "OffcanvasConfigError",
    "OffcanvasContext",
    "OffcanvasError",
    "OffcanvasExtension",
    "OffcanvasFilter",
    "PanelConfig",
    "Placement",
    "TargetCapabilities",
    "__version__",
    "build_panel",
    "classify",
    "makeExtension",
    "partition",
    "protect_headings",
    "render_markdown",
    "render_trigger",
    "resolve_options",
]
