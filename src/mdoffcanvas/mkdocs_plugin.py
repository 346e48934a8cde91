"""MkDocs plugin wiring the offcanvas extension into every page."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from mkdocs import plugins
from mkdocs.config import config_options
from mkdocs.config.defaults import MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import Files
from mkdocs.structure.pages import Page

from .core.assets import OFFCANVAS_DEPENDENCY
from .core.diagnostics import EXTENSION_NAME
from .core.exceptions import OffcanvasConfigError, exception_messages
from .core.metadata import defaults_from_options
from .core.schema import validate_options


EXTENSION = "mdoffcanvas.extension"
EXTENSION_ALIASES = (EXTENSION, EXTENSION_NAME, "mdoffcanvas.extension:OffcanvasExtension")
STYLESHEET_DIR = "assets/mdoffcanvas"


def _registered_name(extensions: Iterable[Any]) -> str | None:
    for name in extensions:
        if isinstance(name, str) and name in EXTENSION_ALIASES:
            return name
    return None


def _plugin_error(exc: OffcanvasConfigError, where: str) -> PluginError:
    details = "; ".join(exception_messages(exc))
    return PluginError(f"[{EXTENSION_NAME}] invalid configuration in {where}: {details}")


class OffcanvasPlugin(BasePlugin):
    """Enable offcanvas panels and ship their stylesheet."""

    config_scheme = (
        ("options", config_options.Type(dict, default={})),
        ("stylesheet", config_options.Type(bool, default=True)),
    )

    def __init__(self) -> None:
        self._extension_name = EXTENSION

    @property
    def stylesheet_paths(self) -> list[str]:
        return [f"{STYLESHEET_DIR}/{name}" for name in OFFCANVAS_DEPENDENCY.stylesheets]

    def on_config(self, config: MkDocsConfig) -> MkDocsConfig:
        """Register the extension once and seed its site-level options."""
        options = dict(self.config.get("options") or {})
        try:
            defaults_from_options(options, source="plugins.offcanvas.options")
        except OffcanvasConfigError as exc:
            raise _plugin_error(exc, "plugins.offcanvas.options") from exc

        extensions = list(config.markdown_extensions or [])
        existing = _registered_name(extensions)
        if existing is None:
            extensions.append(EXTENSION)
            config.markdown_extensions = extensions
            existing = EXTENSION
        self._extension_name = existing

        mdx_configs = config.mdx_configs
        extension_config = dict(mdx_configs.get(existing) or {})
        merged_options = dict(extension_config.get("options") or {})
        merged_options.update(options)
        extension_config["options"] = merged_options
        # MkDocs strips front matter into page.meta before rendering.
        extension_config["front_matter"] = False
        extension_config.setdefault("metadata", {})
        mdx_configs[existing] = extension_config

        if self.config.get("stylesheet", True):
            extra_css = list(config.extra_css or [])
            for path in self.stylesheet_paths:
                if path not in extra_css:
                    extra_css.append(path)
            config.extra_css = extra_css
        return config

    def on_page_markdown(
        self,
        markdown: str,
        page: Page,
        config: MkDocsConfig,
        files: Files,
    ) -> str:
        """Forward the page metadata to the extension for this page."""
        del files
        meta: Mapping[str, Any] = page.meta or {}
        extensions = meta.get("extensions")
        section = extensions.get(EXTENSION_NAME) if isinstance(extensions, Mapping) else None
        where = f"{page.file.src_path} (extensions.{EXTENSION_NAME})"
        try:
            if extensions is not None and not isinstance(extensions, Mapping):
                raise OffcanvasConfigError(
                    f"'extensions' must be a mapping, got {type(extensions).__name__}.",
                    problems=["extensions"],
                )
            validate_options(section, source=where)
        except OffcanvasConfigError as exc:
            raise _plugin_error(exc, where) from exc

        config.mdx_configs.setdefault(self._extension_name, {})["metadata"] = dict(meta)
        return markdown

    @plugins.event_priority(-100)
    def on_post_build(self, config: MkDocsConfig) -> None:
        """Copy the stylesheet into the built site."""
        if not self.config.get("stylesheet", True):
            return
        target_dir = Path(config.site_dir) / STYLESHEET_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        for name, resource in OFFCANVAS_DEPENDENCY.iter_stylesheets():
            (target_dir / name).write_text(resource.read_text(encoding="utf-8"), encoding="utf-8")


__all__ = ["EXTENSION", "OffcanvasPlugin"]
