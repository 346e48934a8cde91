"""Build Bootstrap offcanvas structures and their trigger controls.

Structural nodes are ElementTree elements so the host keeps serialising them.
Fragments carrying user text (the title, the dismiss control, and the
trigger) are raw markup: every interpolated value goes through
:func:`escape_html` and the result is handed to the host through a
``raw`` callable, typically ``Markdown.htmlStash.store``.
"""

from __future__ import annotations

from collections.abc import Callable
import html
import xml.etree.ElementTree as ElementTree

from .content import ContentSplit
from .options import PanelConfig, TriggerPosition, TriggerType


RawStash = Callable[[str], str]

CLOSE_BUTTON = (
    '<button type="button" class="btn-close" data-bs-dismiss="offcanvas" '
    'aria-label="Close"></button>'
)


def escape_html(value: str | None) -> str:
    """Escape ``& < > " '`` for use in markup text and attribute values."""
    if not value:
        return ""
    return html.escape(value, quote=True)


def keep_markup(markup: str) -> str:
    """Default raw stash: hand the markup back unchanged."""
    return markup


def panel_classes(config: PanelConfig) -> str:
    classes = ["offcanvas", f"offcanvas-{config.placement.value}"]
    if config.responsive is not None:
        classes.append(f"offcanvas-{config.responsive.value}")
    return " ".join(classes)


def render_title(config: PanelConfig, header_text: str | None) -> str | None:
    if header_text is None:
        return None
    return (
        f'<h5 class="offcanvas-title" id="{escape_html(config.label_id)}">'
        f"{escape_html(header_text)}</h5>"
    )


def render_trigger(config: PanelConfig) -> str | None:
    """Return the control that opens the panel, or ``None`` when suppressed."""
    if config.trigger_position is TriggerPosition.NONE:
        return None

    target = escape_html(config.id)
    icon = f'<i class="{escape_html(config.trigger_icon)}"></i> ' if config.trigger_icon else ""
    class_attr = ""
    if config.trigger_class and config.trigger_class != "none":
        class_attr = f' class="{escape_html(config.trigger_class)}"'
    toggle = f'data-bs-toggle="offcanvas" data-bs-target="#{target}" aria-controls="{target}"'
    label = f"{icon}{escape_html(config.trigger_text)}"

    if config.trigger_type is TriggerType.TEXT:
        return f'<span{class_attr} {toggle} style="cursor: pointer;">{label}</span>'
    return f'<button{class_attr} type="button" {toggle}>{label}</button>'


def build_panel(
    config: PanelConfig,
    split: ContentSplit,
    *,
    raw: RawStash | None = None,
) -> ElementTree.Element:
    """Assemble the offcanvas container for ``config`` around ``split``.

    ``config.header_text`` (an explicit title) wins over the heading found in
    ``split``.
    """
    store = raw or keep_markup

    container = ElementTree.Element(
        "div",
        {
            "id": config.id,
            "class": panel_classes(config),
            "tabindex": "-1",
            "aria-labelledby": config.label_id,
        },
    )
    container.attrib.update(config.behaviour_attributes)
    style = config.style
    if style:
        container.set("style", style)
    container.text = "\n"

    header_text = config.header_text if config.header_text is not None else split.header_text
    fragments = [render_title(config, header_text)]
    if config.show_close:
        fragments.append(CLOSE_BUTTON)
    markup = "".join(fragment for fragment in fragments if fragment)

    header = ElementTree.SubElement(container, "div", {"class": "offcanvas-header"})
    if markup:
        header.text = store(markup)
    header.tail = "\n"

    body = ElementTree.SubElement(container, "div", {"class": "offcanvas-body"})
    body.extend(split.body_blocks)
    body.tail = "\n"

    if split.footer_blocks:
        footer = ElementTree.SubElement(container, "div", {"class": "offcanvas-footer"})
        footer.extend(split.footer_blocks)
        footer.tail = "\n"

    return container


__all__ = [
    "CLOSE_BUTTON",
    "RawStash",
    "build_panel",
    "escape_html",
    "keep_markup",
    "panel_classes",
    "render_title",
    "render_trigger",
]
