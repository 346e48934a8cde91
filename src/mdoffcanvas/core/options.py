"""Option resolution for offcanvas panels.

Three tiers feed a panel configuration, from strongest to weakest:

1. attributes written on the block itself (``placement="end"``),
2. the document-wide defaults (front matter ``extensions.offcanvas`` or the
   extension ``options``),
3. the built-in constants carried by :class:`DocumentDefaults`.

Every value travels as a string until :func:`resolve_options` turns the
closed sets into enums. Booleans are the literal strings ``"true"`` and
``"false"``; no other truthiness is recognised. Invalid enum values never
raise: the resolver warns and falls back to the documented default.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum


class Placement(str, Enum):
    """Viewport edge the panel slides in from."""

    START = "start"
    END = "end"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def is_horizontal(self) -> bool:
        return self in (Placement.START, Placement.END)


class Responsive(str, Enum):
    """Bootstrap breakpoints above which the panel is shown inline."""

    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"
    XXL = "xxl"


class Backdrop(str, Enum):
    TRUE = "true"
    FALSE = "false"
    STATIC = "static"


class TriggerPosition(str, Enum):
    INLINE = "inline"
    NONE = "none"


class TriggerType(str, Enum):
    BUTTON = "button"
    TEXT = "text"


PLACEMENT_ALIASES: dict[str, str] = {"left": "start", "right": "end"}

# Public option name -> DocumentDefaults field.
OPTION_FIELDS: dict[str, str] = {
    "placement": "placement",
    "width": "width",
    "height": "height",
    "backdrop": "backdrop",
    "scroll": "scroll",
    "keyboard": "keyboard",
    "trigger-text": "trigger_text",
    "trigger-class": "trigger_class",
    "trigger-icon": "trigger_icon",
    "trigger-position": "trigger_position",
    "trigger-type": "trigger_type",
    "show-close": "show_close",
    "responsive": "responsive",
    "overtake-margins": "overtake_margins",
}


@dataclass(frozen=True, slots=True)
class DocumentDefaults:
    """Document-wide option table, one string per public option."""

    placement: str = "start"
    width: str = "400px"
    height: str = "30vh"
    backdrop: str = "true"
    scroll: str = "false"
    keyboard: str = "true"
    trigger_text: str = "Open"
    trigger_class: str = "btn btn-primary"
    trigger_icon: str = ""
    trigger_position: str = "inline"
    trigger_type: str = "button"
    show_close: str = "true"
    responsive: str = ""
    overtake_margins: str = "false"

    def get(self, key: str) -> str:
        """Return the value stored for a public option name."""
        return getattr(self, OPTION_FIELDS[key])

    def merged(self, values: Mapping[str, str]) -> DocumentDefaults:
        """Return a copy overlaid with the recognised keys of ``values``."""
        updates = {
            OPTION_FIELDS[key]: value for key, value in values.items() if key in OPTION_FIELDS
        }
        if not updates:
            return self
        return replace(self, **updates)

    def as_metadata(self) -> dict[str, str]:
        """Return the table keyed by public option names."""
        return {key: self.get(key) for key in OPTION_FIELDS}

    @property
    def overtake_margins_enabled(self) -> bool:
        return self.overtake_margins == "true"


@dataclass(frozen=True, slots=True)
class PanelConfig:
    """Fully resolved configuration of a single panel instance."""

    id: str
    placement: Placement = Placement.START
    width: str = "400px"
    height: str = "30vh"
    responsive: Responsive | None = None
    backdrop: Backdrop = Backdrop.TRUE
    scroll: bool = False
    keyboard: bool = True
    show_close: bool = True
    header_text: str | None = None
    trigger_text: str = "Open"
    trigger_class: str = "btn btn-primary"
    trigger_icon: str = ""
    trigger_position: TriggerPosition = TriggerPosition.INLINE
    trigger_type: TriggerType = TriggerType.BUTTON

    @property
    def label_id(self) -> str:
        return f"{self.id}-label"

    @property
    def style(self) -> str | None:
        """Return the sizing declaration for the placement axis."""
        if self.placement.is_horizontal:
            return f"width:{self.width};" if self.width else None
        return f"height:{self.height};" if self.height else None

    @property
    def behaviour_attributes(self) -> dict[str, str]:
        """Return the ``data-bs-*`` attributes that differ from Bootstrap defaults."""
        attributes: dict[str, str] = {}
        if self.backdrop is not Backdrop.TRUE:
            attributes["data-bs-backdrop"] = self.backdrop.value
        if self.scroll:
            attributes["data-bs-scroll"] = "true"
        if not self.keyboard:
            attributes["data-bs-keyboard"] = "false"
        return attributes


def normalise_placement(value: str) -> str:
    """Map ``left``/``right`` aliases onto Bootstrap placements."""
    return PLACEMENT_ALIASES.get(value, value)


def _ignore(_: str) -> None:
    return


def resolve_options(
    attributes: Mapping[str, str],
    defaults: DocumentDefaults,
    *,
    identifier: str,
    warn: Callable[[str], None] | None = None,
) -> PanelConfig:
    """Merge block attributes over ``defaults`` into a :class:`PanelConfig`."""
    warn = warn or _ignore

    def pick(key: str) -> str:
        value = attributes.get(key)
        if value:
            return str(value)
        return defaults.get(key)

    placement_value = normalise_placement(pick("placement"))
    try:
        placement = Placement(placement_value)
    except ValueError:
        warn(f'Invalid placement "{placement_value}". Using "start".')
        placement = Placement.START

    responsive: Responsive | None = None
    responsive_value = pick("responsive")
    if responsive_value:
        try:
            responsive = Responsive(responsive_value)
        except ValueError:
            warn(f'Invalid responsive breakpoint "{responsive_value}". Ignoring.')

    position_value = pick("trigger-position")
    try:
        trigger_position = TriggerPosition(position_value)
    except ValueError:
        warn(f'Invalid trigger-position "{position_value}". Using "inline".')
        trigger_position = TriggerPosition.INLINE

    backdrop_value = pick("backdrop")
    backdrop = (
        Backdrop(backdrop_value)
        if backdrop_value in (Backdrop.STATIC.value, Backdrop.FALSE.value)
        else Backdrop.TRUE
    )
    trigger_type = (
        TriggerType.TEXT if pick("trigger-type") == TriggerType.TEXT.value else TriggerType.BUTTON
    )

    return PanelConfig(
        id=identifier,
        placement=placement,
        width=pick("width"),
        height=pick("height"),
        responsive=responsive,
        backdrop=backdrop,
        scroll=pick("scroll") == "true",
        keyboard=pick("keyboard") != "false",
        show_close=pick("show-close") == "true",
        header_text=attributes.get("title") or None,
        trigger_text=pick("trigger-text"),
        trigger_class=pick("trigger-class"),
        trigger_icon=pick("trigger-icon"),
        trigger_position=trigger_position,
        trigger_type=trigger_type,
    )


__all__ = [
    "OPTION_FIELDS",
    "PLACEMENT_ALIASES",
    "Backdrop",
    "DocumentDefaults",
    "PanelConfig",
    "Placement",
    "Responsive",
    "TriggerPosition",
    "TriggerType",
    "normalise_placement",
    "resolve_options",
]
