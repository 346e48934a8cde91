"""Schema validation for document-wide offcanvas options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from .exceptions import OffcanvasConfigError
from .options import OPTION_FIELDS


# YAML booleans or their literal spelling; "on", "yes" and numbers are rejected.
Flag = StrictBool | Literal["true", "false"]


class OffcanvasOptions(BaseModel):
    """Accepted shape of ``extensions.offcanvas``.

    Closed sets such as ``placement`` are plain strings here: unknown values
    are a resolution-time warning, not a schema failure.
    Boolean switches are strict: only YAML booleans or ``"true"``/``"false"``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    placement: str | None = None
    width: str | None = None
    height: str | None = None
    backdrop: StrictBool | str | None = None
    scroll: Flag | None = None
    keyboard: Flag | None = None
    trigger_text: str | None = Field(default=None, alias="trigger-text")
    trigger_class: str | None = Field(default=None, alias="trigger-class")
    trigger_icon: str | None = Field(default=None, alias="trigger-icon")
    trigger_position: str | None = Field(default=None, alias="trigger-position")
    trigger_type: str | None = Field(default=None, alias="trigger-type")
    show_close: Flag | None = Field(default=None, alias="show-close")
    responsive: str | None = None
    overtake_margins: Flag | None = Field(default=None, alias="overtake-margins")


@dataclass(slots=True)
class ValidatedOptions:
    """Stringified option values plus the keys the schema does not know."""

    values: dict[str, str] = field(default_factory=dict)
    unknown_keys: list[str] = field(default_factory=list)


def stringify_option(value: Any) -> str:
    """Render a metadata scalar the way option values are compared."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def validate_options(raw: Any, *, source: str = "extensions.offcanvas") -> ValidatedOptions:
    """Validate ``raw`` against :class:`OffcanvasOptions`.

    Raises :class:`OffcanvasConfigError` when the mapping cannot be accepted.
    """
    if raw is None:
        return ValidatedOptions()
    if not isinstance(raw, Mapping):
        raise OffcanvasConfigError(
            f"'{source}' must be a mapping, got {type(raw).__name__}.",
            problems=[source],
        )

    try:
        model = OffcanvasOptions.model_validate(dict(raw))
    except ValidationError as exc:
        problems = [
            f"{source}.{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        details = "; ".join(problems)
        raise OffcanvasConfigError(
            f"Invalid offcanvas configuration: {details}", problems=problems
        ) from exc

    values: dict[str, str] = {}
    for key, name in OPTION_FIELDS.items():
        value = getattr(model, name)
        if value is not None:
            values[key] = stringify_option(value)

    return ValidatedOptions(values=values, unknown_keys=sorted(model.model_extra or {}))


__all__ = ["OffcanvasOptions", "ValidatedOptions", "stringify_option", "validate_options"]
