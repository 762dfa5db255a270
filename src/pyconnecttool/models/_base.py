"""Base model for core command replies.

Every reply model inherits from :class:`CoreModel` which provides:

* frozen instances, so published snapshots can be shared with views;
* ``extra="ignore"`` so new fields from a newer core do not break parsing;
* a ``raw`` dict that captures the reply payload as received.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def safe_int(value: Any) -> int | None:
    """Coerce *value* to ``int``; ``None`` when absent or unparseable."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return int(result)


def _count(value: Any) -> int:
    parsed = safe_int(value)
    return 0 if parsed is None or parsed < 0 else parsed


OptionalInt = Annotated[int | None, BeforeValidator(safe_int)]
"""Integer field that tolerates ``null``, empty strings and floats."""

Counter = Annotated[int, BeforeValidator(_count)]
"""Non-negative counter; missing or garbage values read as ``0``."""


class CoreModel(BaseModel):
    """Base for core reply models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Reply dict as received."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        # Only auto-stash raw when validating a reply dict; keyword
        # construction that passes raw= keeps the caller's value.
        if not isinstance(values, dict) or "raw" in values:
            return values
        stashed = dict(values)
        stashed["raw"] = dict(values)
        return stashed


class CommandAck(CoreModel):
    """Generic acknowledgement for mutating commands."""

    success: bool = True
    message: str = ""
