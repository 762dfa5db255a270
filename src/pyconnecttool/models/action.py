"""Outcome of a user-initiated one-shot action."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ActionResult(BaseModel):
    """Reported back to the view that triggered an action.

    ``ok`` is ``False`` when the action was rejected locally, rejected as
    busy, or failed remotely; ``message`` then carries the reason.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    message: str = ""
    data: Any = None

    @classmethod
    def failed(cls, message: str) -> ActionResult:
        return cls(ok=False, message=message)
