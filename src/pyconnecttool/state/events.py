"""Snapshot sections and notification events."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateSection(StrEnum):
    LOBBY = "lobby"
    VPN = "vpn"
    STEAM = "steam"
    FIREWALL = "firewall"


class NotificationKind(StrEnum):
    ERROR = "error"
    SUCCESS = "success"


class SectionSnapshot(BaseModel):
    """The last successfully reconciled value for one section.

    Replaced wholesale on every publish; ``revision`` counts publishes.
    """

    model_config = ConfigDict(frozen=True)

    section: StateSection
    value: Any
    revision: int = Field(..., ge=1)
    published_at: datetime


class NotificationEvent(BaseModel):
    """A transient user-facing message request.

    The presentation layer owns display and dismissal; ``expires_at`` is a
    hint for when to dismiss it.
    """

    model_config = ConfigDict(frozen=True)

    kind: NotificationKind
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime

    @field_validator("message")
    @classmethod
    def _normalize_message(cls, value: str) -> str:
        message = value.strip()
        if not message:
            raise ValueError("message must be non-empty")
        return message

    @classmethod
    def create(
        cls,
        kind: NotificationKind,
        message: str,
        *,
        now: datetime,
        ttl: float,
    ) -> NotificationEvent:
        return cls(kind=kind, message=message, created_at=now, expires_at=now + timedelta(seconds=ttl))

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
