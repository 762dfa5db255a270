"""Core lifecycle reply models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pyconnecttool.models._base import CoreModel, OptionalInt


class CoreStatus(CoreModel):
    """Reply of ``get_core_status``."""

    is_running: bool = Field(default=False, validation_alias=AliasChoices("is_running", "running"))
    pid: OptionalInt = None
    message: str = ""


class CoreControlResult(CoreModel):
    """Reply of ``start_core`` / ``stop_core``."""

    success: bool = True
    is_running: bool = Field(default=False, validation_alias=AliasChoices("is_running", "running"))
    pid: OptionalInt = None
    message: str = ""


class CoreVersion(CoreModel):
    """Reply of ``get_core_version``."""

    version: str


class LifecyclePhase(StrEnum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class LifecycleState(BaseModel):
    """The supervisor's current view of the core.

    Parameters
    ----------
    phase : LifecyclePhase
        Exactly one phase is current at a time.
    pid : int or None
        Last known process id while running.
    version : str or None
        Core version; absent when the version query failed or the core is
        not running.
    last_error : str or None
        Message of the most recent lifecycle or status failure.
    updated_at : datetime
        When this state was produced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: LifecyclePhase = LifecyclePhase.STOPPED
    pid: int | None = None
    version: str | None = None
    last_error: str | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_running(self) -> bool:
        return self.phase is LifecyclePhase.RUNNING

    @property
    def is_transitioning(self) -> bool:
        return self.phase in (LifecyclePhase.STARTING, LifecyclePhase.STOPPING)
