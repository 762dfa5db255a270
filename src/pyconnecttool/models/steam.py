"""Steam installation / process models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pyconnecttool.models._base import CoreModel, OptionalInt


class SteamLocation(CoreModel):
    """Reply of ``find_steam``."""

    found: bool = False
    steam_path: str | None = None
    steam_exe_path: str | None = None
    message: str = ""


class SteamRunningStatus(CoreModel):
    """Reply of ``get_steam_running_status``."""

    is_running: bool = Field(default=False, validation_alias=AliasChoices("is_running", "running"))
    process_id: OptionalInt = None


class SteamSnapshot(BaseModel):
    """Steam install location and process state for one refresh.

    Location and process state come from two independent probes. A tick may
    publish one fresh half next to the previous value of the other half.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    found: bool = False
    steam_path: str | None = None
    steam_exe_path: str | None = None
    is_running: bool = False
    process_id: int | None = None

    def with_location(self, location: SteamLocation) -> SteamSnapshot:
        return self.model_copy(
            update={
                "found": location.found,
                "steam_path": location.steam_path,
                "steam_exe_path": location.steam_exe_path,
            }
        )

    def with_status(self, status: SteamRunningStatus) -> SteamSnapshot:
        return self.model_copy(
            update={
                "is_running": status.is_running,
                "process_id": status.process_id if status.is_running else None,
            }
        )
