"""Steam process commands.

Commands:
  - find_steam
  - get_steam_running_status
  - restart_steam_china
"""

from __future__ import annotations

from pyconnecttool._api._common import CommandCaller, call_model
from pyconnecttool.models._base import CommandAck
from pyconnecttool.models.steam import SteamLocation, SteamRunningStatus


async def find_steam(caller: CommandCaller) -> SteamLocation:
    return await call_model(caller, "find_steam", SteamLocation)


async def get_steam_running_status(caller: CommandCaller) -> SteamRunningStatus:
    return await call_model(caller, "get_steam_running_status", SteamRunningStatus)


async def restart_steam_china(caller: CommandCaller) -> CommandAck:
    """Relaunch Steam in its China-region mode.

    Conflicts with a running core; callers stop the core first.
    """
    return await call_model(caller, "restart_steam_china", CommandAck)
