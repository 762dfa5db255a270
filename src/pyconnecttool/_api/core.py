"""Core lifecycle commands.

Commands:
  - get_core_status
  - start_core
  - stop_core
  - get_core_version
"""

from __future__ import annotations

from pyconnecttool._api._common import CommandCaller, call_model
from pyconnecttool.models.core import CoreControlResult, CoreStatus, CoreVersion


async def get_core_status(caller: CommandCaller) -> CoreStatus:
    return await call_model(caller, "get_core_status", CoreStatus)


async def start_core(caller: CommandCaller) -> CoreControlResult:
    """Ask the host to spawn the core.

    Not idempotent: a second call may spawn a second process.
    """
    return await call_model(caller, "start_core", CoreControlResult)


async def stop_core(caller: CommandCaller) -> CoreControlResult:
    return await call_model(caller, "stop_core", CoreControlResult)


async def get_core_version(caller: CommandCaller) -> CoreVersion:
    return await call_model(caller, "get_core_version", CoreVersion)
