"""Firewall commands.

Commands:
  - get_firewall_status
  - set_firewall (enabled)
"""

from __future__ import annotations

from pyconnecttool._api._common import CommandCaller, call_model
from pyconnecttool.models._base import CommandAck
from pyconnecttool.models.firewall import FirewallStatus


async def get_firewall_status(caller: CommandCaller) -> FirewallStatus:
    return await call_model(caller, "get_firewall_status", FirewallStatus)


async def set_firewall(caller: CommandCaller, enabled: bool) -> CommandAck:
    """Switch all three profiles (domain, private, public) at once."""
    return await call_model(caller, "set_firewall", CommandAck, {"enabled": bool(enabled)})
