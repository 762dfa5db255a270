"""VPN commands.

Commands:
  - get_vpn_status
  - get_vpn_routing_table
  - start_vpn (ip, mask)
  - stop_vpn
"""

from __future__ import annotations

from pyconnecttool._api._common import CommandCaller, call_model
from pyconnecttool.models._base import CommandAck
from pyconnecttool.models.vpn import VpnRoutingTable, VpnStatus


async def get_vpn_status(caller: CommandCaller) -> VpnStatus:
    return await call_model(caller, "get_vpn_status", VpnStatus)


async def get_vpn_routing_table(caller: CommandCaller) -> VpnRoutingTable:
    return await call_model(caller, "get_vpn_routing_table", VpnRoutingTable)


async def start_vpn(caller: CommandCaller, ip: str, mask: str) -> CommandAck:
    return await call_model(caller, "start_vpn", CommandAck, {"ip": ip, "mask": mask})


async def stop_vpn(caller: CommandCaller) -> CommandAck:
    return await call_model(caller, "stop_vpn", CommandAck)
