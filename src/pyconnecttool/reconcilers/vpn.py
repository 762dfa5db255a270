"""VPN tunnel state, routing table and tunnel actions."""

from __future__ import annotations

import ipaddress
import logging
from typing import ClassVar

from pyconnecttool._api import vpn as vpn_api
from pyconnecttool.models.action import ActionResult
from pyconnecttool.models.vpn import VpnSnapshot
from pyconnecttool.reconcilers._base import Reconciler, reply_message
from pyconnecttool.state.events import StateSection

_logger = logging.getLogger(__name__)


class VpnReconciler(Reconciler[VpnSnapshot]):
    """Status and routing table published together or not at all.

    The routing table is only queried while the tunnel is enabled. If it
    cannot be read the tick fails as a whole and the previous snapshot
    stays in place.
    """

    section: ClassVar[StateSection] = StateSection.VPN

    async def fetch_snapshot(self) -> VpnSnapshot:
        status = await vpn_api.get_vpn_status(self._gateway)
        if not status.enabled:
            return VpnSnapshot.disabled()
        table = await vpn_api.get_vpn_routing_table(self._gateway)
        return VpnSnapshot.combine(status, table)

    async def start_vpn(self, ip: str, mask: str) -> ActionResult:
        ip = (ip or "").strip()
        mask = (mask or "").strip()
        try:
            ipaddress.IPv4Address(ip)
            ipaddress.IPv4Network(f"0.0.0.0/{mask}")
        except ValueError as exc:
            _logger.debug("Rejected tunnel address %r/%r: %s", ip, mask, exc)
            return self._reject(f"Invalid VPN address: {ip or '<empty>'}/{mask or '<empty>'}")
        return await self._run_action(
            "Start VPN",
            lambda: vpn_api.start_vpn(self._gateway, ip, mask),
            success_message=reply_message("VPN started"),
        )

    async def stop_vpn(self) -> ActionResult:
        return await self._run_action(
            "Stop VPN",
            lambda: vpn_api.stop_vpn(self._gateway),
            success_message=reply_message("VPN stopped"),
        )

    async def routing_table(self) -> ActionResult:
        """One-shot read; ``data`` holds the routes."""
        result = await self._run_action(
            "Load routing table",
            lambda: vpn_api.get_vpn_routing_table(self._gateway),
            refresh=False,
        )
        if not result.ok:
            return result
        return ActionResult(ok=True, data=result.data.routes)
