"""Windows firewall profile state and the all-profiles switch."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import ClassVar

from pyconnecttool._api import firewall as firewall_api
from pyconnecttool._api._common import CommandCaller
from pyconnecttool._constants import FIREWALL_INTERVAL
from pyconnecttool.models.action import ActionResult
from pyconnecttool.models.firewall import FirewallOverall, FirewallStatus
from pyconnecttool.reconcilers._base import Reconciler, _utcnow, reply_message
from pyconnecttool.state.events import StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore
from pyconnecttool.supervisor import ServiceSupervisor


class FirewallReconciler(Reconciler[FirewallStatus]):
    section: ClassVar[StateSection] = StateSection.FIREWALL

    def __init__(
        self,
        gateway: CommandCaller,
        store: SnapshotStore,
        notifications: NotificationCenter,
        *,
        supervisor: ServiceSupervisor,
        interval: float = FIREWALL_INTERVAL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(gateway, store, notifications, interval=interval, clock=clock)
        self._supervisor = supervisor

    @property
    def overall(self) -> FirewallOverall | None:
        snapshot = self.snapshot
        return snapshot.overall if snapshot is not None else None

    async def fetch_snapshot(self) -> FirewallStatus:
        return await firewall_api.get_firewall_status(self._gateway)

    async def set_firewall(self, enabled: bool, stop_core_if_running: bool = False) -> ActionResult:
        """Switch every profile on or off, then refresh.

        With *stop_core_if_running* the core is stopped first; if that stop
        fails the firewall is left untouched.
        """
        label = "Enable firewall" if enabled else "Disable firewall"

        async def _switch():
            await self._supervisor.release_for(label.lower(), requested=stop_core_if_running)
            return await firewall_api.set_firewall(self._gateway, enabled)

        return await self._run_action(
            label,
            _switch,
            success_message=reply_message("Firewall enabled" if enabled else "Firewall disabled"),
        )
