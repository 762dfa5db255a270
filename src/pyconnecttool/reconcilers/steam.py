"""Steam install / process state and the China-mode restart."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import ClassVar

from pyconnecttool._api import steam as steam_api
from pyconnecttool._api._common import CommandCaller
from pyconnecttool._constants import POST_RESTART_REFRESH_DELAY, STEAM_INTERVAL
from pyconnecttool.exceptions import ConnectToolError
from pyconnecttool.models.action import ActionResult
from pyconnecttool.models.steam import SteamLocation, SteamRunningStatus, SteamSnapshot
from pyconnecttool.reconcilers._base import Reconciler, _utcnow, reply_message
from pyconnecttool.state.events import StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore
from pyconnecttool.supervisor import ServiceSupervisor

_logger = logging.getLogger(__name__)


class SteamReconciler(Reconciler[SteamSnapshot]):
    """Combines the install probe and the process probe.

    The two probes are independent. When one of them fails the other is
    still published and the failed half keeps its previous value; only when
    both fail does the tick fail.
    """

    section: ClassVar[StateSection] = StateSection.STEAM

    def __init__(
        self,
        gateway: CommandCaller,
        store: SnapshotStore,
        notifications: NotificationCenter,
        *,
        supervisor: ServiceSupervisor,
        interval: float = STEAM_INTERVAL,
        restart_refresh_delay: float = POST_RESTART_REFRESH_DELAY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(gateway, store, notifications, interval=interval, clock=clock)
        self._supervisor = supervisor
        self._restart_refresh_delay = restart_refresh_delay

    async def fetch_snapshot(self) -> SteamSnapshot:
        location: SteamLocation | None = None
        status: SteamRunningStatus | None = None
        errors: list[ConnectToolError] = []

        try:
            location = await steam_api.find_steam(self._gateway)
        except ConnectToolError as exc:
            errors.append(exc)
        try:
            status = await steam_api.get_steam_running_status(self._gateway)
        except ConnectToolError as exc:
            errors.append(exc)

        if location is None and status is None:
            raise errors[0]
        if errors:
            _logger.debug("Steam probe partially failed, keeping previous half: %s", errors[0])

        snapshot = self.snapshot or SteamSnapshot()
        if location is not None:
            snapshot = snapshot.with_location(location)
        if status is not None:
            snapshot = snapshot.with_status(status)
        return snapshot

    async def restart_steam_china(self, stop_core_if_running: bool = True) -> ActionResult:
        """Restart Steam in China mode, stopping the core first if asked.

        A failed core stop aborts the restart.
        """

        async def _restart():
            await self._supervisor.release_for("restart Steam", requested=stop_core_if_running)
            return await steam_api.restart_steam_china(self._gateway)

        result = await self._run_action(
            "Restart Steam",
            _restart,
            success_message=reply_message("Steam restarting"),
            refresh=False,
        )
        if result.ok:
            self.schedule_refresh(self._restart_refresh_delay)
        return result
