"""Composition root for a headless control panel."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import aiohttp

from pyconnecttool._transport import Transport
from pyconnecttool.config import ConnectToolConfig
from pyconnecttool.gateway import CommandGateway
from pyconnecttool.reconcilers import (
    FirewallReconciler,
    LobbyReconciler,
    Reconciler,
    SteamReconciler,
    VpnReconciler,
)
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore
from pyconnecttool.supervisor import ServiceSupervisor

_logger = logging.getLogger(__name__)


class ControlPanel:
    """Wires the gateway, supervisor, reconcilers and shared state.

    Usage::

        async with ControlPanel(ConnectToolConfig.from_env()) as panel:
            panel.store.subscribe(render)
            await panel.lobby.create_lobby()

    Entering the context opens the gateway and calls :meth:`launch`;
    leaving it calls :meth:`close`.
    """

    def __init__(
        self,
        config: ConnectToolConfig | None = None,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = (config or ConnectToolConfig()).validate()
        cfg = self._config
        self._gateway = CommandGateway(cfg, transport=transport, session=session)
        self._store = SnapshotStore()
        self._notifications = NotificationCenter(ttl=cfg.notification_ttl)
        self._supervisor = ServiceSupervisor(
            self._gateway,
            notifications=self._notifications,
            status_interval=cfg.core_status_interval,
            settle_delay=cfg.dependency_settle_delay,
        )
        self._lobby = LobbyReconciler(
            self._gateway,
            self._store,
            self._notifications,
            interval=cfg.lobby_interval,
        )
        self._vpn = VpnReconciler(
            self._gateway,
            self._store,
            self._notifications,
            interval=cfg.vpn_interval,
        )
        self._steam = SteamReconciler(
            self._gateway,
            self._store,
            self._notifications,
            supervisor=self._supervisor,
            interval=cfg.steam_interval,
            restart_refresh_delay=cfg.post_restart_refresh_delay,
        )
        self._firewall = FirewallReconciler(
            self._gateway,
            self._store,
            self._notifications,
            supervisor=self._supervisor,
            interval=cfg.firewall_interval,
        )
        self._launched = False
        self._auto_start_task: asyncio.Task[bool] | None = None

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def config(self) -> ConnectToolConfig:
        return self._config

    @property
    def gateway(self) -> CommandGateway:
        return self._gateway

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    @property
    def supervisor(self) -> ServiceSupervisor:
        return self._supervisor

    @property
    def lobby(self) -> LobbyReconciler:
        return self._lobby

    @property
    def vpn(self) -> VpnReconciler:
        return self._vpn

    @property
    def steam(self) -> SteamReconciler:
        return self._steam

    @property
    def firewall(self) -> FirewallReconciler:
        return self._firewall

    @property
    def auto_start_task(self) -> asyncio.Task[bool] | None:
        """The launch-time start attempt, ``None`` when none was made."""
        return self._auto_start_task

    @property
    def reconcilers(self) -> tuple[Reconciler[Any], ...]:
        return (self._lobby, self._vpn, self._steam, self._firewall)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ControlPanel:
        await self._gateway.__aenter__()
        await self.launch()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def launch(self) -> None:
        """Start every poller, then make the automatic start attempt.

        The start attempt runs as a background task so a slow or failing
        core never holds back polling. Its failure is reported through
        notifications and the lifecycle state.
        """
        if self._launched:
            return
        self._launched = True
        self._supervisor.activate()
        for reconciler in self.reconcilers:
            reconciler.activate()
        if self._config.auto_start:
            task = asyncio.get_running_loop().create_task(self._supervisor.auto_start(), name="core-auto-start")
            task.add_done_callback(self._auto_start_done)
            self._auto_start_task = task

    def _auto_start_done(self, task: asyncio.Task[bool]) -> None:
        if task.cancelled():
            _logger.debug("Launch auto-start cancelled")
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("Launch auto-start raised unexpectedly", exc_info=exc)
            return
        _logger.info("Launch auto-start %s", "succeeded" if task.result() else "did not start the core")

    async def close(self) -> None:
        """Stop every poller and release the gateway. Safe to call twice."""
        task = self._auto_start_task
        self._auto_start_task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        for reconciler in self.reconcilers:
            await reconciler.deactivate()
        await self._supervisor.deactivate()
        await self._gateway.close()
        self._launched = False
