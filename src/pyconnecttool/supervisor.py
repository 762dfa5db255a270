"""Lifecycle supervision of the core background service.

The supervisor owns the only copy of :class:`LifecycleState`. Manual
start/stop/toggle, the automatic start on launch and the periodic status
poll all go through it, and at most one start/stop is in flight at a time:
a second request raises :class:`BusyError` instead of being queued.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pyconnecttool._api import core as core_api
from pyconnecttool._api._common import CommandCaller
from pyconnecttool._constants import CORE_STATUS_INTERVAL, DEPENDENCY_SETTLE_DELAY
from pyconnecttool.exceptions import BusyError, ConnectToolError
from pyconnecttool.models.core import CoreStatus, LifecyclePhase, LifecycleState
from pyconnecttool.poller import Poller
from pyconnecttool.state.notifications import NotificationCenter

_logger = logging.getLogger(__name__)

LifecycleListener = Callable[[LifecycleState], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ServiceSupervisor:
    """State machine for the core process.

    ``stopped -> starting -> running`` on a successful :meth:`start`,
    ``starting -> stopped`` (with ``last_error``) on failure, and
    ``running -> stopping -> stopped`` on :meth:`stop` whatever the outcome.
    """

    def __init__(
        self,
        gateway: CommandCaller,
        *,
        notifications: NotificationCenter | None = None,
        status_interval: float = CORE_STATUS_INTERVAL,
        settle_delay: float = DEPENDENCY_SETTLE_DELAY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._notifications = notifications
        self._settle_delay = settle_delay
        self._clock = clock
        self._state = LifecycleState(updated_at=clock())
        self._listeners: list[LifecycleListener] = []
        self._transitions = 0
        self._auto_start_attempted = False
        self._status_poller: Poller[CoreStatus] = Poller(
            "core-status",
            self.check_status,
            status_interval,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def status_poller(self) -> Poller[CoreStatus]:
        return self._status_poller

    def subscribe(self, listener: LifecycleListener) -> Callable[[], None]:
        """Register *listener* for applied state changes."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, **changes: Any) -> LifecycleState:
        current = self._state
        if all(getattr(current, key) == value for key, value in changes.items()):
            return current
        updated = current.model_copy(update={**changes, "updated_at": self._clock()})
        self._state = updated
        _logger.debug(
            "Core lifecycle %s -> %s pid=%s version=%s",
            current.phase,
            updated.phase,
            updated.pid,
            updated.version,
        )
        for listener in list(self._listeners):
            try:
                listener(updated)
            except Exception:
                _logger.exception("Lifecycle listener failed")
        return updated

    def _reject_if_busy(self, action: str) -> None:
        if self._state.is_transitioning:
            raise BusyError(
                f"Cannot {action}: core is already {self._state.phase}",
                pending=str(self._state.phase),
            )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def start(self) -> LifecycleState:
        """Start the core. A no-op when it is already running."""
        self._reject_if_busy("start core")
        if self._state.phase is LifecyclePhase.RUNNING:
            return self._state

        self._transitions += 1
        self._set_state(phase=LifecyclePhase.STARTING, last_error=None)
        try:
            result = await core_api.start_core(self._gateway)
        except BaseException as exc:
            self._set_state(
                phase=LifecyclePhase.STOPPED,
                pid=None,
                version=None,
                last_error=_describe(exc),
            )
            _logger.warning("Core start failed: %s", _describe(exc))
            raise

        if not result.is_running:
            error = result.message or "Core did not report running after start"
            self._set_state(phase=LifecyclePhase.STOPPED, pid=None, version=None, last_error=error)
            _logger.warning("Core start acknowledged but not running: %s", error)
            return self._state

        self._set_state(phase=LifecyclePhase.RUNNING, pid=result.pid, last_error=None)
        _logger.info("Core started pid=%s", result.pid)
        await self._refresh_version(self._transitions)
        return self._state

    async def stop(self) -> LifecycleState:
        """Stop the core. Always ends in ``stopped``; failures are re-raised."""
        self._reject_if_busy("stop core")
        if self._state.phase is LifecyclePhase.STOPPED:
            return self._state

        self._transitions += 1
        self._set_state(phase=LifecyclePhase.STOPPING)
        error: str | None = None
        try:
            await core_api.stop_core(self._gateway)
        except BaseException as exc:
            error = _describe(exc)
            _logger.warning("Core stop failed: %s", error)
            raise
        finally:
            self._set_state(phase=LifecyclePhase.STOPPED, pid=None, version=None, last_error=error)
        _logger.info("Core stopped")
        return self._state

    async def toggle(self) -> LifecycleState:
        self._reject_if_busy("toggle core")
        if self._state.phase is LifecyclePhase.RUNNING:
            return await self.stop()
        return await self.start()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    async def check_status(self) -> CoreStatus:
        """Poll the core's running flag and pid.

        Applies the observation unless a transition started while the poll
        was in flight. A running core additionally gets a version query
        whose failure only leaves the version absent.
        """
        transitions = self._transitions
        try:
            status = await core_api.get_core_status(self._gateway)
        except ConnectToolError as exc:
            self._set_state(last_error=_describe(exc))
            raise

        if self._state.is_transitioning or transitions != self._transitions:
            _logger.debug("Ignoring core status observed during a transition")
            return status

        if status.is_running:
            self._set_state(phase=LifecyclePhase.RUNNING, pid=status.pid, last_error=None)
            await self._refresh_version(transitions)
        else:
            if self._state.phase is LifecyclePhase.RUNNING:
                _logger.info("Core is no longer running")
            self._set_state(phase=LifecyclePhase.STOPPED, pid=None, version=None, last_error=None)
        return status

    async def _refresh_version(self, transitions: int) -> None:
        try:
            result = await core_api.get_core_version(self._gateway)
            version: str | None = result.version
        except ConnectToolError as exc:
            _logger.debug("Core version unavailable: %s", exc)
            version = None
        if self._state.phase is LifecyclePhase.RUNNING and transitions == self._transitions:
            self._set_state(version=version)

    # ------------------------------------------------------------------
    # Launch and cross-component protocol
    # ------------------------------------------------------------------

    async def auto_start(self) -> bool:
        """Make the single automatic start attempt of this supervisor.

        Failure becomes an error notification; there is no retry. Returns
        whether the core ended up running.
        """
        if self._auto_start_attempted:
            return self._state.is_running
        self._auto_start_attempted = True
        try:
            await self.start()
        except ConnectToolError as exc:
            _logger.warning("Automatic core start failed: %s", exc)
            if self._notifications is not None:
                self._notifications.error(f"Failed to start core service: {exc}")
            return False
        return self._state.is_running

    async def release_for(self, action: str, *, requested: bool) -> bool:
        """Stop the core before *action* when the caller asks for it.

        Returns ``True`` when the core was stopped here, ``False`` when no
        stop was needed. A failed stop propagates so the action is not
        issued.
        """
        if not requested:
            return False
        self._reject_if_busy(action)
        if self._state.phase is not LifecyclePhase.RUNNING:
            return False

        _logger.info("Stopping core before %s", action)
        await self.stop()
        if self._notifications is not None:
            self._notifications.success("Core service stopped")
        if self._settle_delay > 0:
            await asyncio.sleep(self._settle_delay)
        return True

    def activate(self) -> None:
        """Begin periodic status polling."""
        self._status_poller.activate()

    async def deactivate(self) -> None:
        await self._status_poller.deactivate()
