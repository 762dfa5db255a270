"""Shared reconciler machinery.

A reconciler composes one or more commands into a single domain value,
refreshes it through its own :class:`Poller` and publishes every applied
value to the :class:`SnapshotStore`. User actions run through
:meth:`Reconciler._run_action`, which turns failures into an error
notification and a failed :class:`ActionResult`; nothing is retried.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

from pyconnecttool._api._common import CommandCaller
from pyconnecttool.exceptions import ConnectToolError, RemoteFailure
from pyconnecttool.models.action import ActionResult
from pyconnecttool.poller import Poller
from pyconnecttool.state.events import StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

SuccessMessage = str | Callable[[Any], str] | None


def _utcnow() -> datetime:
    return datetime.now(UTC)


def failure_message(description: str, exc: ConnectToolError) -> str:
    """User-facing text for a failed action.

    A remote failure already carries the core's own explanation.
    """
    if isinstance(exc, RemoteFailure):
        return exc.remote_message
    return f"{description} failed: {exc}"


class Reconciler(Generic[T]):
    """Base class; subclasses set ``section`` and implement :meth:`fetch_snapshot`."""

    section: ClassVar[StateSection]

    def __init__(
        self,
        gateway: CommandCaller,
        store: SnapshotStore,
        notifications: NotificationCenter,
        *,
        interval: float,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._notifications = notifications
        self._poller: Poller[T] = Poller(
            str(self.section),
            self.fetch_snapshot,
            interval,
            on_update=self._publish,
            clock=clock,
        )
        self._pending_refreshes: set[asyncio.Task[None]] = set()

    @property
    def poller(self) -> Poller[T]:
        return self._poller

    @property
    def snapshot(self) -> T | None:
        """Latest published value, ``None`` before the first successful tick."""
        return self._poller.snapshot

    async def fetch_snapshot(self) -> T:
        """Produce one complete domain value or raise."""
        raise NotImplementedError

    def _publish(self, value: T) -> None:
        self._store.publish(self.section, value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Reconciler[T]:
        self.activate()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.deactivate()

    def activate(self) -> None:
        self._poller.activate()

    async def deactivate(self) -> None:
        for task in list(self._pending_refreshes):
            task.cancel()
        for task in list(self._pending_refreshes):
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._pending_refreshes.clear()
        await self._poller.deactivate()

    async def refresh(self) -> T | None:
        """Force an out-of-band refresh ahead of the next scheduled tick."""
        return await self._poller.refresh()

    def schedule_refresh(self, delay: float) -> None:
        """Refresh once after *delay* seconds unless deactivated first."""

        async def _later() -> None:
            await asyncio.sleep(delay)
            await self.refresh()

        task = asyncio.get_running_loop().create_task(_later(), name=f"refresh:{self.section}")
        self._pending_refreshes.add(task)
        task.add_done_callback(self._pending_refreshes.discard)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _reject(self, message: str) -> ActionResult:
        _logger.debug("%s action rejected: %s", self.section, message)
        return ActionResult.failed(message)

    async def _run_action(
        self,
        description: str,
        action: Callable[[], Awaitable[R]],
        *,
        success_message: SuccessMessage = None,
        refresh: bool = True,
    ) -> ActionResult:
        try:
            result = await action()
        except ConnectToolError as exc:
            message = failure_message(description, exc)
            _logger.warning("%s failed: %s", description, exc)
            self._notifications.error(message)
            return ActionResult.failed(message)

        message = success_message(result) if callable(success_message) else (success_message or "")
        if message:
            self._notifications.success(message)
        if refresh:
            await self.refresh()
        return ActionResult(ok=True, message=message, data=result)


def reply_message(default: str) -> Callable[[Any], str]:
    """Prefer the ``message`` the core put in its reply."""

    def _message(result: Any) -> str:
        text = getattr(result, "message", "")
        return text if isinstance(text, str) and text.strip() else default

    return _message
