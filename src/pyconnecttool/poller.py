"""Periodic refresh primitive shared by the supervisor and every reconciler.

A :class:`Poller` runs ``fetch()`` immediately on activation and then on a
fixed-rate schedule until it is deactivated. Failures are logged and the
last good value is kept; the next tick is scheduled regardless.

Each activation gets a generation number. A result is applied only while
the poller is still active in the generation that started the fetch, so a
slow fetch that resolves after deactivation can never resurrect state.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pyconnecttool.exceptions import ConnectToolError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Poller(Generic[T]):
    """Fetch on a timer, tolerate failure, keep the last good value.

    Usage::

        async with Poller("lobby", fetch_lobby, interval=2.0, on_update=publish) as poller:
            ...

    Parameters
    ----------
    name : str
        Label used in logs and for the task name.
    fetch : callable
        Coroutine function producing the next value.
    interval : float
        Seconds between tick starts.
    on_update : callable, optional
        Called with every applied value.
    clock : callable, optional
        Source for ``last_success`` timestamps.
    """

    def __init__(
        self,
        name: str,
        fetch: Callable[[], Awaitable[T]],
        interval: float,
        *,
        on_update: Callable[[T], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._name = name
        self._fetch = fetch
        self._interval = interval
        self._on_update = on_update
        self._clock = clock
        self._active = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._snapshot: T | None = None
        self._last_success: datetime | None = None
        self._last_error: BaseException | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        return self._active

    @property
    def snapshot(self) -> T | None:
        """Last applied value, ``None`` before the first success."""
        return self._snapshot

    @property
    def last_success(self) -> datetime | None:
        return self._last_success

    @property
    def last_error(self) -> BaseException | None:
        """Failure of the most recent tick, cleared by the next success."""
        return self._last_error

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Poller[T]:
        self.activate()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.deactivate()

    def activate(self) -> None:
        """Start ticking. Must be called from a running event loop."""
        if self._active:
            return
        loop = asyncio.get_running_loop()
        self._active = True
        self._generation += 1
        self._task = loop.create_task(self._run(self._generation), name=f"poller:{self._name}")
        _logger.debug("Poller %s activated interval=%.3fs", self._name, self._interval)

    async def deactivate(self) -> None:
        """Stop ticking and wait for the timer task to finish.

        Results of fetches still in flight are discarded.
        """
        if not self._active:
            return
        self._active = False
        self._generation += 1
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        if task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await task
        _logger.debug("Poller %s deactivated", self._name)

    async def refresh(self) -> T | None:
        """Run one out-of-band fetch.

        Returns the applied value, or ``None`` when the fetch failed or the
        poller was (or became) inactive.
        """
        if not self._active:
            return None
        return await self._tick(self._generation)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        return self._active and generation == self._generation

    async def _run(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while self._is_current(generation):
            await self._tick(generation)
            deadline += self._interval
            delay = deadline - loop.time()
            if delay < 0:
                # A slow fetch overran the interval; skip missed ticks.
                deadline = loop.time()
                delay = 0.0
            await asyncio.sleep(delay)

    async def _tick(self, generation: int) -> T | None:
        try:
            value = await self._fetch()
        except ConnectToolError as exc:
            if self._is_current(generation):
                self._last_error = exc
            _logger.warning("Poller %s refresh failed: %s", self._name, exc)
            return None
        except Exception as exc:
            if self._is_current(generation):
                self._last_error = exc
            _logger.warning("Poller %s refresh raised unexpectedly", self._name, exc_info=True)
            return None

        if not self._is_current(generation):
            _logger.debug("Poller %s discarded a result that resolved after deactivation", self._name)
            return None

        self._snapshot = value
        self._last_success = self._clock()
        self._last_error = None
        if self._on_update is not None:
            try:
                self._on_update(value)
            except Exception:
                _logger.exception("Poller %s update callback failed", self._name)
        return value
