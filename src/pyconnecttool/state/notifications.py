"""Notification request stream for the presentation layer."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime

from pyconnecttool.state.events import NotificationEvent, NotificationKind

_logger = logging.getLogger(__name__)

NotificationListener = Callable[[NotificationEvent], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NotificationCenter:
    """Emits notification requests; never dismisses them itself.

    A bounded history is kept so a view attached late can still show the
    messages that have not expired yet.
    """

    def __init__(
        self,
        *,
        ttl: float = 5.0,
        history: int = 50,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._history: deque[NotificationEvent] = deque(maxlen=history)
        self._listeners: list[NotificationListener] = []

    def emit(self, kind: NotificationKind, message: str) -> NotificationEvent:
        event = NotificationEvent.create(kind, message, now=self._clock(), ttl=self._ttl)
        self._history.append(event)
        _logger.debug("notify %s: %s", event.kind, event.message)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.exception("Notification listener failed")
        return event

    def error(self, message: str) -> NotificationEvent:
        return self.emit(NotificationKind.ERROR, message)

    def success(self, message: str) -> NotificationEvent:
        return self.emit(NotificationKind.SUCCESS, message)

    def pending(self) -> list[NotificationEvent]:
        """Notifications that have not reached their expiry yet."""
        now = self._clock()
        return [event for event in self._history if not event.is_expired(now)]

    def history(self) -> list[NotificationEvent]:
        return list(self._history)

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
