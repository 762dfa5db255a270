"""In-memory snapshot store.

Each section holds at most one :class:`SectionSnapshot`. Publishing
replaces it wholesale; there is no merge.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pyconnecttool.state.events import SectionSnapshot, StateSection

_logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SectionSnapshot], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SnapshotStore:
    """Holds the latest snapshot per section and notifies subscribers."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._sections: dict[StateSection, SectionSnapshot] = {}
        self._listeners: list[SnapshotListener] = []

    def publish(self, section: StateSection, value: Any) -> SectionSnapshot:
        """Replace the snapshot for *section* and notify listeners."""
        previous = self._sections.get(section)
        snapshot = SectionSnapshot(
            section=section,
            value=value,
            revision=previous.revision + 1 if previous is not None else 1,
            published_at=self._clock(),
        )
        self._sections[section] = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.exception("Snapshot listener failed for section=%s", section)
        return snapshot

    def get(self, section: StateSection) -> SectionSnapshot | None:
        return self._sections.get(section)

    def value(self, section: StateSection) -> Any:
        """Latest value for *section*, or ``None`` before the first publish."""
        snapshot = self._sections.get(section)
        return snapshot.value if snapshot is not None else None

    def snapshot(self) -> dict[StateSection, SectionSnapshot]:
        return dict(self._sections)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
