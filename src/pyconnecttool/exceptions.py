"""Custom exception hierarchy for pyconnecttool."""

from __future__ import annotations


class ConnectToolError(Exception):
    """Base exception for all pyconnecttool errors."""


class ConnectToolConfigError(ConnectToolError):
    """Invalid or missing configuration."""


class CommandError(ConnectToolError):
    """A command round trip to the core failed.

    ``cause`` carries the underlying exception (transport failures) or the
    message reported by the core (remote failures).
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        cause: BaseException | str | None = None,
    ) -> None:
        self.command = command
        self.cause = cause
        super().__init__(message)


class TransportError(CommandError):
    """The core is unreachable or the round trip itself failed.

    Also raised when the reply cannot be decoded into the expected shape.
    """


class RemoteFailure(CommandError):
    """The core answered but reported ``success=false``."""

    @property
    def remote_message(self) -> str:
        return self.cause if isinstance(self.cause, str) else str(self)


class BusyError(ConnectToolError):
    """A lifecycle transition is already in flight.

    Raised instead of queueing so the core is never spawned or killed twice.
    """

    def __init__(self, message: str, *, pending: str = "") -> None:
        self.pending = pending
        super().__init__(message)
