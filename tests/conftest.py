from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

import pytest

from pyconnecttool.config import ConnectToolConfig
from pyconnecttool.exceptions import TransportError
from pyconnecttool.gateway import CommandGateway


class FakeCore:
    """Scripted stand-in for the core's command socket.

    A handler is a reply dict, an exception to raise, a callable taking the
    args (sync or async) or a list of those consumed in order with the last
    entry repeating. Unknown commands behave like an unreachable core.
    """

    def __init__(self, handlers: Mapping[str, Any] | None = None) -> None:
        self.handlers: dict[str, Any] = dict(handlers or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def on(self, command: str, reply: Any) -> FakeCore:
        self.handlers[command] = reply
        return self

    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def count(self, command: str) -> int:
        return self.commands().count(command)

    async def send(self, command: str, args: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append((command, dict(args)))
        if command not in self.handlers:
            raise TransportError(f"Command {command} failed: connection refused", command=command)
        reply = self.handlers[command]
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if callable(reply) and not isinstance(reply, BaseException):
            reply = reply(dict(args))
            if inspect.isawaitable(reply):
                reply = await reply
        if isinstance(reply, BaseException):
            raise reply
        return dict(reply)


@pytest.fixture
def core() -> FakeCore:
    return FakeCore()


@pytest.fixture
def gateway(core: FakeCore) -> CommandGateway:
    return CommandGateway(ConnectToolConfig(), transport=core)
