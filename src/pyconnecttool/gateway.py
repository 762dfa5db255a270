"""Single call surface for commands sent to the core."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyconnecttool._transport import SocketTransport, Transport, open_socket_session
from pyconnecttool.config import ConnectToolConfig
from pyconnecttool.exceptions import ConnectToolError, RemoteFailure, TransportError

_logger = logging.getLogger(__name__)


def _raise_for_failure(command: str, payload: dict[str, Any]) -> None:
    """Map a ``success=false`` reply onto :class:`RemoteFailure`."""
    if payload.get("success") is not False:
        return
    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        message = f"{command} failed"
    raise RemoteFailure(message, command=command, cause=message)


class CommandGateway:
    """Typed entry point for every command issued to the core.

    One :meth:`call` is one round trip. Failures surface as
    :class:`TransportError` or :class:`RemoteFailure`; nothing is retried
    here because several commands (``create_lobby``, ``start_core``) are not
    idempotent.

    Usage::

        async with CommandGateway(config) as gateway:
            status = await gateway.call("get_core_status")
    """

    def __init__(
        self,
        config: ConnectToolConfig,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> CommandGateway:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = open_socket_session(self._config)
            self._transport = SocketTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ConnectToolError("Gateway not initialized. Use 'async with CommandGateway(...) as gateway:'")
        return self._transport

    async def call(self, command: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Invoke *command* on the core and return its reply payload."""
        transport = self._require_transport()
        _logger.debug("call %s", command)
        try:
            payload = await transport.send(command, args or {})
        except TransportError as exc:
            _logger.debug("call %s failed: %s", command, exc)
            raise
        except ConnectToolError:
            raise
        except (OSError, TimeoutError) as exc:
            _logger.debug("call %s failed: %s", command, exc)
            raise TransportError(f"Command {command} failed: {exc}", command=command, cause=exc) from exc
        _raise_for_failure(command, payload)
        return payload
