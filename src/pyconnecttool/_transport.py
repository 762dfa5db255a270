"""Local command transport: JSON over HTTP on the core's unix socket."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyconnecttool._constants import SOCKET_BASE_URL, USER_AGENT
from pyconnecttool.config import ConnectToolConfig
from pyconnecttool.exceptions import TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the command gateway.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`SocketTransport`) concrete.
    """

    async def send(self, command: str, args: Mapping[str, Any]) -> dict[str, Any]:
        ...


def open_socket_session(config: ConnectToolConfig) -> aiohttp.ClientSession:
    """Create an HTTP session bound to the configured unix socket."""
    connector = aiohttp.UnixConnector(path=config.socket_path)
    timeout = aiohttp.ClientTimeout(total=config.request_timeout)
    return aiohttp.ClientSession(connector=connector, timeout=timeout)


class SocketTransport:
    """Posts one command per request to the core's local socket.

    Request: ``POST /<command>`` with the arguments as a JSON object.
    Reply: HTTP 200 with a JSON object payload.
    """

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def send(self, command: str, args: Mapping[str, Any]) -> dict[str, Any]:
        url = f"{SOCKET_BASE_URL}/{command}"
        headers = {
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        body = json.dumps(dict(args), separators=(",", ":"))

        _logger.debug("POST %s", url)

        try:
            async with self._http.post(url, data=body, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise TransportError(
                        f"HTTP {resp.status} from {command}: {text[:200]}",
                        command=command,
                    )
        except TransportError:
            raise
        except (aiohttp.ClientError, TimeoutError, OSError) as exc:
            raise TransportError(
                f"Command {command} failed: {exc}",
                command=command,
                cause=exc,
            ) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TransportError(
                f"Invalid JSON from {command}: {text[:200]}",
                command=command,
                cause=exc,
            ) from exc

        if not isinstance(result, dict):
            raise TransportError(
                f"Reply from {command} is not a JSON object",
                command=command,
            )
        return result
