"""Shared helpers for the typed command modules.

It is internal to pyconnecttool and may change at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from pyconnecttool.exceptions import TransportError

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


class CommandCaller(Protocol):
    """Anything that can run one command round trip (the gateway, or a test double)."""

    async def call(self, command: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        ...


def parse_reply(command: str, model: type[TModel], payload: dict[str, Any]) -> TModel:
    """Validate *payload* into *model*; a malformed reply is a transport failure."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        _logger.debug("%s reply did not validate: %s", command, exc)
        raise TransportError(
            f"Malformed reply from {command}: {exc.error_count()} validation error(s)",
            command=command,
            cause=exc,
        ) from exc


async def call_model(
    caller: CommandCaller,
    command: str,
    model: type[TModel],
    args: Mapping[str, Any] | None = None,
) -> TModel:
    payload = await caller.call(command, args)
    return parse_reply(command, model, payload)
