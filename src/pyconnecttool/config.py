"""Client configuration for pyconnecttool."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyconnecttool import _constants
from pyconnecttool.exceptions import ConnectToolConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ConnectToolConfig:
    """Panel configuration.

    Parameters
    ----------
    socket_path : str
        Path of the unix domain socket the core listens on. Defaults to
        ``connect_tool.sock`` on Windows and ``/tmp/connect_tool.sock``
        elsewhere.
    request_timeout : float
        Total timeout in seconds for a single command round trip.
    auto_start : bool
        Attempt to start the core once when the panel launches.
    core_status_interval : float
        Seconds between core status polls.
    lobby_interval : float
        Seconds between lobby membership refreshes.
    vpn_interval : float
        Seconds between VPN status / routing table refreshes.
    steam_interval : float
        Seconds between Steam process probes.
    firewall_interval : float
        Seconds between firewall profile refreshes.
    notification_ttl : float
        Lifetime attached to emitted notifications. Dismissal itself is left
        to the presentation layer.
    dependency_settle_delay : float
        Pause after stopping the core before a conflicting action is issued.
    post_restart_refresh_delay : float
        Delay before the Steam status is re-read after a relaunch.
    """

    socket_path: str = dataclasses.field(default_factory=_constants.default_socket_path)
    request_timeout: float = _constants.DEFAULT_REQUEST_TIMEOUT
    auto_start: bool = True
    core_status_interval: float = _constants.CORE_STATUS_INTERVAL
    lobby_interval: float = _constants.LOBBY_INTERVAL
    vpn_interval: float = _constants.VPN_INTERVAL
    steam_interval: float = _constants.STEAM_INTERVAL
    firewall_interval: float = _constants.FIREWALL_INTERVAL
    notification_ttl: float = _constants.NOTIFICATION_TTL
    dependency_settle_delay: float = _constants.DEPENDENCY_SETTLE_DELAY
    post_restart_refresh_delay: float = _constants.POST_RESTART_REFRESH_DELAY

    def validate(self) -> ConnectToolConfig:
        """Check value ranges, raising :class:`ConnectToolConfigError`.

        Returns ``self`` so it can be chained after construction.
        """
        if not self.socket_path.strip():
            raise ConnectToolConfigError("socket_path must be non-empty")
        for name in (
            "request_timeout",
            "core_status_interval",
            "lobby_interval",
            "vpn_interval",
            "steam_interval",
            "firewall_interval",
            "notification_ttl",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ConnectToolConfigError(f"{name} must be positive, got {value}")
        for name in ("dependency_settle_delay", "post_restart_refresh_delay"):
            value = getattr(self, name)
            if value < 0:
                raise ConnectToolConfigError(f"{name} must not be negative, got {value}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> ConnectToolConfig:
        """Create configuration from environment variables.

        Reads optional ``CONNECTTOOL_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ConnectToolConfig
            Populated and validated configuration.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        socket_path = env.get("CONNECTTOOL_SOCKET_PATH")
        if socket_path is not None:
            config_kwargs["socket_path"] = socket_path

        _ENV_FLOAT_MAP = {
            "CONNECTTOOL_REQUEST_TIMEOUT": "request_timeout",
            "CONNECTTOOL_CORE_STATUS_INTERVAL": "core_status_interval",
            "CONNECTTOOL_LOBBY_INTERVAL": "lobby_interval",
            "CONNECTTOOL_VPN_INTERVAL": "vpn_interval",
            "CONNECTTOOL_STEAM_INTERVAL": "steam_interval",
            "CONNECTTOOL_FIREWALL_INTERVAL": "firewall_interval",
            "CONNECTTOOL_NOTIFICATION_TTL": "notification_ttl",
            "CONNECTTOOL_DEPENDENCY_SETTLE_DELAY": "dependency_settle_delay",
            "CONNECTTOOL_POST_RESTART_REFRESH_DELAY": "post_restart_refresh_delay",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise ConnectToolConfigError(f"{env_key} is not a number: {val!r}") from exc

        if "auto_start" not in overrides:
            config_kwargs["auto_start"] = _env_bool(env.get("CONNECTTOOL_AUTO_START"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs).validate()
