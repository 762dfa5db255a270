from __future__ import annotations

import pytest

from pyconnecttool import _constants
from pyconnecttool.config import ConnectToolConfig, _env_bool
from pyconnecttool.exceptions import ConnectToolConfigError


def test_defaults_match_core_cadence() -> None:
    config = ConnectToolConfig()

    assert config.core_status_interval == 5.0
    assert config.lobby_interval == config.vpn_interval == config.steam_interval == 2.0
    assert config.notification_ttl == 5.0
    assert config.dependency_settle_delay == 0.5
    assert config.post_restart_refresh_delay == 3.0
    assert config.auto_start is True


def test_default_socket_path_depends_on_platform(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_constants.sys, "platform", "win32")
    assert _constants.default_socket_path() == "connect_tool.sock"

    monkeypatch.setattr(_constants.sys, "platform", "linux")
    assert _constants.default_socket_path() == "/tmp/connect_tool.sock"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONNECTTOOL_SOCKET_PATH", "/run/ct.sock")
    monkeypatch.setenv("CONNECTTOOL_LOBBY_INTERVAL", "1.5")
    monkeypatch.setenv("CONNECTTOOL_AUTO_START", "off")

    config = ConnectToolConfig.from_env()

    assert config.socket_path == "/run/ct.sock"
    assert config.lobby_interval == 1.5
    assert config.auto_start is False


def test_explicit_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONNECTTOOL_VPN_INTERVAL", "9")
    monkeypatch.setenv("CONNECTTOOL_AUTO_START", "0")

    config = ConnectToolConfig.from_env(vpn_interval=3.0, auto_start=True)

    assert config.vpn_interval == 3.0
    assert config.auto_start is True


def test_non_numeric_env_value_is_a_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONNECTTOOL_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ConnectToolConfigError, match="CONNECTTOOL_REQUEST_TIMEOUT"):
        ConnectToolConfig.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"socket_path": "  "},
        {"lobby_interval": 0},
        {"firewall_interval": -1.0},
        {"dependency_settle_delay": -0.1},
    ],
)
def test_validate_rejects_bad_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ConnectToolConfigError):
        ConnectToolConfig(**overrides).validate()  # type: ignore[arg-type]


def test_zero_delays_are_allowed() -> None:
    config = ConnectToolConfig(dependency_settle_delay=0, post_restart_refresh_delay=0).validate()

    assert config.dependency_settle_delay == 0


def test_env_bool_falls_back_on_unknown_values() -> None:
    assert _env_bool("YES", False) is True
    assert _env_bool("maybe", True) is True
    assert _env_bool(None, False) is False
