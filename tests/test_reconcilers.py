from __future__ import annotations

import asyncio

import pytest

from pyconnecttool.gateway import CommandGateway
from pyconnecttool.models.core import LifecyclePhase
from pyconnecttool.models.firewall import FirewallOverall
from pyconnecttool.models.lobby import LobbySnapshot
from pyconnecttool.models.vpn import VpnSnapshot
from pyconnecttool.reconcilers import FirewallReconciler, LobbyReconciler, SteamReconciler, VpnReconciler
from pyconnecttool.state.events import NotificationKind, StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore
from pyconnecttool.supervisor import ServiceSupervisor

NOT_IN_LOBBY = {"is_in_lobby": False, "lobby_id": "", "members": []}
IN_LOBBY = {
    "is_in_lobby": True,
    "lobby_id": "109775241",
    "members": [{"steam_id": "1", "name": "host", "ping": 12, "relay_info": "direct"}],
}
STEAM_FOUND = {"found": True, "steam_path": "C:/Steam", "steam_exe_path": "C:/Steam/steam.exe"}
STEAM_RUNNING = {"is_running": True, "process_id": 321}


async def _drain(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def store() -> SnapshotStore:
    return SnapshotStore()


@pytest.fixture
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def supervisor(gateway: CommandGateway, notifications: NotificationCenter) -> ServiceSupervisor:
    return ServiceSupervisor(gateway, notifications=notifications, status_interval=60.0, settle_delay=0)


# ----------------------------------------------------------------------
# Lobby
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_lobby_publishes_membership(core, gateway, store, notifications) -> None:
    core.on("get_lobby_info", IN_LOBBY)

    async with LobbyReconciler(gateway, store, notifications, interval=60.0) as lobby:
        await _drain()

    published = store.value(StateSection.LOBBY)
    assert isinstance(published, LobbySnapshot)
    assert published.lobby_id == "109775241"
    assert lobby.snapshot == published


@pytest.mark.asyncio
async def test_create_lobby_notifies_and_refreshes(core, gateway, store, notifications) -> None:
    core.on("get_lobby_info", [NOT_IN_LOBBY, IN_LOBBY])
    core.on("create_lobby", {"success": True, "lobby_id": "109775241"})

    async with LobbyReconciler(gateway, store, notifications, interval=60.0) as lobby:
        await _drain()
        result = await lobby.create_lobby()

    assert result.ok
    assert result.message == "Lobby created: 109775241"
    assert core.commands() == ["get_lobby_info", "create_lobby", "get_lobby_info"]
    assert store.get(StateSection.LOBBY).revision == 2
    assert store.value(StateSection.LOBBY).in_lobby is True
    assert [e.kind for e in notifications.pending()] == [NotificationKind.SUCCESS]


@pytest.mark.asyncio
async def test_join_lobby_requires_an_id(core, gateway, store, notifications) -> None:
    lobby = LobbyReconciler(gateway, store, notifications, interval=60.0)

    result = await lobby.join_lobby("  ")

    assert result.ok is False
    assert core.calls == []
    assert notifications.pending() == []


@pytest.mark.asyncio
async def test_join_lobby_remote_failure_surfaces_core_message(core, gateway, store, notifications) -> None:
    core.on("join_lobby", {"success": False, "message": "Lobby is full"})
    lobby = LobbyReconciler(gateway, store, notifications, interval=60.0)

    result = await lobby.join_lobby("109775241")

    assert result.ok is False
    assert result.message == "Lobby is full"
    assert core.calls == [("join_lobby", {"lobby_id": "109775241"})]
    [event] = notifications.pending()
    assert event.kind is NotificationKind.ERROR


@pytest.mark.asyncio
async def test_invite_friend_and_friend_lobbies(core, gateway, store, notifications) -> None:
    core.on("invite_friend", {"success": True})
    core.on("get_friend_lobbies", {"lobbies": [{"steam_id": "2", "name": "pal", "lobby_id": "55"}]})
    lobby = LobbyReconciler(gateway, store, notifications, interval=60.0)

    invited = await lobby.invite_friend("76561198000000002")
    friends = await lobby.friend_lobbies()

    assert invited.ok
    assert ("invite_friend", {"friend_steam_id": "76561198000000002"}) in core.calls
    assert friends.ok
    assert [f.lobby_id for f in friends.data] == ["55"]


@pytest.mark.asyncio
async def test_init_steam_prefers_core_message(core, gateway, store, notifications) -> None:
    core.on("init_steam", {"success": True, "message": "Steam API ready"})
    lobby = LobbyReconciler(gateway, store, notifications, interval=60.0)

    result = await lobby.init_steam()

    assert result.message == "Steam API ready"


# ----------------------------------------------------------------------
# VPN
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_vpn_enabled_combines_status_and_routes(core, gateway, store, notifications) -> None:
    core.on("get_vpn_status", {"enabled": True, "local_ip": "10.0.0.2", "device_name": "tun0", "stats": {}})
    core.on("get_vpn_routing_table", {"routes": [{"ip": 167772161, "name": "host", "is_local": False}]})

    async with VpnReconciler(gateway, store, notifications, interval=60.0):
        await _drain()

    snapshot = store.value(StateSection.VPN)
    assert snapshot.enabled is True
    assert snapshot.routes[0].address == "10.0.0.1"


@pytest.mark.asyncio
async def test_vpn_disabled_skips_routing_table(core, gateway, store, notifications) -> None:
    core.on("get_vpn_status", {"enabled": False})

    async with VpnReconciler(gateway, store, notifications, interval=60.0):
        await _drain()

    assert store.value(StateSection.VPN) == VpnSnapshot.disabled()
    assert core.count("get_vpn_routing_table") == 0


@pytest.mark.asyncio
async def test_vpn_routing_table_failure_keeps_previous_snapshot(core, gateway, store, notifications) -> None:
    core.on("get_vpn_status", [{"enabled": False}, {"enabled": True, "local_ip": "10.0.0.2"}])

    async with VpnReconciler(gateway, store, notifications, interval=60.0) as vpn:
        await _drain()
        before = store.get(StateSection.VPN)

        assert await vpn.refresh() is None

    assert core.count("get_vpn_routing_table") == 1
    assert store.get(StateSection.VPN) == before
    assert before.value == VpnSnapshot.disabled()


@pytest.mark.asyncio
async def test_start_vpn_validates_address_locally(core, gateway, store, notifications) -> None:
    vpn = VpnReconciler(gateway, store, notifications, interval=60.0)

    result = await vpn.start_vpn("10.0.0.300", "255.255.255.0")

    assert result.ok is False
    assert core.calls == []


@pytest.mark.asyncio
async def test_start_vpn_sends_ip_and_mask(core, gateway, store, notifications) -> None:
    core.on("start_vpn", {"success": True})
    core.on("get_vpn_status", {"enabled": True})
    core.on("get_vpn_routing_table", {"routes": []})

    async with VpnReconciler(gateway, store, notifications, interval=60.0) as vpn:
        await _drain()
        result = await vpn.start_vpn("10.0.0.2", "255.255.255.0")

    assert result.ok
    assert result.message == "VPN started"
    assert ("start_vpn", {"ip": "10.0.0.2", "mask": "255.255.255.0"}) in core.calls
    assert store.get(StateSection.VPN).revision == 2


@pytest.mark.asyncio
async def test_routing_table_one_shot_read(core, gateway, store, notifications) -> None:
    core.on("get_vpn_routing_table", {"routes": [{"ip": 3232235521, "is_local": True}]})
    vpn = VpnReconciler(gateway, store, notifications, interval=60.0)

    result = await vpn.routing_table()

    assert [r.address for r in result.data] == ["192.168.0.1"]
    assert store.value(StateSection.VPN) is None


# ----------------------------------------------------------------------
# Steam
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_steam_partial_failure_carries_previous_half(
    core, gateway, store, notifications, supervisor
) -> None:
    core.on("find_steam", STEAM_FOUND)
    core.on("get_steam_running_status", STEAM_RUNNING)

    async with SteamReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0) as steam:
        await _drain()
        core.on("find_steam", ConnectionResetError("socket closed"))
        core.on("get_steam_running_status", {"is_running": False})
        snapshot = await steam.refresh()

    assert snapshot is not None
    assert snapshot.found is True
    assert snapshot.steam_path == "C:/Steam"
    assert snapshot.is_running is False
    assert store.get(StateSection.STEAM).revision == 2


@pytest.mark.asyncio
async def test_steam_tick_fails_when_both_probes_fail(core, gateway, store, notifications, supervisor) -> None:
    async with SteamReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0) as steam:
        await _drain()

        assert steam.snapshot is None
        assert steam.poller.last_error is not None

    assert store.get(StateSection.STEAM) is None


@pytest.mark.asyncio
async def test_restart_steam_stops_core_first_and_refreshes_later(
    core, gateway, store, notifications, supervisor
) -> None:
    core.on("start_core", {"success": True, "running": True, "pid": 1})
    core.on("get_core_version", {"version": "1.0"})
    core.on("stop_core", {"success": True})
    core.on("restart_steam_china", {"success": True})
    core.on("find_steam", STEAM_FOUND)
    core.on("get_steam_running_status", STEAM_RUNNING)
    await supervisor.start()

    async with SteamReconciler(
        gateway,
        store,
        notifications,
        supervisor=supervisor,
        interval=60.0,
        restart_refresh_delay=0.01,
    ) as steam:
        await _drain()
        result = await steam.restart_steam_china(stop_core_if_running=True)
        await asyncio.sleep(0.05)

    assert result.ok
    commands = core.commands()
    assert commands.index("stop_core") < commands.index("restart_steam_china")
    assert core.count("find_steam") == 2
    assert [e.message for e in notifications.pending()] == ["Core service stopped", "Steam restarting"]


@pytest.mark.asyncio
async def test_restart_steam_aborts_when_core_stop_fails(core, gateway, store, notifications, supervisor) -> None:
    core.on("start_core", {"success": True, "running": True, "pid": 1})
    core.on("get_core_version", {"version": "1.0"})
    core.on("stop_core", {"success": False, "message": "access denied"})
    await supervisor.start()
    steam = SteamReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0)

    result = await steam.restart_steam_china(stop_core_if_running=True)

    assert result.ok is False
    assert core.count("restart_steam_china") == 0
    assert notifications.pending()[-1].kind is NotificationKind.ERROR


# ----------------------------------------------------------------------
# Firewall
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_firewall_overall_is_derived_from_profiles(core, gateway, store, notifications, supervisor) -> None:
    core.on("get_firewall_status", {"domain_enabled": True, "private_enabled": False, "public_enabled": True})

    async with FirewallReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0) as firewall:
        await _drain()
        assert firewall.overall is FirewallOverall.MIXED


@pytest.mark.asyncio
async def test_set_firewall_leaves_core_alone_by_default(core, gateway, store, notifications, supervisor) -> None:
    core.on("start_core", {"success": True, "running": True, "pid": 1})
    core.on("get_core_version", {"version": "1.0"})
    core.on("set_firewall", {"success": True})
    core.on(
        "get_firewall_status",
        [
            {"domain_enabled": True, "private_enabled": True, "public_enabled": True},
            {"domain_enabled": False, "private_enabled": False, "public_enabled": False},
        ],
    )
    await supervisor.start()

    async with FirewallReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0) as firewall:
        await _drain()
        result = await firewall.set_firewall(False)
        overall = firewall.overall

    assert result.ok
    assert ("set_firewall", {"enabled": False}) in core.calls
    assert core.count("stop_core") == 0
    assert overall is FirewallOverall.ALL_DISABLED


@pytest.mark.asyncio
async def test_set_firewall_busy_core_is_reported(core, gateway, store, notifications, supervisor) -> None:
    gate = asyncio.Event()

    async def _slow_start(_args):
        await gate.wait()
        return {"success": True, "running": True, "pid": 1}

    core.on("start_core", _slow_start)
    core.on("get_core_version", {"version": "1.0"})
    firewall = FirewallReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0)

    starting = asyncio.create_task(supervisor.start())
    await asyncio.sleep(0)
    result = await firewall.set_firewall(True, stop_core_if_running=True)
    gate.set()
    await starting

    assert result.ok is False
    assert core.count("set_firewall") == 0


@pytest.mark.asyncio
async def test_set_firewall_stops_running_core_before_switching(
    core, gateway, store, notifications, supervisor
) -> None:
    core.on("start_core", {"success": True, "running": True, "pid": 1})
    core.on("get_core_version", {"version": "1.0"})
    core.on("stop_core", {"success": True})
    core.on("set_firewall", {"success": True})
    core.on(
        "get_firewall_status",
        [
            {"domain_enabled": True, "private_enabled": True, "public_enabled": True},
            {"domain_enabled": False, "private_enabled": False, "public_enabled": False},
        ],
    )
    await supervisor.start()

    async with FirewallReconciler(gateway, store, notifications, supervisor=supervisor, interval=60.0) as firewall:
        await _drain()
        result = await firewall.set_firewall(False, stop_core_if_running=True)

    assert result.ok
    commands = core.commands()
    assert commands.index("stop_core") < commands.index("set_firewall")
    assert commands[commands.index("set_firewall") + 1] == "get_firewall_status"
    assert core.count("get_firewall_status") == 2
    assert supervisor.state.phase is LifecyclePhase.STOPPED
    assert store.value(StateSection.FIREWALL).overall is FirewallOverall.ALL_DISABLED
    assert [e.message for e in notifications.pending()] == ["Core service stopped", "Firewall disabled"]
