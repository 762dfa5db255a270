"""Data models for core command replies and domain snapshots."""

from pyconnecttool.models._base import CommandAck, CoreModel
from pyconnecttool.models.action import ActionResult
from pyconnecttool.models.core import (
    CoreControlResult,
    CoreStatus,
    CoreVersion,
    LifecyclePhase,
    LifecycleState,
)
from pyconnecttool.models.firewall import FirewallOverall, FirewallStatus, derive_overall_status
from pyconnecttool.models.lobby import (
    CreateLobbyResult,
    FriendLobbies,
    FriendLobby,
    InitSteamResult,
    LobbyInfo,
    LobbyMember,
    LobbySnapshot,
)
from pyconnecttool.models.steam import SteamLocation, SteamRunningStatus, SteamSnapshot
from pyconnecttool.models.vpn import VpnRoute, VpnRoutingTable, VpnSnapshot, VpnStats, VpnStatus

__all__ = [
    "ActionResult",
    "CommandAck",
    "CoreControlResult",
    "CoreModel",
    "CoreStatus",
    "CoreVersion",
    "CreateLobbyResult",
    "FirewallOverall",
    "FirewallStatus",
    "FriendLobbies",
    "FriendLobby",
    "InitSteamResult",
    "LifecyclePhase",
    "LifecycleState",
    "LobbyInfo",
    "LobbyMember",
    "LobbySnapshot",
    "SteamLocation",
    "SteamRunningStatus",
    "SteamSnapshot",
    "VpnRoute",
    "VpnRoutingTable",
    "VpnSnapshot",
    "VpnStats",
    "VpnStatus",
    "derive_overall_status",
]
