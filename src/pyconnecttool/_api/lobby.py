"""Steam lobby commands.

Commands:
  - init_steam
  - get_lobby_info
  - create_lobby
  - join_lobby (lobby_id)
  - leave_lobby
  - get_friend_lobbies
  - invite_friend (friend_steam_id)
"""

from __future__ import annotations

from pyconnecttool._api._common import CommandCaller, call_model
from pyconnecttool.models._base import CommandAck
from pyconnecttool.models.lobby import CreateLobbyResult, FriendLobbies, InitSteamResult, LobbyInfo


async def init_steam(caller: CommandCaller) -> InitSteamResult:
    return await call_model(caller, "init_steam", InitSteamResult)


async def get_lobby_info(caller: CommandCaller) -> LobbyInfo:
    return await call_model(caller, "get_lobby_info", LobbyInfo)


async def create_lobby(caller: CommandCaller) -> CreateLobbyResult:
    return await call_model(caller, "create_lobby", CreateLobbyResult)


async def join_lobby(caller: CommandCaller, lobby_id: str) -> CommandAck:
    return await call_model(caller, "join_lobby", CommandAck, {"lobby_id": lobby_id})


async def leave_lobby(caller: CommandCaller) -> CommandAck:
    return await call_model(caller, "leave_lobby", CommandAck)


async def get_friend_lobbies(caller: CommandCaller) -> FriendLobbies:
    return await call_model(caller, "get_friend_lobbies", FriendLobbies)


async def invite_friend(caller: CommandCaller, friend_steam_id: str) -> CommandAck:
    return await call_model(caller, "invite_friend", CommandAck, {"friend_steam_id": friend_steam_id})
