"""Steam lobby reply models and the lobby snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyconnecttool.models._base import CoreModel, Counter


class LobbyMember(CoreModel):
    """One member of the current lobby."""

    steam_id: str
    name: str = ""
    ping: Counter = 0
    relay_info: str = ""


class FriendLobby(CoreModel):
    """A lobby hosted by a friend that can be joined."""

    steam_id: str
    name: str = ""
    lobby_id: str


class LobbyInfo(CoreModel):
    """Reply of ``get_lobby_info``."""

    is_in_lobby: bool = False
    lobby_id: str = ""
    members: tuple[LobbyMember, ...] = ()


class FriendLobbies(CoreModel):
    """Reply of ``get_friend_lobbies``."""

    lobbies: tuple[FriendLobby, ...] = ()


class CreateLobbyResult(CoreModel):
    """Reply of ``create_lobby``."""

    success: bool = True
    lobby_id: str = ""


class InitSteamResult(CoreModel):
    """Reply of ``init_steam``."""

    success: bool = True
    message: str = ""


class LobbySnapshot(BaseModel):
    """UI-ready lobby membership.

    ``lobby_id`` is ``None`` and ``members`` is empty when not in a lobby.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    in_lobby: bool = False
    lobby_id: str | None = None
    members: tuple[LobbyMember, ...] = ()

    @classmethod
    def from_info(cls, info: LobbyInfo) -> LobbySnapshot:
        if not info.is_in_lobby:
            return cls()
        return cls(in_lobby=True, lobby_id=info.lobby_id or None, members=info.members)
