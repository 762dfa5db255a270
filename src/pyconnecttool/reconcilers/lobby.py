"""Steam lobby membership and lobby actions."""

from __future__ import annotations

from typing import ClassVar

from pyconnecttool._api import lobby as lobby_api
from pyconnecttool.models.action import ActionResult
from pyconnecttool.models.lobby import CreateLobbyResult, LobbySnapshot
from pyconnecttool.reconcilers._base import Reconciler, reply_message
from pyconnecttool.state.events import StateSection


def _created_message(result: CreateLobbyResult) -> str:
    if result.lobby_id:
        return f"Lobby created: {result.lobby_id}"
    return "Lobby created"


class LobbyReconciler(Reconciler[LobbySnapshot]):
    """Tracks the lobby the local user is in.

    Every mutation is a single call followed by a forced refresh so the
    published membership catches up without waiting for the next tick.
    """

    section: ClassVar[StateSection] = StateSection.LOBBY

    async def fetch_snapshot(self) -> LobbySnapshot:
        info = await lobby_api.get_lobby_info(self._gateway)
        return LobbySnapshot.from_info(info)

    async def init_steam(self) -> ActionResult:
        return await self._run_action(
            "Initialize Steam",
            lambda: lobby_api.init_steam(self._gateway),
            success_message=reply_message("Steam initialized"),
        )

    async def create_lobby(self) -> ActionResult:
        return await self._run_action(
            "Create lobby",
            lambda: lobby_api.create_lobby(self._gateway),
            success_message=_created_message,
        )

    async def join_lobby(self, lobby_id: str) -> ActionResult:
        lobby_id = (lobby_id or "").strip()
        if not lobby_id:
            return self._reject("Lobby id is required")
        return await self._run_action(
            "Join lobby",
            lambda: lobby_api.join_lobby(self._gateway, lobby_id),
            success_message=f"Joined lobby {lobby_id}",
        )

    async def leave_lobby(self) -> ActionResult:
        return await self._run_action(
            "Leave lobby",
            lambda: lobby_api.leave_lobby(self._gateway),
            success_message="Left lobby",
        )

    async def invite_friend(self, friend_steam_id: str) -> ActionResult:
        friend_steam_id = (friend_steam_id or "").strip()
        if not friend_steam_id:
            return self._reject("Friend Steam id is required")
        return await self._run_action(
            "Invite friend",
            lambda: lobby_api.invite_friend(self._gateway, friend_steam_id),
            success_message="Invitation sent",
            refresh=False,
        )

    async def friend_lobbies(self) -> ActionResult:
        """One-shot read of joinable friend lobbies; ``data`` holds the tuple."""
        result = await self._run_action(
            "Load friend lobbies",
            lambda: lobby_api.get_friend_lobbies(self._gateway),
            refresh=False,
        )
        if not result.ok:
            return result
        return ActionResult(ok=True, data=result.data.lobbies)
