from __future__ import annotations

from typing import Any, Callable, Optional

import discord
import pytest


class FakeResponse:
    """Stand-in for discord.InteractionResponse recording what was sent."""

    def __init__(self) -> None:
        self._done = False
        self.sent: list[dict[str, Any]] = []

    def is_done(self) -> bool:
        return self._done

    async def send_message(self, content: Optional[str] = None, *, view: Any | None = None, ephemeral: bool = False) -> None:  # type: ignore[override]
        self._done = True
        self.sent.append({"content": content, "view": view, "ephemeral": ephemeral})


class FakeFollowup:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    async def send(self, content: Optional[str] = None, *, view: Any | None = None, ephemeral: bool = False) -> None:  # type: ignore[override]
        self.sent.append({"content": content, "view": view, "ephemeral": ephemeral})


class FakeUser:
    def __init__(self, uid: int) -> None:
        self.id = uid


class FakeInteraction:
    """Minimal interaction: type, raw data, guild id and reply surfaces."""

    def __init__(self, itype: discord.InteractionType, data: dict[str, Any], guild_id: int | None = 123, user_id: int = 1) -> None:
        self.id = 999
        self.type = itype
        self.data = data
        self.guild_id = guild_id
        self.user = FakeUser(user_id)
        self.response = FakeResponse()
        self.followup = FakeFollowup()

    @property
    def replies(self) -> list[dict[str, Any]]:
        return self.response.sent + self.followup.sent


def _subcommand_options(group: str | None, subcommand: str | None, options: list[dict[str, Any]]) -> list[dict[str, Any]]:
    if subcommand is None and group is None:
        return options
    leaf = {"type": 1, "name": subcommand, "options": options} if subcommand else None
    if group is None:
        return [leaf] if leaf else []
    return [{"type": 2, "name": group, "options": [leaf] if leaf else []}]


@pytest.fixture()
def command_interaction() -> Callable[..., FakeInteraction]:
    """Factory for chat-input command interactions.

    Example:
        command_interaction("admin", group="mod", subcommand="kick")
    """

    def make(
        name: str,
        *,
        group: str | None = None,
        subcommand: str | None = None,
        options: list[dict[str, Any]] | None = None,
        guild_id: int | None = 123,
    ) -> FakeInteraction:
        data = {
            "id": "1",
            "type": 1,
            "name": name,
            "options": _subcommand_options(group, subcommand, options or []),
        }
        return FakeInteraction(discord.InteractionType.application_command, data, guild_id=guild_id)

    return make


@pytest.fixture()
def component_interaction() -> Callable[..., FakeInteraction]:
    """Factory for button (default) or select menu interactions."""

    def make(custom_id: str, *, select: bool = False, values: list[str] | None = None, guild_id: int | None = 123) -> FakeInteraction:
        data: dict[str, Any] = {
            "custom_id": custom_id,
            "component_type": 3 if select else 2,
        }
        if select:
            data["values"] = values or []
        return FakeInteraction(discord.InteractionType.component, data, guild_id=guild_id)

    return make
