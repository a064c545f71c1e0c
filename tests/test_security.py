"""Tests for security utilities."""
from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import discord
import pytest

from slashkit.security import in_guild, is_allowed_user, safe_send, validate_discord_token

from .conftest import FakeInteraction


def test_validate_discord_token_valid() -> None:
    # Discord tokens have 3 parts separated by '.'; content is not validated here.
    validate_discord_token("aaaa.bbbb.cccc")


@pytest.mark.parametrize("token", ["", "changeme", None, "one.two", "   "])  # type: ignore[list-item]
def test_validate_discord_token_invalid(token) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(SystemExit):
        validate_discord_token(token)  # type: ignore[arg-type]


class _Interaction:
    def __init__(self, guild_id: Any) -> None:
        self.guild_id = guild_id


def test_in_guild() -> None:
    assert in_guild(_Interaction(123)) is True
    assert in_guild(_Interaction(None)) is False
    assert in_guild(object()) is False


def test_is_allowed_user() -> None:
    assert is_allowed_user(5, (5, 6)) is True
    assert is_allowed_user("6", [5, 6]) is True
    assert is_allowed_user(7, (5, 6)) is False
    assert is_allowed_user(None, (5,)) is False
    assert is_allowed_user(5, ()) is False


@pytest.mark.asyncio
async def test_safe_send_response_then_followup() -> None:
    interaction = FakeInteraction(discord.InteractionType.application_command, {"name": "x"})

    assert await safe_send(interaction, "first") is True  # type: ignore[arg-type]
    assert await safe_send(interaction, "second", ephemeral=False) is True  # type: ignore[arg-type]

    assert interaction.response.sent == [{"content": "first", "view": None, "ephemeral": True}]
    assert interaction.followup.sent == [{"content": "second", "view": None, "ephemeral": False}]


@pytest.mark.asyncio
async def test_safe_send_logs_http_errors() -> None:
    interaction = FakeInteraction(discord.InteractionType.application_command, {"name": "x"})

    async def fail(*args: Any, **kwargs: Any) -> None:
        raise discord.HTTPException(Mock(status=500, reason="err"), "down")

    interaction.response.send_message = fail  # type: ignore[method-assign]
    assert await safe_send(interaction, "lost") is False  # type: ignore[arg-type]
