"""Tests for registry population and interaction dispatch."""
from __future__ import annotations

from typing import Any, Callable

import discord
import pytest

from slashkit.commands.framework import Command, CommandGroup
from slashkit.core.events import EventBus
from slashkit.services.command_handler import GUILD_ONLY_MESSAGE, CommandHandler
from slashkit.services.registry import CommandRegistry
from slashkit.ui.action_row import ButtonRow, SelectMenuRow
from slashkit.ui.buttons import DisabledButton, FunctionButton, LinkButton

from .conftest import FakeInteraction


async def _noop(interaction: Any) -> None:
    return None


def _recorder(calls: list[str], label: str) -> Callable[[Any], Any]:
    async def cb(interaction: Any) -> None:
        calls.append(label)

    return cb


def _contents(interaction: FakeInteraction) -> list[str]:
    return [r["content"] for r in interaction.replies]


def test_register_group_indexes_whole_subtree() -> None:
    b1 = FunctionButton(custom_id="Confirm", label="Yes", run=_noop)
    b2 = FunctionButton(custom_id="cancel", label="No", run=_noop)
    b3 = FunctionButton(custom_id="Retry", label="Again", run=_noop)
    menu = SelectMenuRow(custom_id="Severity", options=["low", "high"], run=_noop)

    ban = Command(name="ban", description="d", components=[ButtonRow([b1, b2, LinkButton(url="https://example.org", label="?")])], run=_noop)
    kick = Command(name="kick", description="d", components=[menu], run=_noop)
    warn = Command(name="warn", description="d", components=[ButtonRow([b3, DisabledButton(label="off")])], run=_noop)
    admin = CommandGroup(
        name="admin",
        description="d",
        children=[ban, CommandGroup(name="mod", description="d", children=[kick, warn])],
    )

    registry = CommandRegistry()
    registry.register_command(admin)

    assert set(registry.buttons) == {"confirm", "cancel", "retry"}
    assert registry.buttons["confirm"] is b1
    assert set(registry.select_menus) == {"severity"}
    assert registry.select_menus["severity"] is menu
    # Only the top-level name is a command key
    assert list(registry.commands) == ["admin"]
    assert "ADMIN" in registry
    assert registry.get_command("ban") is None


def test_lookups_are_case_insensitive() -> None:
    button = FunctionButton(custom_id="Confirm", label="Yes", run=_noop)
    handler = CommandHandler()
    handler.register_command(Command(name="Ask", description="d", components=[ButtonRow([button])], run=_noop))

    assert handler.get_button("confirm") is button
    assert handler.get_button("CONFIRM") is button
    assert handler.get_command("ask") is handler.get_command("ASK")


def test_provider_registered_at_construction() -> None:
    ping = Command(name="ping", description="d", run=_noop)
    pong = Command(name="pong", description="d", run=_noop)
    handler = CommandHandler(provider=lambda: [ping, pong])

    assert handler.get_command("ping") is ping
    assert handler.get_command("pong") is pong
    assert handler.registry.application_commands() == [ping.application_command, pong.application_command]


def test_manual_button_and_menu_registration() -> None:
    handler = CommandHandler()
    button = FunctionButton(custom_id="Loose", label="x", run=_noop)
    menu = SelectMenuRow(custom_id="LooseMenu", options=["a"], run=_noop)
    handler.register_button(button)
    handler.register_select_menu(menu)

    assert handler.get_button("loose") is button
    assert handler.get_select_menu("loosemenu") is menu


@pytest.mark.asyncio
async def test_unregistered_command_replies_missing(command_interaction) -> None:  # type: ignore[no-untyped-def]
    calls: list[str] = []
    handler = CommandHandler(provider=lambda: [Command(name="known", description="d", run=_recorder(calls, "known"))])

    interaction = command_interaction("unknown")
    await handler.handle_interaction(interaction)

    assert _contents(interaction) == ["Implementation for command `unknown` is missing!"]
    assert interaction.replies[0]["ephemeral"] is True
    assert calls == []


@pytest.mark.asyncio
async def test_guild_only_rejected_outside_guild(command_interaction) -> None:  # type: ignore[no-untyped-def]
    calls: list[str] = []
    handler = CommandHandler(provider=lambda: [Command(name="secret", description="d", guild_only=True, run=_recorder(calls, "secret"))])

    dm = command_interaction("secret", guild_id=None)
    await handler.handle_interaction(dm)
    assert _contents(dm) == [GUILD_ONLY_MESSAGE]
    assert calls == []

    in_guild = command_interaction("secret", guild_id=555)
    await handler.handle_interaction(in_guild)
    assert calls == ["secret"]
    assert in_guild.replies == []


@pytest.mark.asyncio
async def test_subcommand_dispatch_order(command_interaction) -> None:  # type: ignore[no-untyped-def]
    calls: list[str] = []
    ban = Command(name="ban", description="d", run=_recorder(calls, "ban"))
    admin = CommandGroup(name="admin", description="d", children=[ban], run=_recorder(calls, "admin"))
    handler = CommandHandler(provider=lambda: [admin])

    await handler.handle_interaction(command_interaction("admin", group="admin", subcommand="ban"))
    assert calls == ["admin", "ban"]


@pytest.mark.asyncio
async def test_missing_subcommand_replies(command_interaction) -> None:  # type: ignore[no-untyped-def]
    admin = CommandGroup(name="admin", description="d", children=[Command(name="ban", description="d", run=_noop)])
    handler = CommandHandler(provider=lambda: [admin])

    interaction = command_interaction("admin", subcommand="mute")
    await handler.handle_interaction(interaction)
    assert _contents(interaction) == ["Implementation for sub-command `admin mute` is missing!"]


@pytest.mark.asyncio
async def test_command_failure_reported(command_interaction) -> None:  # type: ignore[no-untyped-def]
    async def broken(interaction: Any) -> None:
        raise RuntimeError("kaput")

    handler = CommandHandler(provider=lambda: [Command(name="broken", description="d", run=broken)])
    interaction = command_interaction("broken")
    await handler.handle_interaction(interaction)

    assert _contents(interaction) == ["Command `broken` failed!"]


@pytest.mark.asyncio
async def test_failure_after_reply_uses_followup(command_interaction) -> None:  # type: ignore[no-untyped-def]
    async def half_done(interaction: Any) -> None:
        await interaction.response.send_message("working...", ephemeral=True)
        raise RuntimeError("then it broke")

    handler = CommandHandler(provider=lambda: [Command(name="half", description="d", run=half_done)])
    interaction = command_interaction("half")
    await handler.handle_interaction(interaction)

    assert [r["content"] for r in interaction.response.sent] == ["working..."]
    assert [r["content"] for r in interaction.followup.sent] == ["Command `half` failed!"]


@pytest.mark.asyncio
async def test_button_dispatch(component_interaction) -> None:  # type: ignore[no-untyped-def]
    calls: list[str] = []

    async def broken(interaction: Any) -> None:
        raise RuntimeError("nope")

    row = ButtonRow([
        FunctionButton(custom_id="Confirm", label="Yes", run=_recorder(calls, "confirm")),
        FunctionButton(custom_id="explode", label="Boom", run=broken),
    ])
    handler = CommandHandler(provider=lambda: [Command(name="ask", description="d", components=[row], run=_noop)])

    hit = component_interaction("confirm")
    await handler.handle_interaction(hit)
    assert calls == ["confirm"]
    assert hit.replies == []

    miss = component_interaction("ghost")
    await handler.handle_interaction(miss)
    assert _contents(miss) == ["Implementation for button `ghost` is missing!"]

    failed = component_interaction("explode")
    await handler.handle_interaction(failed)
    assert _contents(failed) == ["Button `explode` failed!"]


@pytest.mark.asyncio
async def test_select_menu_dispatch(component_interaction) -> None:  # type: ignore[no-untyped-def]
    picked: list[Any] = []

    async def on_pick(interaction: Any) -> None:
        picked.append(interaction.data["values"])

    async def broken(interaction: Any) -> None:
        raise RuntimeError("nope")

    menus = [
        SelectMenuRow(custom_id="Colour", options=["red", "blue"], run=on_pick),
        SelectMenuRow(custom_id="bad", options=["x"], run=broken),
    ]
    handler = CommandHandler(provider=lambda: [Command(name="paint", description="d", components=menus, run=_noop)])

    hit = component_interaction("colour", select=True, values=["blue"])
    await handler.handle_interaction(hit)
    assert picked == [["blue"]]

    miss = component_interaction("shape", select=True)
    await handler.handle_interaction(miss)
    assert _contents(miss) == ["Implementation for select menu `shape` is missing!"]

    failed = component_interaction("bad", select=True, values=["x"])
    await handler.handle_interaction(failed)
    assert _contents(failed) == ["Select menu `bad` failed!"]


@pytest.mark.asyncio
async def test_other_interaction_kinds_ignored() -> None:
    handler = CommandHandler()
    autocomplete = FakeInteraction(discord.InteractionType.autocomplete, {"name": "x"})
    modal = FakeInteraction(discord.InteractionType.component, {"custom_id": "t", "component_type": 4})
    for interaction in (autocomplete, modal):
        await handler.handle_interaction(interaction)
        assert interaction.replies == []


@pytest.mark.asyncio
async def test_bus_driven_dispatch(command_interaction) -> None:  # type: ignore[no-untyped-def]
    calls: list[str] = []
    bus = EventBus()
    CommandHandler(bus=bus, provider=lambda: [Command(name="ping", description="d", run=_recorder(calls, "ping"))])

    await bus.Emit("InteractionCreated", {"interaction": command_interaction("ping")})
    assert calls == ["ping"]
