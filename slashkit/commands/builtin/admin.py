"""/admin: moderation group with a nested /admin mod sub-group."""
from __future__ import annotations

import logging

import discord

from ..framework import Command, CommandGroup, option
from ...ui import SelectMenuRow

logger = logging.getLogger(__name__)

SEVERITIES = ["Low", "Medium", "High"]


def _option_value(interaction: discord.Interaction, name: str) -> object:
    """Return the value of a leaf option anywhere in the interaction payload."""
    stack = list((interaction.data or {}).get("options", []))  # type: ignore[union-attr]
    while stack:
        opt = stack.pop()
        if opt.get("name") == name and "value" in opt:
            return opt["value"]
        stack.extend(opt.get("options", []))
    return None


async def _audit(interaction: discord.Interaction) -> None:
    logger.info("/admin used by %s in guild %s", interaction.user, interaction.guild_id)


async def _ban(interaction: discord.Interaction) -> None:
    member = _option_value(interaction, "member")
    reason = _option_value(interaction, "reason") or "no reason given"
    await interaction.response.send_message(f"Would ban <@{member}> ({reason}).", ephemeral=True)


async def _kick(interaction: discord.Interaction) -> None:
    member = _option_value(interaction, "member")
    await interaction.response.send_message(f"Would kick <@{member}>.", ephemeral=True)


async def _warn(interaction: discord.Interaction) -> None:
    await interaction.response.send_message("Pick a severity:", view=warn.build_view(), ephemeral=True)


async def _pick_severity(interaction: discord.Interaction) -> None:
    values = (interaction.data or {}).get("values", [])  # type: ignore[union-attr]
    await interaction.response.send_message(f"Warning severity set to {', '.join(values)}.", ephemeral=True)


ban = Command(
    name="ban",
    description="Ban a member",
    options=[
        option("user", "member", "Member to ban", required=True),
        option("string", "reason", "Reason shown in the audit log"),
    ],
    run=_ban,
)

kick = Command(
    name="kick",
    description="Kick a member",
    options=[option("user", "member", "Member to kick", required=True)],
    run=_kick,
)

warn = Command(
    name="warn",
    description="Warn a member",
    options=[option("user", "member", "Member to warn", required=True)],
    components=[
        SelectMenuRow(custom_id="warn_severity", options=SEVERITIES, placeholder="Severity", run=_pick_severity),
    ],
    run=_warn,
)

admin = CommandGroup(
    name="admin",
    description="Moderation tools",
    guild_only=True,
    run=_audit,
    children=[
        ban,
        CommandGroup(name="mod", description="Lighter moderation actions", children=[kick, warn]),
    ],
)
