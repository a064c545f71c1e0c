"""Helpers to classify inbound interactions and read their addressed target.

The handler never relies on a discord.py CommandTree, so the addressed
command, sub-command and custom id are read from the raw interaction payload.
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Tuple

import discord

InteractionKind = Literal["command", "button", "select_menu"]

SUB_COMMAND = discord.AppCommandOptionType.subcommand.value
SUB_COMMAND_GROUP = discord.AppCommandOptionType.subcommand_group.value

_SELECT_TYPES = frozenset(
    t.value
    for t in (
        discord.ComponentType.string_select,
        discord.ComponentType.user_select,
        discord.ComponentType.role_select,
        discord.ComponentType.mentionable_select,
        discord.ComponentType.channel_select,
    )
)


def _data(interaction: Any) -> dict[str, Any]:
    data = getattr(interaction, "data", None)
    return data if isinstance(data, dict) else {}


def interaction_kind(interaction: Any) -> Optional[InteractionKind]:
    """Classify an interaction as a command, button or select menu.

    Returns None for every other kind (autocomplete, modal submit, context
    menus, pings).
    """
    itype = getattr(interaction, "type", None)
    data = _data(interaction)
    if itype == discord.InteractionType.application_command:
        # 1 = chat input; user/message context menus are not slash commands
        if data.get("type", 1) == 1:
            return "command"
        return None
    if itype == discord.InteractionType.component:
        ctype = data.get("component_type")
        if ctype == discord.ComponentType.button.value:
            return "button"
        if ctype in _SELECT_TYPES:
            return "select_menu"
    return None


def command_name(interaction: Any) -> str:
    """Return the addressed top-level command name, lower-cased."""
    return str(_data(interaction).get("name", "")).lower()


def custom_id(interaction: Any) -> str:
    """Return the custom id of the activated component, lower-cased."""
    return str(_data(interaction).get("custom_id", "")).lower()


def addressed_subcommand(interaction: Any) -> Tuple[Optional[str], Optional[str]]:
    """Return (sub-command group, sub-command) addressed by a command interaction.

    Either element is None when absent. `/admin ban` yields (None, "ban"),
    `/admin mod kick` yields ("mod", "kick").
    """
    options = _data(interaction).get("options") or []
    for opt in options:
        otype = opt.get("type")
        if otype == SUB_COMMAND_GROUP:
            group = str(opt.get("name", "")).lower()
            for sub in opt.get("options") or []:
                if sub.get("type") == SUB_COMMAND:
                    return group, str(sub.get("name", "")).lower()
            return group, None
        if otype == SUB_COMMAND:
            return None, str(opt.get("name", "")).lower()
    return None, None
