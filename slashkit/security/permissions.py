"""Guards used by the dispatcher and the deploy chat command.
"""
from __future__ import annotations

from typing import Any, Iterable


def in_guild(interaction: Any) -> bool:
    """Return True if the interaction was invoked inside a guild.

    Args:
        interaction (discord.Interaction): The Discord interaction.
    """
    return getattr(interaction, "guild_id", None) is not None


def is_allowed_user(user_id: Any, allowed_user_ids: Iterable[int]) -> bool:
    """Return True if `user_id` is on the allow-list.

    Ids are compared as integers; Discord snowflakes may arrive as str.
    """
    try:
        uid = int(user_id)
    except (TypeError, ValueError):
        return False
    return uid in {int(a) for a in allowed_user_ids}
