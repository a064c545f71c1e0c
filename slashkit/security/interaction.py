"""Interaction reply helpers for the dispatcher.
"""
from __future__ import annotations

import logging

import discord

logger = logging.getLogger(__name__)


async def safe_send(interaction: discord.Interaction, content: str, *, ephemeral: bool = True) -> bool:
    """Send a response or follow-up based on interaction state.

    Uses interaction.response.send_message if the interaction has not been
    acknowledged yet, otherwise a follow-up (a callback may already have
    replied). Delivery failures are logged rather than raised so a failed
    error reply never breaks the event subscription.

    Returns:
        bool: True if the message was delivered.
    """
    try:
        if not interaction.response.is_done():
            await interaction.response.send_message(content, ephemeral=ephemeral)
        else:
            await interaction.followup.send(content, ephemeral=ephemeral)
        return True
    except discord.HTTPException as e:
        logger.warning("Failed to reply to interaction %s: %s", getattr(interaction, "id", "?"), e)
        return False
