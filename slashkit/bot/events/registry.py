"""Registry for Discord client event handlers.

Forwards gateway events onto the in-process EventBus, where the
CommandHandler is subscribed.
"""
from __future__ import annotations

import logging

import discord

from ...core.config import AppConfig
from ...core.events import BOT_STARTED, INTERACTION_CREATED, MESSAGE_CREATED, EventBus
from ...services.command_handler import CommandHandler

logger = logging.getLogger(__name__)


def register_bot_events(client: discord.Client, bus: EventBus, handler: CommandHandler, config: AppConfig) -> None:
    """Attach event handlers to the provided client instance.
    """

    @client.event
    async def on_ready() -> None:
        logger.info("Logged in as %s (guilds=%d)", client.user, len(client.guilds))
        await bus.Emit(BOT_STARTED, {"user": str(client.user)}, {})
        if config.guild_id is not None:
            await handler.deploy_commands(config.guild_id)

    @client.event
    async def on_interaction(interaction: discord.Interaction) -> None:
        await bus.Emit(INTERACTION_CREATED, {"interaction": interaction}, {"interaction_id": interaction.id})

    @client.event
    async def on_message(message: discord.Message) -> None:
        if message.author.bot:
            return
        await bus.Emit(MESSAGE_CREATED, {"message": message}, {"message_id": message.id})
