"""Helpers to build and start the Discord client.

Keeps `slashkit.bot_main` small: the entrypoint loads configuration and
hands it to Run().
"""

from __future__ import annotations

import logging

import discord

from ..commands.discovery import PackageCommandProvider
from ..core.config import AppConfig
from ..core.events import EventBus
from ..services.command_handler import CommandHandler, DeployOptions
from ..services.deployment import DiscordHttpDeployer

logger = logging.getLogger(__name__)


def BuildClient() -> discord.Client:
    """Create the client with the intents the handler needs.

    Message content is required to recognise the chat deploy command.
    """
    intents = discord.Intents.default()
    intents.message_content = True
    return discord.Client(intents=intents)


def BuildHandler(client: discord.Client, bus: EventBus, config: AppConfig) -> CommandHandler:
    """Create the CommandHandler, register discovered commands and subscribe it to the bus."""
    provider = PackageCommandProvider(config.commands_package) if config.commands_package else None
    return CommandHandler(
        bus=bus,
        deployer=DiscordHttpDeployer(client),
        deploy_options=DeployOptions.from_config(config),
        provider=provider,
    )


def MaskToken(token: str) -> str:
    """Return the token with everything but its first and last 4 characters hidden."""
    token_parts = token.split(".")
    return token_parts[0][:4] + "..." + token_parts[-1][-4:]


def Run(config: AppConfig) -> None:
    """Build the client, wire the handler and block running the bot."""
    from .events.registry import register_bot_events

    client = BuildClient()
    bus = EventBus()
    handler = BuildHandler(client, bus, config)
    register_bot_events(client, bus, handler, config)

    logger.info("Using token (masked): %s", MaskToken(config.discord_token))
    logger.info("Starting with %r", handler)
    client.run(config.discord_token, log_handler=None)
