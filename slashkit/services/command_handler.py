"""Dispatcher routing interactions to registered commands and components.

Every inbound interaction is classified (command, button, select menu),
looked up once in the registry and handed to exactly one callback. Misses,
guard rejections and callback failures become ephemeral replies; nothing
raised here ends the event subscription.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import logging

import discord

from ..commands.discovery import CommandProvider
from ..commands.framework import Command
from ..core.config import AppConfig
from ..core.dynaconf_settings import DEFAULT_DEPLOY_COMMAND
from ..core.errors import SubcommandNotFound
from ..core.events import INTERACTION_CREATED, MESSAGE_CREATED, Event, EventBus
from ..core.interactions import command_name, custom_id, interaction_kind
from ..security import in_guild, is_allowed_user, safe_send
from ..ui.action_row import SelectMenuRow
from ..ui.buttons import FunctionButton
from .deployment import CommandDeployer
from .registry import CommandRegistry

logger = logging.getLogger(__name__)

GUILD_ONLY_MESSAGE = "This command can only be executed within a guild!"
DEPLOYED_MESSAGE = "Commands deployed!"
DEPLOY_FAILED_MESSAGE = "Deploying commands failed, check the bot logs."


@dataclass(frozen=True)
class DeployOptions:
    """Options for the "!deploy" chat command and deployment side effects.

    When allowed users are given without a command literal, the literal
    defaults to "!deploy".
    """
    allowed_user_ids: Tuple[int, ...] = tuple()  # Who may trigger deployment from chat
    deploy_command: Optional[str] = None  # Exact message content that triggers deployment
    set_perms_on_deploy: bool = False  # Push permissions after a successful deploy

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_user_ids", tuple(int(u) for u in self.allowed_user_ids))
        if self.allowed_user_ids and not self.deploy_command:
            object.__setattr__(self, "deploy_command", DEFAULT_DEPLOY_COMMAND)

    @classmethod
    def from_config(cls, config: AppConfig) -> "DeployOptions":
        return cls(
            allowed_user_ids=config.allowed_user_ids,
            deploy_command=config.deploy_command,
            set_perms_on_deploy=config.set_perms_on_deploy,
        )


class CommandHandler:
    """Handles user-defined commands and their components (buttons, select menus).

    All commands and components have to be registered for the handler to
    recognize them. Registration happens through `provider` at construction
    and through register_command() afterwards.

    Args:
        bus: Event bus to subscribe to; see listen().
        deployer: Remote boundary used by deploy_commands()/set_permissions().
        deploy_options: Enables the chat deploy command when set.
        provider: Callable returning the commands to register up front.
        registry: Pre-built registry, mainly for tests.
    """

    def __init__(
        self,
        *,
        bus: Optional[EventBus] = None,
        deployer: Optional[CommandDeployer] = None,
        deploy_options: Optional[DeployOptions] = None,
        provider: Optional[CommandProvider] = None,
        registry: Optional[CommandRegistry] = None,
    ):
        self.registry = registry if registry is not None else CommandRegistry()
        self.deployer = deployer
        self.deploy_options = deploy_options
        if provider is not None:
            self.register_commands(provider())
        if bus is not None:
            self.listen(bus)

    # ----- Registration -----
    def register_command(self, command: Command) -> Command:
        """Registers a Command and all of its components."""
        return self.registry.register_command(command)

    def register_commands(self, commands: Iterable[Command]) -> List[Command]:
        registered = [self.register_command(c) for c in commands]
        logger.info("Registered %d commands", len(registered))
        return registered

    def register_button(self, button: FunctionButton) -> None:
        self.registry.register_button(button)

    def register_select_menu(self, menu: SelectMenuRow) -> None:
        self.registry.register_select_menu(menu)

    def get_command(self, name: str) -> Optional[Command]:
        return self.registry.get_command(name)

    def get_button(self, button_id: str) -> Optional[FunctionButton]:
        return self.registry.get_button(button_id)

    def get_select_menu(self, menu_id: str) -> Optional[SelectMenuRow]:
        return self.registry.get_select_menu(menu_id)

    # ----- Event wiring -----
    def listen(self, bus: EventBus) -> None:
        """Subscribe the dispatcher to interaction and message events on the bus."""
        bus.Subscribe(INTERACTION_CREATED, self._on_interaction_event)
        bus.Subscribe(MESSAGE_CREATED, self._on_message_event)

    async def _on_interaction_event(self, event: Event) -> None:
        await self.handle_interaction(event.payload["interaction"])

    async def _on_message_event(self, event: Event) -> None:
        await self.handle_message(event.payload["message"])

    # ----- Dispatch -----
    async def handle_interaction(self, interaction: discord.Interaction) -> None:
        """Route one interaction to its registered command, button or select menu."""
        kind = interaction_kind(interaction)
        if kind == "command":
            await self._dispatch_command(interaction)
        elif kind == "button":
            await self._dispatch_button(interaction)
        elif kind == "select_menu":
            await self._dispatch_select_menu(interaction)

    async def _dispatch_command(self, interaction: discord.Interaction) -> None:
        name = command_name(interaction)
        command = self.get_command(name)
        if command is None:
            logger.warning("No implementation registered for command /%s", name)
            await safe_send(interaction, f"Implementation for command `{name}` is missing!")
            return
        if command.guild_only and not in_guild(interaction):
            await safe_send(interaction, GUILD_ONLY_MESSAGE)
            return
        try:
            await command.run(interaction)
        except SubcommandNotFound as e:
            missing = f"{e.group} {e.name}" if e.name else e.group
            logger.warning("No implementation registered for sub-command /%s %s", command.name, e.name or "")
            await safe_send(interaction, f"Implementation for sub-command `{missing}` is missing!")
        except Exception:
            logger.exception("Command %s failed while executing", command.name)
            await safe_send(interaction, f"Command `{command.name}` failed!")

    async def _dispatch_button(self, interaction: discord.Interaction) -> None:
        button_id = custom_id(interaction)
        button = self.get_button(button_id)
        if button is None:
            logger.warning("No implementation registered for button %r", button_id)
            await safe_send(interaction, f"Implementation for button `{button_id}` is missing!")
            return
        try:
            await button.run(interaction)
        except Exception:
            logger.exception("Button %s failed while executing", button.custom_id)
            await safe_send(interaction, f"Button `{button.custom_id}` failed!")

    async def _dispatch_select_menu(self, interaction: discord.Interaction) -> None:
        menu_id = custom_id(interaction)
        menu = self.get_select_menu(menu_id)
        if menu is None:
            logger.warning("No implementation registered for select menu %r", menu_id)
            await safe_send(interaction, f"Implementation for select menu `{menu_id}` is missing!")
            return
        try:
            await menu.run(interaction)
        except Exception:
            logger.exception("Select menu %s failed while executing", menu.custom_id)
            await safe_send(interaction, f"Select menu `{menu.custom_id}` failed!")

    # ----- Deployment -----
    async def handle_message(self, message: discord.Message) -> None:
        """Deploy guild commands when an allowed user posts the deploy literal."""
        opts = self.deploy_options
        if opts is None or not opts.deploy_command:
            return
        guild = getattr(message, "guild", None)
        if guild is None or message.content != opts.deploy_command:
            return
        if not is_allowed_user(message.author.id, opts.allowed_user_ids):
            return
        if self.deployer is None:
            logger.error("Deploy command received in guild %s but no deployer is configured", guild.id)
            await message.reply(DEPLOY_FAILED_MESSAGE)
            return
        ok = await self.deploy_commands(guild.id)
        await message.reply(DEPLOYED_MESSAGE if ok else DEPLOY_FAILED_MESSAGE)

    async def deploy_commands(self, guild_id: int) -> bool:
        """Deploys all registered commands in a guild.

        If set_perms_on_deploy is enabled, permissions are pushed afterwards.

        Returns:
            bool: True if the command set was accepted by the platform.
        """
        if self.deployer is None:
            raise RuntimeError("CommandHandler has no deployer configured")
        payload = self.registry.application_commands()
        try:
            await self.deployer.set_guild_commands(guild_id, payload)
        except Exception:
            logger.exception("Failed to deploy %d commands to guild %s", len(payload), guild_id)
            return False
        logger.info("Deployed %d commands to guild %s", len(payload), guild_id)

        if self.deploy_options is not None and self.deploy_options.set_perms_on_deploy:
            try:
                await self.set_permissions(guild_id)
            except Exception:
                logger.exception("Failed to set command permissions in guild %s", guild_id)
        return True

    async def set_permissions(self, guild_id: int) -> int:
        """Sets the permissions of all registered commands deployed in a guild.

        Commands deployed remotely but unknown locally are left untouched.

        Returns:
            int: Number of commands whose permissions were pushed.
        """
        if self.deployer is None:
            raise RuntimeError("CommandHandler has no deployer configured")
        pushed = 0
        for remote in await self.deployer.fetch_guild_commands(guild_id):
            local = self.get_command(str(remote.get("name", "")))
            if local is None or not local.permissions:
                continue
            await self.deployer.set_command_permissions(guild_id, remote["id"], list(local.permissions))
            pushed += 1
        logger.info("Set permissions for %d commands in guild %s", pushed, guild_id)
        return pushed

    def __repr__(self) -> str:
        return f"<CommandHandler commands={len(self.registry)} buttons={len(self.registry.buttons)} menus={len(self.registry.select_menus)}>"