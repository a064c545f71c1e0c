"""Boundary to the platform call that deploys commands and their permissions.

CommandDeployer is what the CommandHandler talks to; DiscordHttpDeployer
implements it on top of discord.py's HTTP client. Tests substitute an
in-memory implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

import discord
from discord.http import Route

CommandPayload = Dict[str, Any]


class CommandDeployer(ABC):
    """Remote operations the handler needs for deployment."""

    @abstractmethod
    async def set_guild_commands(self, guild_id: int, payload: List[CommandPayload]) -> List[CommandPayload]:
        """Replace the guild's command set with `payload`; return the deployed commands."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_guild_commands(self, guild_id: int) -> List[CommandPayload]:
        """Return the commands currently deployed on the guild (each with "id" and "name")."""
        raise NotImplementedError

    @abstractmethod
    async def set_command_permissions(
        self, guild_id: int, command_id: Union[int, str], permissions: List[Dict[str, Any]]
    ) -> None:
        """Overwrite the permissions of one deployed command on the guild."""
        raise NotImplementedError


class DiscordHttpDeployer(CommandDeployer):
    """CommandDeployer backed by a logged-in discord.Client.

    Command sets are deployed with the bot token. Discord only accepts
    `PUT .../commands/{id}/permissions` with an OAuth2 Bearer token that
    carries the `applications.commands.permissions.update` scope, and
    discord.py's HTTP client always sends the bot token, so
    set_command_permissions() is rejected with 401/403 when called through
    this deployer. CommandHandler.deploy_commands() logs that failure and
    still reports the deploy as successful. `default_permission` in the
    command payload is likewise deprecated by the platform and may be ignored.
    """

    def __init__(self, client: discord.Client):
        self.client = client

    def _application_id(self) -> int:
        app_id = self.client.application_id
        if app_id is None:
            raise RuntimeError("Client is not logged in; application id is unknown")
        return app_id

    async def set_guild_commands(self, guild_id: int, payload: List[CommandPayload]) -> List[CommandPayload]:
        return await self.client.http.bulk_upsert_guild_commands(self._application_id(), guild_id, payload=payload)  # type: ignore[arg-type]

    async def fetch_guild_commands(self, guild_id: int) -> List[CommandPayload]:
        return await self.client.http.get_guild_commands(self._application_id(), guild_id)  # type: ignore[return-value]

    async def set_command_permissions(
        self, guild_id: int, command_id: Union[int, str], permissions: List[Dict[str, Any]]
    ) -> None:
        route = Route(
            "PUT",
            "/applications/{application_id}/guilds/{guild_id}/commands/{command_id}/permissions",
            application_id=self._application_id(),
            guild_id=guild_id,
            command_id=command_id,
        )
        await self.client.http.request(route, json={"permissions": permissions})
