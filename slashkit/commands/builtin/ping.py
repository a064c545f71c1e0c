"""/ping: latency check with a button row."""
from __future__ import annotations

import discord

from ..framework import Command
from ...ui import ButtonRow, DisabledButton, FunctionButton, LinkButton


def _latency_ms(interaction: discord.Interaction) -> int:
    return round(interaction.client.latency * 1000)


async def _ping(interaction: discord.Interaction) -> None:
    await interaction.response.send_message(
        f"Pong! ({_latency_ms(interaction)} ms)", view=ping.build_view(), ephemeral=True
    )


async def _ping_again(interaction: discord.Interaction) -> None:
    await interaction.response.send_message(f"Pong again! ({_latency_ms(interaction)} ms)", ephemeral=True)


ping = Command(
    name="ping",
    description="Check that the bot is responsive",
    run=_ping,
    components=[
        ButtonRow([
            FunctionButton(custom_id="ping_again", label="Again", emoji="\N{TABLE TENNIS PADDLE AND BALL}", run=_ping_again),
            LinkButton(url="https://discord.com/developers/docs/interactions/application-commands", label="Docs"),
            DisabledButton(label="v1", style="secondary"),
        ]),
    ],
)
