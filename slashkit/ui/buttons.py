"""Button declarations attachable to commands through a ButtonRow.

Three variants exist and the set is closed:

    FunctionButton  runs a callback when clicked; registered by custom id
    LinkButton      opens a URL; never reaches the bot
    DisabledButton  greyed out; carries a placeholder id or url so it still
                    satisfies Discord's "custom_id xor url" rule

Rendering goes through `discord.ui.Button`; dispatch goes through the
CommandHandler's button map, not through discord.py views.
"""
from __future__ import annotations

from typing import Any, Optional, Union

import discord

from ..core.callbacks import Callback, invoke
from ..core.errors import CommandValidationError


Emoji = Union[str, discord.PartialEmoji, discord.Emoji, None]

CUSTOM_ID_MAX_LENGTH = 100
DISABLED_PLACEHOLDER_ID = "_"
DISABLED_PLACEHOLDER_URL = "https://example.com"


def _coerce_style(style: Union[discord.ButtonStyle, str, int]) -> discord.ButtonStyle:
    if isinstance(style, discord.ButtonStyle):
        return style
    if isinstance(style, int):
        return discord.ButtonStyle(style)
    try:
        return discord.ButtonStyle[str(style).lower()]
    except KeyError:
        raise CommandValidationError(f"Unknown button style: {style!r}") from None


def _require_label_or_emoji(label: Optional[str], emoji: Emoji) -> None:
    if not label and not emoji:
        raise CommandValidationError("A button needs a label, an emoji, or both")


def normalize_custom_id(custom_id: str) -> str:
    """Lower-case and validate a component custom id."""
    if not custom_id:
        raise CommandValidationError("custom_id must not be empty")
    if len(custom_id) > CUSTOM_ID_MAX_LENGTH:
        raise CommandValidationError(f"custom_id longer than {CUSTOM_ID_MAX_LENGTH} characters: {custom_id!r}")
    return custom_id.lower()


class Button:
    """Fields shared by every button variant."""

    style: discord.ButtonStyle
    label: Optional[str] = None
    emoji: Emoji = None
    custom_id: Optional[str] = None
    url: Optional[str] = None
    disabled: bool = False

    @property
    def message_component(self) -> discord.ui.Button[Any]:
        """Gets the discord.py component to be used in messages."""
        return discord.ui.Button(
            style=self.style,
            label=self.label,
            emoji=self.emoji,
            custom_id=self.custom_id,
            url=self.url,
            disabled=self.disabled,
        )

    def __repr__(self) -> str:
        target = self.custom_id if self.custom_id is not None else self.url
        return f"<{self.__class__.__name__} {target!r} label={self.label!r}>"


class FunctionButton(Button):
    """Button that executes code when clicked.

    Example:
        FunctionButton(custom_id="Confirm", label="Confirm", style="success", run=on_confirm)
    """

    def __init__(
        self,
        *,
        custom_id: str,
        run: Callback,
        label: Optional[str] = None,
        emoji: Emoji = None,
        style: Union[discord.ButtonStyle, str, int] = discord.ButtonStyle.primary,
    ):
        _require_label_or_emoji(label, emoji)
        self.style = _coerce_style(style)
        if self.style is discord.ButtonStyle.link:
            raise CommandValidationError("FunctionButton cannot use the link style; use LinkButton")
        self.custom_id = normalize_custom_id(custom_id)
        self.label = label
        self.emoji = emoji
        self._execute = run

    async def run(self, interaction: discord.Interaction) -> None:
        """Runs the click callback; used by CommandHandlers.

        Exceptions from the callback propagate to the handler.
        """
        await invoke(self._execute, interaction)


class LinkButton(Button):
    """Button that leads to a URL when clicked."""

    def __init__(self, *, url: str, label: Optional[str] = None, emoji: Emoji = None):
        _require_label_or_emoji(label, emoji)
        if not url:
            raise CommandValidationError("LinkButton requires a url")
        self.style = discord.ButtonStyle.link
        self.url = url
        self.label = label
        self.emoji = emoji


class DisabledButton(Button):
    """Button that cannot be clicked."""

    def __init__(
        self,
        *,
        style: Union[discord.ButtonStyle, str, int] = discord.ButtonStyle.secondary,
        label: Optional[str] = None,
        emoji: Emoji = None,
    ):
        _require_label_or_emoji(label, emoji)
        self.style = _coerce_style(style)
        self.label = label
        self.emoji = emoji
        self.disabled = True
        if self.style is discord.ButtonStyle.link:
            self.url = DISABLED_PLACEHOLDER_URL
        else:
            self.custom_id = DISABLED_PLACEHOLDER_ID
