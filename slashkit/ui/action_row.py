"""Action rows: the unit in which components are attached to a Command.

A row holds either up to five buttons (ButtonRow) or exactly one select menu
(SelectMenuRow). Both variants expose `message_component` for rendering and
`type` so consumers can tell them apart.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Literal, Optional, Sequence, Union

import discord

from ..core.callbacks import Callback, invoke
from ..core.errors import CommandValidationError
from .buttons import Button, FunctionButton, normalize_custom_id

MAX_BUTTONS_PER_ROW = 5
MAX_SELECT_OPTIONS = 25

SelectOptionLike = Union[discord.SelectOption, str]


class ActionRow(ABC):
    """Common surface of ButtonRow and SelectMenuRow."""

    @property
    @abstractmethod
    def type(self) -> Literal["ButtonRow", "SelectMenuRow"]:
        raise NotImplementedError

    @property
    @abstractmethod
    def message_component(self) -> List[discord.ui.Item[Any]]:
        """Gets the discord.py items making up this row."""
        raise NotImplementedError


class ButtonRow(ActionRow):
    """ActionRow component containing Buttons.

    Args:
        components: Up to 5 Buttons. None entries are permitted and skipped,
            so rows can be built from conditional expressions.
    """

    def __init__(self, components: Sequence[Optional[Button]]):
        buttons = [b for b in components if b is not None]
        if not buttons:
            raise CommandValidationError("ButtonRow needs at least one button")
        if len(components) > MAX_BUTTONS_PER_ROW:
            raise CommandValidationError(f"ButtonRow holds at most {MAX_BUTTONS_PER_ROW} buttons")
        for b in buttons:
            if not isinstance(b, Button):
                raise CommandValidationError(f"ButtonRow only accepts buttons, got {type(b).__name__}")
        self._components: tuple[Optional[Button], ...] = tuple(components)

    @property
    def type(self) -> Literal["ButtonRow"]:
        return "ButtonRow"

    @property
    def buttons(self) -> List[Button]:
        return [b for b in self._components if b is not None]

    @property
    def message_component(self) -> List[discord.ui.Item[Any]]:
        return [b.message_component for b in self.buttons]

    @property
    def function_buttons(self) -> List[FunctionButton]:
        """Returns all FunctionButtons present in the row, if any."""
        return [b for b in self.buttons if isinstance(b, FunctionButton)]


def _normalize_options(options: Iterable[SelectOptionLike]) -> List[discord.SelectOption]:
    norm: list[discord.SelectOption] = []
    for o in options:
        if isinstance(o, discord.SelectOption):
            norm.append(o)
        else:
            s = str(o)
            norm.append(discord.SelectOption(label=s, value=s))
    return norm


class SelectMenuRow(ActionRow):
    """ActionRow component containing a single select menu.

    Example:
        SelectMenuRow(custom_id="Colour", options=["Red", "Blue"], run=on_pick)
    """

    def __init__(
        self,
        *,
        custom_id: str,
        options: Iterable[SelectOptionLike],
        run: Callback,
        placeholder: Optional[str] = None,
        disabled: bool = False,
        min_values: int = 1,
        max_values: int = 1,
    ):
        self.custom_id = normalize_custom_id(custom_id)
        self.options = _normalize_options(options)
        if not 1 <= len(self.options) <= MAX_SELECT_OPTIONS:
            raise CommandValidationError(f"Select menu needs 1 to {MAX_SELECT_OPTIONS} options")
        if not 0 <= min_values <= max_values <= len(self.options):
            raise CommandValidationError(
                f"Invalid value bounds min={min_values} max={max_values} for {len(self.options)} options"
            )
        self.placeholder = placeholder
        self.disabled = disabled
        self.min_values = min_values
        self.max_values = max_values
        self._execute = run

    @property
    def type(self) -> Literal["SelectMenuRow"]:
        return "SelectMenuRow"

    @property
    def message_component(self) -> List[discord.ui.Item[Any]]:
        return [
            discord.ui.Select(
                custom_id=self.custom_id,
                placeholder=self.placeholder,
                options=list(self.options),
                disabled=self.disabled,
                min_values=self.min_values,
                max_values=self.max_values,
            )
        ]

    async def run(self, interaction: discord.Interaction) -> None:
        """Runs the selection callback; used by CommandHandlers.

        Exceptions from the callback propagate to the handler.
        """
        await invoke(self._execute, interaction)

    def __repr__(self) -> str:
        return f"<SelectMenuRow {self.custom_id!r} options={len(self.options)}>"
