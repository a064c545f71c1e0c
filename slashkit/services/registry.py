"""In-memory registry of commands and the components they own.

Three independent maps keyed by lower-cased id. Values are the objects from
the declared command tree, never copies, so components must be attached
before their command is registered.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from ..commands.framework import Command
from ..ui.action_row import ButtonRow, SelectMenuRow
from ..ui.buttons import FunctionButton

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Lookup indices for commands, function buttons and select menus."""

    def __init__(self):
        self.commands: Dict[str, Command] = {}
        self.buttons: Dict[str, FunctionButton] = {}
        self.select_menus: Dict[str, SelectMenuRow] = {}

    def register_command(self, command: Command) -> Command:
        """Register a top-level command and every component in its subtree.

        Sub-commands of a CommandGroup are not indexed by name; they are
        reached through the group's run().
        """
        key = command.name.lower()
        previous = self.commands.get(key)
        if previous is not None and previous is not command:
            logger.warning("Command /%s registered twice; replacing the earlier declaration", key)
        self.commands[key] = command

        for row in command.command_components:
            if isinstance(row, ButtonRow):
                for button in row.function_buttons:
                    self.register_button(button)
            elif isinstance(row, SelectMenuRow):
                self.register_select_menu(row)
        logger.debug("Registered command /%s", key)
        return command

    def register_button(self, button: FunctionButton) -> None:
        key = button.custom_id.lower()
        previous = self.buttons.get(key)
        if previous is not None and previous is not button:
            logger.warning("Button id %r registered twice; replacing the earlier button", key)
        self.buttons[key] = button

    def register_select_menu(self, menu: SelectMenuRow) -> None:
        key = menu.custom_id.lower()
        previous = self.select_menus.get(key)
        if previous is not None and previous is not menu:
            logger.warning("Select menu id %r registered twice; replacing the earlier menu", key)
        self.select_menus[key] = menu

    def get_command(self, name: str) -> Optional[Command]:
        return self.commands.get(name.lower())

    def get_button(self, custom_id: str) -> Optional[FunctionButton]:
        return self.buttons.get(custom_id.lower())

    def get_select_menu(self, custom_id: str) -> Optional[SelectMenuRow]:
        return self.select_menus.get(custom_id.lower())

    def application_commands(self) -> List[Dict[str, Any]]:
        """Wire-format payload of every registered command, in registration order."""
        return [c.application_command for c in self.commands.values()]

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.commands
