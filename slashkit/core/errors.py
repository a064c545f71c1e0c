"""Exceptions raised by the command framework."""
from __future__ import annotations


class CommandValidationError(ValueError):
    """Raised when a command, button or action row declaration is invalid."""


class SubcommandNotFound(LookupError):
    """Raised by a CommandGroup that cannot resolve the addressed child.

    Attributes:
        group: Name of the group that attempted the lookup.
        name: The addressed sub-command (or sub-command group) name, if any.
    """

    def __init__(self, group: str, name: str | None):
        self.group = group
        self.name = name
        super().__init__(f"No sub-command '{name}' in group '{group}'")
