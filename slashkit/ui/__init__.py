"""Message components: buttons and the action rows that hold them."""

from .action_row import ActionRow, ButtonRow, SelectMenuRow
from .buttons import Button, DisabledButton, FunctionButton, LinkButton

__all__ = [
    "ActionRow",
    "ButtonRow",
    "SelectMenuRow",
    "Button",
    "DisabledButton",
    "FunctionButton",
    "LinkButton",
]
