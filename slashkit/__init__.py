"""slashkit: slash command, button and select menu dispatch for discord.py bots.

Declare Commands (optionally grouped), attach ButtonRows/SelectMenuRows, and
register them with a CommandHandler, which routes every interaction to the
matching callback.
"""

from .commands import Command, CommandGroup, PackageCommandProvider, option, permission
from .core.errors import CommandValidationError, SubcommandNotFound
from .core.events import EventBus
from .services.command_handler import CommandHandler, DeployOptions
from .services.deployment import CommandDeployer, DiscordHttpDeployer
from .ui import ButtonRow, DisabledButton, FunctionButton, LinkButton, SelectMenuRow

__all__ = [
    "Command",
    "CommandGroup",
    "CommandHandler",
    "DeployOptions",
    "CommandDeployer",
    "DiscordHttpDeployer",
    "PackageCommandProvider",
    "EventBus",
    "ButtonRow",
    "SelectMenuRow",
    "FunctionButton",
    "DisabledButton",
    "LinkButton",
    "CommandValidationError",
    "SubcommandNotFound",
    "option",
    "permission",
]
