"""Command declarations for the bot.

framework defines the Command/CommandGroup tree, discovery the providers that
hand declarations to the CommandHandler, and builtin the bundled commands.
"""

__all__ = [
    "Command",
    "CommandGroup",
    "CommandProvider",
    "PackageCommandProvider",
    "option",
    "permission",
]

from .framework import Command, CommandGroup, option, permission
from .discovery import CommandProvider, PackageCommandProvider
