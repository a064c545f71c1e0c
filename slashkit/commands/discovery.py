"""Command providers: where the handler gets its command declarations from.

A provider is any zero-argument callable returning Commands. The handler
calls it once at construction, so application code can hand over a plain
list (`lambda: [ping, admin]`) or scan a package with PackageCommandProvider.
"""

from __future__ import annotations

from typing import Callable, Iterable, List
import importlib
import logging
import pkgutil

from .framework import Command, CommandGroup

logger = logging.getLogger(__name__)

CommandProvider = Callable[[], Iterable[Command]]


class PackageCommandProvider:
    """Collect module-level Command instances from every module of a package.

    Modules are imported in name order; modules whose name starts with "_"
    are skipped. Commands that are children of a group found in the same
    scan are not returned on their own, they are reached through the group.

    Example:
        handler = CommandHandler(provider=PackageCommandProvider("mybot.commands"))
    """

    def __init__(self, package: str):
        self.package = package

    def __call__(self) -> List[Command]:
        try:
            pkg = importlib.import_module(self.package)
        except ImportError as e:
            logger.error("Failed to import command package '%s': %s", self.package, e)
            return []

        pkg_path_list = getattr(pkg, "__path__", None)
        if not pkg_path_list:
            logger.warning("Package '%s' has no __path__; nothing to discover.", self.package)
            return []

        found: list[Command] = []
        for mod_info in sorted(pkgutil.iter_modules(pkg_path_list), key=lambda m: m.name):
            if mod_info.name.startswith("_"):
                continue
            full_name = f"{self.package}.{mod_info.name}"
            try:
                mod = importlib.import_module(full_name)
            except Exception as e:
                logger.warning("Skipping module '%s' (import failed): %s", full_name, e)
                continue
            for value in vars(mod).values():
                if isinstance(value, Command) and not any(value is f for f in found):
                    found.append(value)

        nested = {id(c) for g in found if isinstance(g, CommandGroup) for c in g.iter_descendants()}
        commands = [c for c in found if id(c) not in nested]
        logger.info("Discovered %d commands in %s", len(commands), self.package)
        return commands
