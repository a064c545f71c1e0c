"""Command tree model: slash commands, sub-commands and sub-command groups.

A `Command` is a leaf with a typed option schema and a callback. A
`CommandGroup` replaces the option schema with an ordered list of children,
which are Commands or (for a top-level group only) CommandGroups of leaf
Commands. The tree serves two purposes:

    application_command   flattens the tree into the wire-format payload
                          deployed to a guild
    run(interaction)      walks the tree at dispatch time to find the leaf
                          addressed by the interaction

Usage:
    ban = Command(
        name="ban",
        description="Ban a member",
        options=[option("user", "member", "Member to ban", required=True)],
        run=do_ban,
    )
    admin = CommandGroup(name="admin", description="Moderation", children=[ban])
    handler.register_command(admin)
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union
import logging

import discord

from ..core.callbacks import Callback, invoke, noop
from ..core.errors import CommandValidationError, SubcommandNotFound
from ..core.interactions import SUB_COMMAND, SUB_COMMAND_GROUP, addressed_subcommand
from ..ui.action_row import ActionRow

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 32
DESCRIPTION_MAX_LENGTH = 100
MAX_OPTIONS = 25
MAX_CHILDREN = 25
MAX_COMPONENT_ROWS = 5
DEFAULT_VIEW_TIMEOUT = 180.0

OptionData = Dict[str, Any]
PermissionData = Dict[str, Any]


def _coerce_option_type(value: Union[discord.AppCommandOptionType, str, int]) -> discord.AppCommandOptionType:
    if isinstance(value, discord.AppCommandOptionType):
        return value
    if isinstance(value, int):
        return discord.AppCommandOptionType(value)
    try:
        return discord.AppCommandOptionType[str(value).lower()]
    except KeyError:
        raise CommandValidationError(f"Unknown option type: {value!r}") from None


def option(
    type: Union[discord.AppCommandOptionType, str, int],
    name: str,
    description: str,
    *,
    required: bool = False,
    choices: Optional[Iterable[Any]] = None,
    **extra: Any,
) -> OptionData:
    """Build the wire-format declaration of a typed command parameter.

    Args:
        type: Option type, e.g. "string", "integer", "user" or the
            discord.AppCommandOptionType member. Sub-command types are not
            accepted; nest commands with CommandGroup instead.
        name: Parameter name (lower-cased).
        description: Parameter description shown in the client.
        required: Whether the parameter must be supplied.
        choices: Optional fixed choices; plain values become {"name", "value"}.
        **extra: Additional wire fields (min_value, max_length, channel_types, ...).

    Returns:
        OptionData: Dict ready to be placed into a Command's options.
    """
    otype = _coerce_option_type(type)
    if otype.value in (SUB_COMMAND, SUB_COMMAND_GROUP):
        raise CommandValidationError("Sub-commands are declared with CommandGroup, not as options")
    data: OptionData = {
        "type": otype.value,
        "name": name.lower(),
        "description": description,
        "required": required,
    }
    if choices is not None:
        data["choices"] = [c if isinstance(c, dict) else {"name": str(c), "value": c} for c in choices]
    data.update(extra)
    return data


def permission(
    id: Union[int, str],
    type: Union[discord.AppCommandPermissionType, str] = "user",
    allow: bool = True,
) -> PermissionData:
    """Build a per-guild permission entry for a command.

    Example:
        permission(123456789012345678, "role", allow=False)
    """
    if isinstance(type, discord.AppCommandPermissionType):
        ptype = type
    else:
        try:
            ptype = discord.AppCommandPermissionType[str(type).lower()]
        except KeyError:
            raise CommandValidationError(f"Unknown permission type: {type!r}") from None
    return {"id": str(id), "type": ptype.value, "permission": bool(allow)}


def _normalize_name(name: str) -> str:
    if not name or len(name) > NAME_MAX_LENGTH:
        raise CommandValidationError(f"Command name must be 1 to {NAME_MAX_LENGTH} characters: {name!r}")
    return name.lower()


def _check_description(description: str) -> str:
    if not description or len(description) > DESCRIPTION_MAX_LENGTH:
        raise CommandValidationError(f"Description must be 1 to {DESCRIPTION_MAX_LENGTH} characters")
    return description


def _clean_options(options: Optional[Sequence[Optional[OptionData]]]) -> List[OptionData]:
    if not options:
        return []
    if len(options) > MAX_OPTIONS:
        raise CommandValidationError(f"A command holds at most {MAX_OPTIONS} options")
    cleaned = [o for o in options if o is not None]
    for o in cleaned:
        if o.get("type") in (SUB_COMMAND, SUB_COMMAND_GROUP):
            raise CommandValidationError(f"Option {o.get('name')!r} is a sub-command; use CommandGroup")
    return cleaned


def _clean_components(components: Optional[Sequence[Optional[ActionRow]]]) -> List[ActionRow]:
    if not components:
        return []
    if len(components) > MAX_COMPONENT_ROWS:
        raise CommandValidationError(f"A command holds at most {MAX_COMPONENT_ROWS} action rows")
    cleaned = [c for c in components if c is not None]
    for c in cleaned:
        if not isinstance(c, ActionRow):
            raise CommandValidationError(f"Components must be ButtonRow or SelectMenuRow, got {type(c).__name__}")
    return cleaned


class Command:
    """A slash command with executable code; also used as a sub-command.

    Can hold components (ButtonRows, SelectMenuRows). guild_only,
    default_permission and permissions only take effect on top-level commands.
    """

    def __init__(
        self,
        *,
        name: str,
        description: str,
        run: Callback,
        options: Optional[Sequence[Optional[OptionData]]] = None,
        guild_only: bool = False,
        default_permission: bool = True,
        permissions: Optional[Iterable[PermissionData]] = None,
        components: Optional[Sequence[Optional[ActionRow]]] = None,
    ):
        self.name = _normalize_name(name)
        self.description = _check_description(description)
        self.guild_only = guild_only
        self.default_permission = default_permission
        self.permissions: List[PermissionData] = list(permissions or [])
        self._options = _clean_options(options)
        self._components = _clean_components(components)
        self._execute = run

    @property
    def options(self) -> List[OptionData]:
        """Gets the options of the command, or an empty list."""
        return list(self._options)

    @property
    def command_components(self) -> List[ActionRow]:
        """Gets the ActionRows with executable code, or an empty list."""
        return list(self._components)

    @property
    def message_components(self) -> List[List[discord.ui.Item[Any]]]:
        """Gets the rendered items of each ActionRow, one list per row."""
        return [row.message_component for row in self.command_components]

    def build_view(self, *, timeout: Optional[float] = DEFAULT_VIEW_TIMEOUT) -> discord.ui.View:
        """Assemble the command's components into a discord.ui.View.

        Must be called from a running event loop. Clicks on the view are
        routed by the CommandHandler, so the items keep their default no-op
        callbacks. The view expires after `timeout` seconds so the client
        does not keep it around; pass None only for views that must outlive
        that.
        """
        view = discord.ui.View(timeout=timeout)
        for row_index, items in enumerate(self.message_components):
            for item in items:
                item.row = row_index
                view.add_item(item)
        return view

    @property
    def application_command(self) -> Dict[str, Any]:
        """Gets the application command data to be deployed as a slash command."""
        return {
            "name": self.name,
            "description": self.description,
            "options": self.options,
            "default_permission": self.default_permission,
        }

    async def run(self, interaction: discord.Interaction) -> None:
        """Runs the command callback; used by CommandHandlers.

        Exceptions from the callback propagate so the handler can report them.
        """
        await invoke(self._execute, interaction)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class CommandGroup(Command):
    """A slash command with sub-commands, or a nested sub-command group.

    The group's own callback, if any, runs before the addressed child.
    Command groups can only be nested once: a sub-group's children must all
    be leaf Commands.
    """

    def __init__(
        self,
        *,
        name: str,
        description: str,
        children: Sequence[Optional[Command]],
        run: Optional[Callback] = None,
        guild_only: bool = False,
        default_permission: bool = True,
        permissions: Optional[Iterable[PermissionData]] = None,
    ):
        super().__init__(
            name=name,
            description=description,
            run=run or noop,
            guild_only=guild_only,
            default_permission=default_permission,
            permissions=permissions,
        )
        if len(children) > MAX_CHILDREN:
            raise CommandValidationError(f"A command group holds at most {MAX_CHILDREN} children")
        kids = [c for c in children if c is not None]
        if not kids:
            raise CommandValidationError(f"Command group {self.name!r} needs at least one child")
        seen: set[str] = set()
        for child in kids:
            if not isinstance(child, Command):
                raise CommandValidationError(f"Group children must be commands, got {type(child).__name__}")
            if isinstance(child, CommandGroup) and any(isinstance(g, CommandGroup) for g in child.children):
                raise CommandValidationError(
                    f"Group {child.name!r} nested in {self.name!r} may only contain leaf commands"
                )
            if child.name in seen:
                logger.warning("Duplicate sub-command %r in group %r; the first one wins", child.name, self.name)
            seen.add(child.name)
        self._children: tuple[Command, ...] = tuple(kids)

    @property
    def children(self) -> List[Command]:
        return list(self._children)

    @property
    def options(self) -> List[OptionData]:
        """Always empty; a group's schema is derived from its children."""
        return []

    @property
    def command_components(self) -> List[ActionRow]:
        components: list[ActionRow] = []
        for child in self._children:
            components.extend(child.command_components)
        return components

    def iter_descendants(self) -> Iterator[Command]:
        """Yield every command below this group, depth-first."""
        for child in self._children:
            yield child
            if isinstance(child, CommandGroup):
                yield from child.iter_descendants()

    @staticmethod
    def _subcommand_entry(command: Command) -> OptionData:
        return {
            "type": SUB_COMMAND,
            "name": command.name,
            "description": command.description,
            "options": command.options,
        }

    @property
    def application_command(self) -> Dict[str, Any]:
        entries: list[OptionData] = []
        for child in self._children:
            if isinstance(child, CommandGroup):
                entries.append({
                    "type": SUB_COMMAND_GROUP,
                    "name": child.name,
                    "description": child.description,
                    "options": [self._subcommand_entry(c) for c in child.children],
                })
            else:
                entries.append(self._subcommand_entry(child))
        return {
            "name": self.name,
            "description": self.description,
            "options": entries,
            "default_permission": self.default_permission,
        }

    def get_child(self, name: Optional[str]) -> Optional[Command]:
        """Return the first immediate child with the given name."""
        if not name:
            return None
        key = name.lower()
        for child in self._children:
            if child.name == key:
                return child
        return None

    def resolve(self, group: Optional[str], subcommand: Optional[str]) -> Optional[Command]:
        """Pick the immediate child addressed by (sub-command group, sub-command).

        If the addressed group is this group, the sub-command names the child.
        If another group is addressed, it names a nested sub-group. Without a
        group, the sub-command names the child directly.
        """
        if group:
            if group.lower() == self.name:
                return self.get_child(subcommand)
            return self.get_child(group)
        return self.get_child(subcommand)

    async def run(self, interaction: discord.Interaction) -> None:
        """Runs the group callback, then delegates to the addressed child.

        Raises:
            SubcommandNotFound: If no child matches the interaction.
        """
        await invoke(self._execute, interaction)
        group, subcommand = addressed_subcommand(interaction)
        child = self.resolve(group, subcommand)
        if child is None:
            missing = group if group and group != self.name else subcommand
            raise SubcommandNotFound(self.name, missing)
        await child.run(interaction)
