from dataclasses import dataclass
from typing import Optional, Tuple, Any
import os

from dynaconf import Dynaconf  # type: ignore

settings: Dynaconf = Dynaconf(  # type: ignore
    settings_files=["settings.toml", ".secrets.toml"],
    environments=True,           # allow [default], [development], [production], [testing]
    envvar_prefix="SLASHKIT",    # env vars like SLASHKIT_GUILD_ID etc.
    load_dotenv=True,            # read .env file if present
    env_switcher="DYNACONF_ENV", # switch env with DYNACONF_ENV=testing
)

DEFAULT_DEPLOY_COMMAND = "!deploy"
DEFAULT_COMMANDS_PACKAGE = "slashkit.commands.builtin"


@dataclass(frozen=True)
class AppConfig:
    """Configuration class holding all application settings.

    This dataclass contains the parsed configuration values loaded from
    settings files, environment variables, and defaults.
    """
    discord_token: str  # The Discord bot authentication token
    guild_id: Optional[int] = None  # Guild commands are deployed to on ready
    deploy_command: str = DEFAULT_DEPLOY_COMMAND  # Chat literal that triggers deployment
    allowed_user_ids: Tuple[int, ...] = tuple()  # Users allowed to use the deploy command
    set_perms_on_deploy: bool = False  # Push command permissions after each deploy
    commands_package: Optional[str] = DEFAULT_COMMANDS_PACKAGE  # Package scanned for Command instances
    log_level: str = "INFO"  # Root logging level


def _ParseIds(value: Optional[Any]) -> Tuple[int, ...]:
    """Parse user ids from various input formats.

    Args:
        value: Input value that can be None, a single int, list, tuple, or CSV string.

    Returns:
        Tuple[int, ...]: Parsed ids as integers.

    Example:
        _ParseIds("123,456") -> (123, 456)
        _ParseIds([123, 456]) -> (123, 456)
    """
    if value is None:
        return tuple()
    if isinstance(value, int) and not isinstance(value, bool):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(int(x) for x in value)  # type: ignore
    # allow CSV
    return tuple(int(x.strip()) for x in str(value).split(",") if x.strip())  # type: ignore


def _ParseBool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def GetSettings(reload: bool = False) -> AppConfig:
    """
    Return AppConfig built from Dynaconf's settings.

    Args:
        reload: Whether to reload files and environment (useful in tests). Defaults to False.

    Returns:
        AppConfig: Configuration instance with loaded values.

    Example:
        config = GetSettings()
        config = GetSettings(reload=True)  # Reload settings
    """
    try:
        if reload:
            settings.reload()  # type: ignore

        # Prefer value from settings files; if absent, fall back to unprefixed OS env DISCORD_TOKEN
        token_from_settings: Any = settings.get("DISCORD_TOKEN", None)  # type: ignore[arg-type]
        if token_from_settings in (None, ""):
            token: str = str(os.environ.get("DISCORD_TOKEN", ""))
        else:
            token = f"{token_from_settings}"

        guild_id_raw = settings.get("GUILD_ID", None)  # type: ignore
        guild_id = int(guild_id_raw) if guild_id_raw not in (None, "", 0) else None  # type: ignore

        deploy_command = settings.get("DEPLOY_COMMAND", None)  # type: ignore
        commands_package = settings.get("COMMANDS_PACKAGE", DEFAULT_COMMANDS_PACKAGE)  # type: ignore

        return AppConfig(
            discord_token=token,
            guild_id=guild_id,
            deploy_command=str(deploy_command) if deploy_command else DEFAULT_DEPLOY_COMMAND,
            allowed_user_ids=_ParseIds(settings.get("ALLOWED_USER_IDS", []) or None),  # type: ignore
            set_perms_on_deploy=_ParseBool(settings.get("SET_PERMS_ON_DEPLOY", False), False),  # type: ignore
            commands_package=str(commands_package) if commands_package else None,
            log_level=str(settings.get("LOG_LEVEL", "INFO")).upper(),  # type: ignore
        )
    except Exception as e:
        raise RuntimeError(f"Failed to load settings: {e}") from e
