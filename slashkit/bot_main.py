"""Discord bot entrypoint: wires configuration, the command handler, and event handling."""

import logging

from .bot import startup
from .core.config import LoadConfig
from .security import validate_discord_token


def Run() -> None:
    """Main entry to launch the Discord bot after environment validation.

    Raises:
        SystemExit: If the Discord token is not properly configured

    Example:
        Run()  # Launches the bot if token is valid
    """
    config = LoadConfig()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s", force=True)
    validate_discord_token(config.discord_token)
    startup.Run(config)


if __name__ == "__main__":
    Run()
