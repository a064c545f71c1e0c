"""Token validation helpers."""
from __future__ import annotations


def validate_discord_token(token: str | None) -> None:
    """Validate a Discord bot token and raise SystemExit on invalid.

    Only the shape is checked: a bot token is three dot-separated segments.

    Raises:
        SystemExit: If token is missing, a placeholder, or malformed.
    """
    value = (token or "").strip()
    if not value or value.lower() == "changeme":
        raise SystemExit("DISCORD_TOKEN (or SLASHKIT_DISCORD_TOKEN) is not set")
    if len(value.split(".")) != 3:
        raise SystemExit(
            "DISCORD_TOKEN format unexpected (should contain 2 dots). Use the bot token, not the client secret or application ID."
        )
