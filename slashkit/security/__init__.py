"""Security utilities: guards, interaction replies, and token validation.

Exports:
- in_guild, is_allowed_user
- safe_send
- validate_discord_token
"""

from .permissions import in_guild, is_allowed_user
from .interaction import safe_send
from .token import validate_discord_token

__all__ = [
    "in_guild",
    "is_allowed_user",
    "safe_send",
    "validate_discord_token",
]
