"""
Expo push token validation.
"""

import re
from typing import Optional

TOKEN_PREFIXES = ("ExponentPushToken[", "ExpoPushToken[")

_UUID_PATTERN = re.compile(
    r"^[a-f\d]{8}-[a-f\d]{4}-[a-f\d]{4}-[a-f\d]{4}-[a-f\d]{12}$",
    re.IGNORECASE,
)


def is_expo_push_token(token: Optional[str]) -> bool:
    """
    Check whether a string looks like an Expo push token.

    Accepts ExponentPushToken[...] and ExpoPushToken[...] (prefix is
    case-sensitive, any content between the brackets) and bare UUIDs as
    issued by some native integrations. Only the format is checked, not
    whether the token is registered.

    Args:
        token: Candidate token

    Returns:
        True if the token has a valid format
    """
    if not token:
        return False

    if token.startswith(TOKEN_PREFIXES) and token.endswith("]"):
        return True

    return _UUID_PATTERN.match(token) is not None
