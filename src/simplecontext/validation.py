"""Key validation shared by every key-accepting context operation."""

from typing import Any

from simplecontext.errors import InvalidKeyError


def validate_key(key: Any) -> str:
    """Ensure ``key`` is a non-empty string.

    Args:
        key: Candidate key

    Returns:
        The key, unchanged

    Raises:
        InvalidKeyError: If key is not a str or is empty
    """
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(key)
    return key
