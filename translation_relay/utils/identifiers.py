"""Identifier and timestamp helpers shared by the room core and providers."""

import secrets
import time
from datetime import datetime, timezone

from translation_relay.constants import (
    ID_ALPHABET,
    TRANSLATION_ID_PREFIX,
    TRANSLATION_ID_RANDOM_LENGTH,
    USER_ID_PREFIX,
    USER_ID_RANDOM_LENGTH,
)


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def generate_user_id() -> str:
    """
    Generate an ephemeral participant id.

    Example:
        >>> generate_user_id()
        'user_k3j9x0a2p'
    """
    return USER_ID_PREFIX + _random_suffix(USER_ID_RANDOM_LENGTH)


def generate_translation_id() -> str:
    """
    Generate a translation event id from the current epoch milliseconds
    and a short random suffix.

    Example:
        >>> generate_translation_id()
        'trans_1718000000000_x7q2m'
    """
    return (
        f"{TRANSLATION_ID_PREFIX}{time.time_ns() // 1_000_000}_"
        f"{_random_suffix(TRANSLATION_ID_RANDOM_LENGTH)}"
    )


def utc_timestamp() -> str:
    """
    Current UTC time as ISO 8601 with millisecond precision and a `Z` suffix.

    Example:
        >>> utc_timestamp()
        '2024-05-01T12:30:00.123Z'
    """
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
