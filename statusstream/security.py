"""Security utilities for statusstream."""

import logging
import re

logger = logging.getLogger(__name__)

# Service keys become part of log file names and URLs.
MAX_KEY_LENGTH = 64

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9 _.-]+$")


def validate_service_key(key: str) -> str | None:
    """Validate a service key from the service list.

    Args:
        key: Raw service key

    Returns:
        Validated key if safe, None if invalid
    """
    if not key or not isinstance(key, str):
        return None

    # Reject path traversal sequences
    if ".." in key or "/" in key or "\\" in key:
        logger.warning("Path traversal attempt in service key: %r", key)
        return None

    # Reject null bytes and control characters
    if any(ord(c) < 32 or ord(c) == 127 for c in key):
        logger.warning("Control characters in service key: %r", key)
        return None

    if len(key) > MAX_KEY_LENGTH:
        logger.warning("Service key too long: %s", key)
        return None

    if not _KEY_PATTERN.match(key):
        logger.warning("Invalid characters in service key: %s", key)
        return None

    return key
