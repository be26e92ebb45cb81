"""Hash utilities for Gitlet."""

import hashlib


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_hash_prefix(value: str) -> bool:
    """Check whether a string could be an (abbreviated) object id."""
    return bool(value) and len(value) <= 40 and all(
        c in '0123456789abcdef' for c in value.lower()
    )
