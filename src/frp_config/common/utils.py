"""Utility functions shared by the codecs and the model."""

from collections.abc import Iterable, Mapping
from typing import Any

SENSITIVE_FIELDS = frozenset(
    {
        "token",
        "password",
        "pwd",
        "passwd",
        "secret",
        "sk",
        "key",
    }
)


def get_map_without_prefix(items: Mapping[str, Any], prefix: str) -> dict[str, str]:
    """Collect the entries whose key starts with ``prefix``, with the prefix removed.

    Args:
        items: Flat key/value mapping (an INI section or a TOML table)
        prefix: Namespace prefix such as ``meta_``

    Returns:
        New dictionary keyed by the stripped names, in source order
    """
    return {
        key[len(prefix) :]: str(value)
        for key, value in items.items()
        if key.startswith(prefix)
    }


def add_prefix(items: Mapping[str, str], prefix: str) -> dict[str, str]:
    """Return a copy of ``items`` with ``prefix`` prepended to every key."""
    return {prefix + key: value for key, value in items.items()}


def split_list(value: str) -> list[str]:
    """Split a comma separated value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def join_list(values: Iterable[str]) -> str:
    return ",".join(values)


def mask_sensitive_data(
    value: str | None, mask_char: str = "*", show_chars: int = 4
) -> str:
    """Mask sensitive data for logging while preserving some characters for debugging.

    Args:
        value: Sensitive string to mask (e.g., auth token, password)
        mask_char: Character to use for masking
        show_chars: Number of characters to show at the end

    Returns:
        Masked string safe for logging
    """
    if not value:
        return "<None>"

    if len(value) <= show_chars:
        return mask_char * len(value)

    masked_length = len(value) - show_chars
    return mask_char * masked_length + value[-show_chars:]


def sanitize_log_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Sanitize mapping data for safe logging by masking sensitive fields.

    Args:
        data: Mapping potentially containing sensitive data

    Returns:
        Sanitized dictionary safe for logging
    """
    sanitized = {}
    for key, value in data.items():
        if any(field in key.lower() for field in SENSITIVE_FIELDS):
            sanitized[key] = mask_sensitive_data(str(value) if value else None)
        else:
            sanitized[key] = value

    return sanitized
