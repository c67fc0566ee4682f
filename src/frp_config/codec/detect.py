"""Format detection."""

from .. import consts

_LEGACY_MARKER = f"[{consts.LEGACY_COMMON_SECTION}]"


def is_legacy_format(data: str | bytes) -> bool:
    """Check whether a payload is in the legacy INI format.

    Only the legacy format has a ``[common]`` section, so its presence
    anywhere in the payload is taken as the marker.
    """
    if isinstance(data, bytes):
        return _LEGACY_MARKER.encode() in data
    return _LEGACY_MARKER in data
