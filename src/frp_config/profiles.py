"""Where configs are stored on disk.

Configs live in per-server profile directories, ``profiles/R_<addr>_<port>``,
and are named after their display name.
"""

import os
import re

from .models import ClientConfig

PROFILES_DIR = "profiles"
TEMP_PROFILE = "temp"
PROFILE_PREFIX = "R_"

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def profile_dir_name(config: ClientConfig) -> str | None:
    """Directory name for the server of ``config``, or None without a server."""
    if not config.common.server_addr:
        return None
    server = config.common.server_addr.replace(".", "_").replace(":", "_")
    return f"{PROFILE_PREFIX}{server}_{config.common.server_port}"


def profile_path(config: ClientConfig | None, filename: str) -> str:
    """Path of ``filename`` inside the profile directory of ``config``.

    Configs without a server address go to a temporary profile until one is
    set.
    """
    dir_name = profile_dir_name(config) if config is not None else None
    return os.path.join(PROFILES_DIR, dir_name or TEMP_PROFILE, filename)


def is_profile_dir(path: str) -> bool:
    """Check whether ``path`` is a per-server profile directory."""
    name = os.path.basename(os.path.normpath(path))
    parent = os.path.basename(os.path.dirname(os.path.normpath(path)))
    return (
        parent == PROFILES_DIR
        and len(name) > len(PROFILE_PREFIX)
        and name.startswith(PROFILE_PREFIX)
    )


def sanitize_filename(name: str) -> str:
    """Replace characters that aren't allowed in file names."""
    return _INVALID_FILENAME_CHARS.sub("_", name)


def config_filename(config: ClientConfig, fallback: str = "") -> str:
    """File name of a config: its sanitized display name plus format extension.

    Args:
        config: Config to name
        fallback: Name used when the config has no display name

    Raises:
        ValueError: If neither a display name nor a fallback is available
    """
    name = config.name or fallback
    if not name:
        raise ValueError("Config has no name")
    return sanitize_filename(name) + config.ext()
