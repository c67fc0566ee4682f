"""Load and save client configs.

This is the surface the rest of the application uses: ``decode`` a config
from a path or from bytes, ``encode`` it to a path, or ``complete`` it after
editing it in place.
"""

import os
from pathlib import Path

from .codec import is_legacy_format, legacy, modern
from .common.exceptions import DecodeError, EncodeError
from .common.logging import get_logger
from .completion import complete, complete_proxy
from .models import ClientConfig, Proxy

logger = get_logger(__name__)

Source = str | os.PathLike[str] | bytes | bytearray


def _read_source(source: Source) -> str:
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        data = Path(source).read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Config is not valid UTF-8: {e}") from e


def decode(source: Source) -> ClientConfig:
    """Load a config from a file path or an in-memory buffer.

    The format is detected from the content and the config is completed for
    reading, so the ``disabled`` flags of the proxies reflect the start list.

    Args:
        source: Path of the config file, or its raw bytes

    Returns:
        Completed config, with ``legacy_format`` set according to the source

    Raises:
        DecodeError: If the content can't be parsed
        MissingSectionError: If the client-common block is absent
        OSError: If the file can't be read
    """
    text = _read_source(source)
    legacy_format = is_legacy_format(text)
    codec = legacy if legacy_format else modern

    config = codec.decode_config(text)
    config.common.legacy_format = legacy_format
    complete(config, read=True)

    logger.debug(
        "Config loaded",
        path=None if isinstance(source, (bytes, bytearray)) else str(source),
        legacy=legacy_format,
        proxies=len(config.proxies),
        server_addr=config.common.server_addr,
    )
    return config


def decode_proxy(source: Source) -> Proxy:
    """Load a single proxy from a legacy INI snippet, e.g. pasted text.

    Raises:
        DecodeError: If the content can't be parsed
        MissingSectionError: If the snippet holds no proxy
    """
    proxy = legacy.decode_proxy(_read_source(source))
    complete_proxy(proxy)
    return proxy


def _check_names(config: ClientConfig) -> None:
    seen: set[str] = set()
    for proxy in config.proxies:
        if not proxy.name:
            raise EncodeError("Proxy name cannot be empty")
        if proxy.name in seen:
            raise EncodeError(f"Duplicate proxy name '{proxy.name}'")
        seen.add(proxy.name)


def dumps(config: ClientConfig) -> str:
    """Complete a config for writing and serialize it in its own format.

    Raises:
        EncodeError: If proxy names are empty or not unique
    """
    _check_names(config)
    complete(config, read=False)
    codec = legacy if config.common.legacy_format else modern
    return codec.encode_config(config)


def encode(config: ClientConfig, path: str | os.PathLike[str]) -> None:
    """Save a config to ``path`` in the format it was loaded in.

    Raises:
        EncodeError: If proxy names are empty or not unique
        OSError: If the file can't be written; nothing is retried or rolled back
    """
    payload = dumps(config)
    Path(path).write_text(payload, encoding="utf-8")
    logger.debug(
        "Config saved",
        path=str(path),
        legacy=config.common.legacy_format,
        proxies=len(config.proxies),
    )
