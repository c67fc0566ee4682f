"""Modern TOML format.

The client-common settings live in a ``[client]`` table and every proxy in a
``[proxies.<name>]`` table keyed by its bare name, in list order. Numbers and
booleans are native TOML values and the start list is an array.
"""

import tomllib
from typing import Any

import toml

from .. import consts
from ..common.exceptions import DecodeError, MissingSectionError
from ..common.logging import get_logger
from ..models import ClientCommon, ClientConfig, Proxy
from .fields import build, flatten

logger = get_logger(__name__)


def parse(text: str) -> dict[str, Any]:
    """Parse TOML text.

    Raises:
        DecodeError: If the text isn't valid TOML
    """
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise DecodeError(f"Malformed TOML config: {e}") from e


def decode_config(text: str) -> ClientConfig:
    """Decode a whole modern config, without completion.

    Raises:
        DecodeError: If the text is malformed or a table has the wrong shape
        MissingSectionError: If there is no ``[client]`` table
    """
    document = parse(text)
    common_table = document.get(consts.MODERN_COMMON_TABLE)
    if common_table is None:
        raise MissingSectionError(f"Table [{consts.MODERN_COMMON_TABLE}] not found")
    if not isinstance(common_table, dict):
        raise DecodeError(f"'{consts.MODERN_COMMON_TABLE}' must be a table")

    common = build(
        ClientCommon(),
        common_table,
        legacy=False,
        where=f"[{consts.MODERN_COMMON_TABLE}]",
    )

    proxy_tables = document.get(consts.MODERN_PROXIES_TABLE, {})
    if not isinstance(proxy_tables, dict):
        raise DecodeError(f"'{consts.MODERN_PROXIES_TABLE}' must be a table")

    proxies = []
    for name, table in proxy_tables.items():
        if not isinstance(table, dict):
            raise DecodeError(f"Proxy '{name}' must be a table")
        proxies.append(
            build(Proxy(name=name), table, legacy=False, where=f"proxy '{name}'")
        )

    logger.debug("Decoded TOML config", proxies=len(proxies))
    return ClientConfig(common=common, proxies=proxies)


def encode_config(config: ClientConfig) -> str:
    """Encode a config as TOML text, without completion."""
    document: dict[str, Any] = {
        consts.MODERN_COMMON_TABLE: flatten(config.common, legacy=False),
    }
    if config.proxies:
        document[consts.MODERN_PROXIES_TABLE] = {
            proxy.name: flatten(proxy, legacy=False) for proxy in config.proxies
        }
    return toml.dumps(document)
