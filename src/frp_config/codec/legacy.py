"""Legacy INI format.

A ``[common]`` section holds the client-common settings and every other
section is a proxy named after the section. Range proxies carry the
``range:`` prefix in their section name.
"""

import configparser
import io
from collections.abc import Mapping
from typing import Any

from .. import consts
from ..common.exceptions import DecodeError, EncodeError, MissingSectionError
from ..common.logging import get_logger
from ..common.utils import join_list
from ..models import ClientCommon, ClientConfig, Proxy
from .fields import build, flatten

logger = get_logger(__name__)

# Keys before the first section header land in this section, as in frp.
DEFAULT_SECTION = "DEFAULT"

# configparser copies its default section into every other section; frp
# doesn't, so that behavior is parked on a name no file uses.
_NO_DEFAULT_SECTION = "\x00"

# Quote pairs around values, longest first.
_QUOTES = ('"""', "`", '"')


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        allow_no_value=True,
        default_section=_NO_DEFAULT_SECTION,
        strict=False,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _normalize(text: str) -> str:
    """Drop line indentation and give leading keys a section of their own."""
    lines = [line.lstrip() for line in text.splitlines()]
    for line in lines:
        if not line or line.startswith(("#", ";")):
            continue
        if not line.startswith("["):
            lines.insert(0, f"[{DEFAULT_SECTION}]")
        break
    return "\n".join(lines) + "\n"


def parse(text: str) -> configparser.ConfigParser:
    """Parse legacy INI text.

    Raises:
        DecodeError: If the text isn't valid INI
    """
    parser = _new_parser()
    try:
        parser.read_string(_normalize(text))
    except configparser.Error as e:
        raise DecodeError(f"Malformed INI config: {e}") from e
    return parser


def _unquote(value: str) -> str:
    """Remove one pair of surrounding quotes, as frp's INI writer adds them."""
    for quote in _QUOTES:
        if (
            len(value) >= 2 * len(quote)
            and value.startswith(quote)
            and value.endswith(quote)
        ):
            return value[len(quote) : -len(quote)]
    return value


def _quote(value: str) -> str:
    """Quote a value the way frp's INI writer does, so it reads back unchanged."""
    if "`" in value:
        return f'"""{value}"""'
    if "#" in value or ";" in value or _unquote(value) != value:
        return f"`{value}`"
    if value != value.strip():
        return f'"{value}"'
    return value


def _section_items(section: configparser.SectionProxy) -> dict[str, str]:
    # A key without a value is a boolean flag that is switched on.
    return {
        key: "true" if value is None else _unquote(value)
        for key, value in section.items()
    }


def _to_ini(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        value = join_list(value)
    text = str(value)
    if "\n" in text or "\r" in text:
        raise EncodeError(f"Value of '{key}' spans several lines")
    return _quote(text)


def proxy_from_section(name: str, items: Mapping[str, str]) -> Proxy:
    """Build a proxy from the keys of its section."""
    name = name.removeprefix(consts.RANGE_PREFIX)
    return build(Proxy(name=name), items, legacy=True, where=f"proxy [{name}]")


def decode_config(text: str) -> ClientConfig:
    """Decode a whole legacy config, without completion.

    Raises:
        DecodeError: If the text is malformed
        MissingSectionError: If there is no ``[common]`` section
    """
    parser = parse(text)
    if not parser.has_section(consts.LEGACY_COMMON_SECTION):
        raise MissingSectionError(
            f"Section [{consts.LEGACY_COMMON_SECTION}] not found"
        )

    common = build(
        ClientCommon(),
        _section_items(parser[consts.LEGACY_COMMON_SECTION]),
        legacy=True,
        where=f"[{consts.LEGACY_COMMON_SECTION}]",
    )
    proxies = [
        proxy_from_section(name, _section_items(parser[name]))
        for name in parser.sections()
        if name not in (consts.LEGACY_COMMON_SECTION, DEFAULT_SECTION)
    ]
    logger.debug("Decoded legacy config", proxies=len(proxies))
    return ClientConfig(common=common, proxies=proxies)


def decode_proxy(text: str) -> Proxy:
    """Decode the first proxy section of a legacy snippet.

    Keys outside of any section are used when the snippet has no proxy
    section; the proxy is then nameless.

    Raises:
        DecodeError: If the text is malformed
        MissingSectionError: If no proxy keys are found
    """
    parser = parse(text)
    use_name: str | None = None
    for name in parser.sections():
        if name == consts.LEGACY_COMMON_SECTION:
            continue
        if name == DEFAULT_SECTION:
            use_name = name
            continue
        use_name = name
        break

    if use_name is None or not parser.options(use_name):
        raise MissingSectionError("No proxy section found")
    return proxy_from_section(
        "" if use_name == DEFAULT_SECTION else use_name,
        _section_items(parser[use_name]),
    )


def section_name(proxy: Proxy) -> str:
    """Section name of a proxy; range proxies get the reserved prefix."""
    name = proxy.name
    if proxy.is_range() and not name.startswith(consts.RANGE_PREFIX):
        name = consts.RANGE_PREFIX + name
    return name


def encode_config(config: ClientConfig) -> str:
    """Encode a config as legacy INI text, without completion.

    Raises:
        EncodeError: If a proxy name clashes with another section, or a value
            spans several lines
    """
    parser = _new_parser()
    parser[consts.LEGACY_COMMON_SECTION] = {
        key: _to_ini(key, value)
        for key, value in flatten(config.common, legacy=True).items()
    }
    for proxy in config.proxies:
        name = section_name(proxy)
        if name in (consts.LEGACY_COMMON_SECTION, DEFAULT_SECTION, ""):
            raise EncodeError(f"Proxy name '{proxy.name}' is reserved")
        try:
            parser.add_section(name)
        except configparser.DuplicateSectionError as e:
            raise EncodeError(f"Duplicate proxy name '{proxy.name}'") from e
        for key, value in flatten(proxy, legacy=True).items():
            parser.set(name, key, _to_ini(key, value))

    buffer = io.StringIO()
    parser.write(buffer)
    return buffer.getvalue()
