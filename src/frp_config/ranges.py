"""Port range parsing and alias resolution for range proxies."""

from . import consts
from .common.exceptions import RangeSyntaxError


def parse_range_numbers(range_str: str) -> list[int]:
    """Parse a range string like ``"1000-1002,1004"`` into individual numbers.

    Tokens are separated by commas and are either a single number or an
    inclusive ``start-end`` range. Empty tokens are skipped. The result keeps
    source order and duplicates, since it defines the alias numbering.

    Args:
        range_str: Compact range string

    Returns:
        Flattened list of numbers

    Raises:
        RangeSyntaxError: If the string is empty, a token is not numeric or a
            range is reversed
    """
    if not range_str:
        raise RangeSyntaxError("empty range string")

    numbers: list[int] = []
    for part in range_str.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            bounds = part.split("-")
            if len(bounds) != 2:
                raise RangeSyntaxError(f"invalid range format: {part}")
            start = _parse_number(bounds[0], f"invalid start number in range: {bounds[0]}")
            end = _parse_number(bounds[1], f"invalid end number in range: {bounds[1]}")
            if start > end:
                raise RangeSyntaxError(
                    f"start number must be less than or equal to end number in range: {part}"
                )
            numbers.extend(range(start, end + 1))
        else:
            numbers.append(_parse_number(part, f"invalid number: {part}"))

    return numbers


def _parse_number(token: str, message: str) -> int:
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        raise RangeSyntaxError(message)
    return int(token)


def is_range(proxy_type: str, local_port: str, remote_port: str) -> bool:
    """Check whether a proxy with these ports expands into several proxies."""
    if proxy_type not in consts.RANGE_PROXY_TYPES:
        return False
    ports = local_port + remote_port
    return "," in ports or "-" in ports


def get_alias(name: str, proxy_type: str, local_port: str, remote_port: str) -> list[str]:
    """Resolve the names a proxy is started under.

    A range proxy yields ``{name}_{i}`` for every number of its local port
    list; the remote port list doesn't take part, even when its length
    differs. Unparseable local ports degrade to the bare name.
    """
    if not is_range(proxy_type, local_port, remote_port):
        return [name]
    try:
        local_ports = parse_range_numbers(local_port)
    except RangeSyntaxError:
        return [name]
    return [f"{name}_{i}" for i in range(len(local_ports))]
