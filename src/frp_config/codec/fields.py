"""Schema walk shared by the legacy and the modern codec.

Both formats store a record as one flat block of keys: nested records are
inlined, side-maps become prefixed keys. ``flatten`` and ``unflatten`` do that
mapping once, from the schema table, so the two formats can't drift apart;
each codec only converts scalar values to and from its own representation.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, TypeVar, cast

from pydantic import BaseModel, ValidationError

from .. import consts
from ..common.exceptions import DecodeError
from ..common.utils import add_prefix, get_map_without_prefix, split_list
from ..schema import FieldKind, specs_for

RecordT = TypeVar("RecordT", bound=BaseModel)


def format_date(value: datetime) -> str:
    """Render a date the way both formats store it (UTC, second precision)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(consts.DELETE_DATE_FORMAT)


def flatten(
    record: BaseModel, legacy: bool, defaults: BaseModel | None = None
) -> dict[str, Any]:
    """Map a record to the flat key/value block it is persisted as.

    A value equal to the one decoding would fall back to is omitted, unless the
    field is always present. Dates are rendered as strings; every other value
    keeps its Python type.

    Args:
        record: Record to flatten
        legacy: Skip fields that the legacy format can't express
        defaults: Values an absent key decodes to; a default-constructed
            record when omitted

    Returns:
        Ordered mapping of persisted keys to values
    """
    if defaults is None:
        defaults = type(record)()

    items: dict[str, Any] = {}
    for spec in specs_for(type(record)):
        value = getattr(record, spec.name)
        default = getattr(defaults, spec.name)
        if spec.kind == FieldKind.RECORD:
            items.update(flatten(value, legacy, default))
        elif spec.kind == FieldKind.MAP:
            items.update(add_prefix(value, cast(str, spec.prefix)))
        elif spec.key is None or (legacy and not spec.legacy):
            continue
        elif value == default and not spec.always_present:
            continue
        elif spec.kind == FieldKind.DATE:
            items[spec.key] = format_date(value)
        else:
            items[spec.key] = value
    return items


def unflatten(
    record_type: type[BaseModel], items: Mapping[str, Any], legacy: bool
) -> dict[str, Any]:
    """Collect the values of a record type from a flat block.

    Only keys present in ``items`` produce entries, so the result can be
    laid over a record's defaults. Keys that belong to no field are ignored.

    Args:
        record_type: Record type to collect
        items: Flat key/value block read from a source
        legacy: Ignore keys of fields that the legacy format can't express

    Returns:
        Nested mapping of field names to raw values
    """
    values: dict[str, Any] = {}
    for spec in specs_for(record_type):
        if spec.kind == FieldKind.RECORD:
            nested = unflatten(cast(type[BaseModel], spec.record), items, legacy)
            if nested:
                values[spec.name] = nested
        elif spec.kind == FieldKind.MAP:
            side_map = get_map_without_prefix(items, cast(str, spec.prefix))
            if side_map:
                values[spec.name] = side_map
        elif spec.key is None or (legacy and not spec.legacy):
            continue
        elif spec.key in items:
            value = items[spec.key]
            if spec.kind != FieldKind.STR and value == "":
                continue
            if spec.kind == FieldKind.LIST and isinstance(value, str):
                value = split_list(value)
            values[spec.name] = value
    return values


def merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Lay ``overrides`` over ``base``, descending into nested records."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build(defaults: RecordT, items: Mapping[str, Any], legacy: bool, where: str) -> RecordT:
    """Build a record from a flat block, starting from ``defaults``.

    Raises:
        DecodeError: If a value doesn't fit its field
    """
    record_type = type(defaults)
    data = merge(defaults.model_dump(), unflatten(record_type, items, legacy))
    try:
        return record_type.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid value in {where}: {e}") from e
