"""Capability projection of configuration records."""

import copy
from typing import TypeVar

from pydantic import BaseModel

from .schema import FieldKind, Grouping, specs_for, zero_value

RecordT = TypeVar("RecordT", bound=BaseModel)


def project(record: RecordT, grouping: Grouping, label: str) -> RecordT:
    """Return a copy of ``record`` keeping only the fields valid for ``label``.

    Fields that declare ``grouping`` are copied when they accept ``label`` (or
    the wildcard) and reset to their zero value otherwise. Fields that don't
    declare it are copied unchanged, and nested records among them are
    projected the same way. An unknown label keeps none of the declaring
    fields.

    Args:
        record: Populated record; it is not modified
        grouping: Grouping whose active value is ``label``
        label: Active capability label, e.g. the proxy type

    Returns:
        New record of the same type
    """
    values = {}
    for spec in specs_for(type(record)):
        value = getattr(record, spec.name)
        if not spec.retains(grouping, label):
            values[spec.name] = zero_value(spec)
        elif spec.kind == FieldKind.RECORD and not spec.declares(grouping):
            values[spec.name] = project(value, grouping, label)
        else:
            values[spec.name] = copy.deepcopy(value)
    return type(record).model_construct(**values)
