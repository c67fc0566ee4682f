"""Dual-format codec for client configs.

Both formats are driven by the schema table through ``fields``.
"""

from . import legacy, modern
from .detect import is_legacy_format
from .fields import flatten, format_date, unflatten

__all__ = [
    "legacy",
    "modern",
    "is_legacy_format",
    "flatten",
    "unflatten",
    "format_date",
]
