"""Common utilities and shared functionality."""

from .exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    FRPConfigError,
    MissingSectionError,
    RangeSyntaxError,
)
from .logging import get_logger, mask_secrets, setup_logging
from .utils import (
    add_prefix,
    get_map_without_prefix,
    join_list,
    mask_sensitive_data,
    sanitize_log_data,
    split_list,
)

__all__ = [
    # Exceptions
    "FRPConfigError",
    "ConfigurationError",
    "DecodeError",
    "MissingSectionError",
    "EncodeError",
    "RangeSyntaxError",
    # Logging
    "get_logger",
    "setup_logging",
    "mask_secrets",
    # Utils
    "get_map_without_prefix",
    "add_prefix",
    "split_list",
    "join_list",
    "mask_sensitive_data",
    "sanitize_log_data",
]
