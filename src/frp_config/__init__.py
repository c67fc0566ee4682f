"""FRP client configuration engine.

Loads, normalizes and saves frpc configs in the legacy INI and the modern
TOML format.
"""

from .api import decode, decode_proxy, dumps, encode

# Common utilities
from .common.exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    FRPConfigError,
    MissingSectionError,
    RangeSyntaxError,
)
from .common.logging import get_logger, setup_logging
from .completion import complete, complete_proxy, gather_start

# Model
from .models import (
    AuthSettings,
    AutoDelete,
    ClientCommon,
    ClientConfig,
    HealthCheckConf,
    PluginParams,
    Proxy,
)
from .profiles import config_filename, profile_path, sanitize_filename
from .projection import project
from .ranges import get_alias, is_range, parse_range_numbers
from .schema import SCHEMA, FieldKind, FieldSpec, Grouping

# Setup logging on package initialization
setup_logging(level="INFO")

# Package level logger
logger = get_logger(__name__)

__version__ = "0.1.0"


__all__ = [
    # Load and save
    "decode",
    "decode_proxy",
    "dumps",
    "encode",
    "complete",
    "complete_proxy",
    "gather_start",
    # Model
    "ClientConfig",
    "ClientCommon",
    "AuthSettings",
    "AutoDelete",
    "Proxy",
    "PluginParams",
    "HealthCheckConf",
    # Schema and projection
    "SCHEMA",
    "FieldSpec",
    "FieldKind",
    "Grouping",
    "project",
    # Ranges
    "parse_range_numbers",
    "is_range",
    "get_alias",
    # Profiles
    "profile_path",
    "config_filename",
    "sanitize_filename",
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
]
