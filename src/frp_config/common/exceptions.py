"""Custom exceptions for the FRP client configuration engine."""


class FRPConfigError(Exception):
    """Base exception for all configuration engine errors."""
    pass


class ConfigurationError(FRPConfigError):
    """Raised when configuration content is invalid."""
    pass


class DecodeError(ConfigurationError):
    """Raised when a configuration source cannot be parsed."""
    pass


class MissingSectionError(DecodeError):
    """Raised when a required section is absent from the source."""
    pass


class EncodeError(ConfigurationError):
    """Raised when a configuration cannot be represented in its target format."""
    pass


class RangeSyntaxError(ConfigurationError, ValueError):
    """Raised when a port range string is malformed."""
    pass
