"""
Specific exception types raised by clientaddr.

Configuration errors abort setup. Header errors never leave the
header parser; they are reported to the logging layer and turned
into a rejected header.
"""

from .base import ClientAddrError


class ConfigurationError(ClientAddrError, ValueError):
    """
    Raised when a resolver is configured with unusable settings.

    Subclasses ValueError so callers validating settings generically
    keep working.
    """
    pass


class InvalidTrustSpecError(ConfigurationError):
    """Raised when a trusted proxy pattern is not a valid address, CIDR block or wildcard"""
    pass


class MissingTrustedProxiesError(ConfigurationError):
    """
    Raised when proxy header checking is enabled but no trusted proxy
    list was supplied at all.

    An explicitly empty list is valid and means the direct peer is
    trusted implicitly.
    """
    pass


class MalformedHeaderError(ClientAddrError):
    """Raised while parsing a forwarding header that cannot be used"""
    pass
