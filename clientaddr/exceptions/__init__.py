"""
Exception types for clientaddr.

Provides:
- Base exception class with reason codes
- Configuration errors raised at setup time
- Header errors used internally while parsing request data
"""

from .base import ClientAddrError
from .reasons import ConfigurationReason, HeaderReason
from .errors import (
    ConfigurationError,
    InvalidTrustSpecError,
    MissingTrustedProxiesError,
    MalformedHeaderError,
)

__all__ = [
    # Base class
    "ClientAddrError",

    # Reason enums
    "ConfigurationReason",
    "HeaderReason",

    # Exception types
    "ConfigurationError",
    "InvalidTrustSpecError",
    "MissingTrustedProxiesError",
    "MalformedHeaderError",
]
