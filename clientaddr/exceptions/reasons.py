"""
Reason codes attached to clientaddr exceptions.
"""

from enum import IntEnum


class ConfigurationReason(IntEnum):
    """Reasons why a resolver configuration is rejected"""
    MISSING_TRUSTED_PROXIES = 0  # Proxy headers enabled without a trusted proxy list
    INVALID_TRUST_SPEC = 1       # Trusted proxy pattern could not be parsed
    INVALID_HOP_COUNT = 2        # Hop count is negative or not an integer
    INVALID_ATTRIBUTE_NAME = 3   # Attribute name is empty or not a string
    INVALID_HEADER_NAMES = 4     # Header name list contains an unusable entry


class HeaderReason(IntEnum):
    """Reasons why a forwarding header is rejected"""
    EMPTY_VALUE = 0              # Header present but blank
    INVALID_ADDRESS = 1          # An entry is not an IP literal (most common)
    MISSING_FOR = 2              # Forwarded header carries no for= parameter
    UNBALANCED_QUOTES = 3        # Quoted string never closed
