"""
Address token normalization.

Turns a single raw address token taken from a peer address or a
forwarding header into a bare IP literal, or None when the token is
not an IPv4/IPv6 address.
"""

import ipaddress
import re
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# Dotted quad followed by a port, e.g. "192.168.1.1:8080"
_IPV4_WITH_PORT = re.compile(r"^([0-9]{1,3}(?:\.[0-9]{1,3}){3}):[0-9]+$")

# Optional port after a bracketed IPv6 literal, e.g. "]:4711"
_PORT_SUFFIX = re.compile(r"^(?::[0-9]+)?$")


def _unquote(token: str) -> str:
    """Remove one layer of surrounding double quotes"""
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return token[1:-1].strip()
    return token


def strip_port(token: str) -> Optional[str]:
    """
    Remove brackets and port suffix from a trimmed, unquoted token.

    Ports are ASCII digits only. Returns None for a bracketed literal
    with no closing bracket or with anything but a port after it.
    """
    if token.startswith("["):
        end = token.find("]")
        if end == -1:
            return None
        if not _PORT_SUFFIX.match(token[end + 1:]):
            return None
        return token[1:end]

    match = _IPV4_WITH_PORT.match(token)
    if match:
        return match.group(1)

    # Bare IPv6 literals contain colons too and are left alone
    return token


def parse_address(value: str) -> Optional[IPAddress]:
    """Parse an already normalized literal into an ipaddress object"""
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def normalize_address(token: Optional[str]) -> Optional[str]:
    """
    Normalize a raw address token.

    Accepts plain literals, quoted tokens, bracketed IPv6 literals with
    or without a port, and IPv4 literals with a port. The literal is
    returned as written (not re-formatted) so callers see what the proxy
    recorded.

    Args:
        token: Raw token, e.g. '"[2001:db8::17]:4711"' or '10.0.0.1:80'

    Returns:
        The bare address string, or None if the token is not an IP literal

    Example:
        >>> normalize_address(' "[2001:db8:cafe::17]:4711" ')
        '2001:db8:cafe::17'
        >>> normalize_address('192.168.1.1:80')
        '192.168.1.1'
        >>> normalize_address('_hiddenProxy') is None
        True
    """
    if token is None:
        return None

    candidate = _unquote(token.strip())
    if not candidate:
        return None

    candidate = strip_port(candidate)
    if not candidate:
        return None

    if parse_address(candidate) is None:
        return None
    return candidate


def is_valid_address(token: Optional[str]) -> bool:
    """Check whether a token normalizes to an IP literal"""
    return normalize_address(token) is not None
