"""
Forwarding header parsing.

Each supported header is turned into a chain of normalized addresses,
oldest (client end) first and newest (proxy end) last. Headers are
attacker-controlled, so parsing is all-or-nothing: a single bad entry
rejects the whole header and the resolver moves on to the next one.

Two formats are understood:
- RFC 7239 "Forwarded": comma-separated elements of ';'-separated
  key=value pairs, the address taken from each "for" parameter
- Comma lists ("X-Forwarded-For" and friends, or any custom header)
"""

from typing import Any, Dict, List, Optional

from .address import normalize_address
from .exceptions import HeaderReason, MalformedHeaderError
from .logging import log_error

# Headers using the RFC 7239 element syntax (lower-case)
STRUCTURED_HEADERS = frozenset({"forwarded"})


def normalize_headers(headers: Any) -> Dict[str, str]:
    """
    Build a lower-cased name -> value mapping from request headers.

    Repeated headers are joined with ", ", which is how HTTP defines
    combining list-valued fields. Works with plain dicts, Starlette
    Headers, aiohttp/multidict CIMultiDict and Sanic Header objects,
    or any iterable of (name, value) pairs.
    """
    if headers is None:
        return {}

    items = headers.items() if hasattr(headers, "items") else headers
    combined: Dict[str, str] = {}
    for name, value in items:
        if isinstance(name, bytes):
            name = name.decode("latin-1")
        if isinstance(value, bytes):
            value = value.decode("latin-1")
        key = name.lower()
        if key in combined:
            combined[key] = f"{combined[key]}, {value}"
        else:
            combined[key] = value
    return combined


def split_top_level(value: str, separator: str) -> List[str]:
    """Split on a separator, ignoring separators inside double-quoted strings"""
    parts = []
    current = []
    in_quotes = False
    escaped = False
    for char in value:
        if escaped:
            escaped = False
        elif char == "\\" and in_quotes:
            escaped = True
        elif char == '"':
            in_quotes = not in_quotes
        elif char == separator and not in_quotes:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    if in_quotes:
        raise MalformedHeaderError(
            "unterminated quoted string",
            reason=HeaderReason.UNBALANCED_QUOTES,
        )
    parts.append("".join(current))
    return parts


def _normalize_entry(token: str) -> str:
    address = normalize_address(token)
    if address is None:
        raise MalformedHeaderError(
            f"not an IP address: {token.strip()!r}",
            reason=HeaderReason.INVALID_ADDRESS,
            token=token.strip(),
        )
    return address


def parse_forwarded(value: str) -> List[str]:
    """
    Parse an RFC 7239 Forwarded header into an address chain.

    Elements without a "for" parameter add no hop. A "for" value that
    is not an IP literal (obfuscated identifiers such as "_hidden", or
    "unknown") rejects the header.

    Example:
        >>> parse_forwarded('for=192.0.2.43, for=198.51.100.17;by=203.0.113.60')
        ['192.0.2.43', '198.51.100.17']

    Raises:
        MalformedHeaderError: If the header cannot be used
    """
    chain = []
    for element in split_top_level(value, ","):
        for pair in split_top_level(element, ";"):
            key, sep, raw = pair.partition("=")
            if not sep or key.strip().lower() != "for":
                continue
            chain.append(_normalize_entry(raw))
            break

    if not chain:
        raise MalformedHeaderError(
            "no for= parameter present",
            reason=HeaderReason.MISSING_FOR,
        )
    return chain


def parse_comma_list(value: str) -> List[str]:
    """
    Parse a comma-separated list of addresses.

    Raises:
        MalformedHeaderError: If any entry is not an IP literal
    """
    return [_normalize_entry(entry) for entry in value.split(",")]


def extract_chain(header_name: str, value: Optional[str]) -> Optional[List[str]]:
    """
    Extract the address chain from one header.

    Never raises for malformed content; rejected headers are reported
    through the logging layer and None is returned.

    Args:
        header_name: Header name in any case
        value: Raw header value, or None if the header is missing

    Returns:
        List of normalized addresses (oldest first), or None if the header
        is missing or rejected
    """
    if value is None:
        return None

    name = header_name.lower()
    try:
        if not value.strip():
            raise MalformedHeaderError(
                "header is empty",
                reason=HeaderReason.EMPTY_VALUE,
            )
        if name in STRUCTURED_HEADERS:
            return parse_forwarded(value)
        return parse_comma_list(value)
    except MalformedHeaderError as e:
        log_error(
            __name__,
            e,
            header=name,
            reason=e.reason.name if e.reason is not None else None,
        )
        return None
