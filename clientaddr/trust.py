"""
Trusted proxy specifications and matching.

A trusted proxy entry is one of:
- "*"               every address (MatchAll)
- "10.0.*.*"        IPv4 wildcard, each octet literal or "*"
- "10.0.0.0/16"     CIDR block, IPv4 or IPv6
- "192.168.0.1"     a single address, IPv4 or IPv6

Patterns are validated once, when the configuration is built. Matching
itself never raises: an address that cannot be parsed or belongs to the
other family simply does not match.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Tuple, Union

from .address import IPAddress, parse_address
from .exceptions import ConfigurationReason, InvalidTrustSpecError

MATCH_ALL = "*"


class SpecKind(IntEnum):
    """Kinds of trusted proxy specification"""
    EXACT = 0
    CIDR = 1
    WILDCARD = 2
    MATCH_ALL = 3


class IPFamily(IntEnum):
    """Address family, valued by IP version"""
    IPV4 = 4
    IPV6 = 6


@dataclass(frozen=True)
class TrustSpec:
    """
    One trusted proxy rule.

    The pattern is checked against the kind when the spec is built and
    its parsed form is kept alongside it, so matching does no re-parsing.
    parse_trust_spec() picks the kind from the pattern; building a spec
    directly works too, as long as kind and pattern agree.

    Attributes:
        kind: Which matching rule applies
        pattern: Pattern as configured, surrounding whitespace removed
        family: Address family the rule applies to (None for MatchAll).
            Derived from the pattern; a conflicting value is rejected.

    Raises:
        InvalidTrustSpecError: If the pattern is malformed, is not of the
            given kind, or belongs to another family
    """
    kind: SpecKind
    pattern: str
    family: Optional[IPFamily] = None
    network: Optional[Union[ipaddress.IPv4Network, ipaddress.IPv6Network]] = field(
        default=None, compare=False, repr=False
    )
    address: Optional[IPAddress] = field(default=None, compare=False, repr=False)
    octets: Tuple[Optional[int], ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self):
        pattern = self.pattern
        if not isinstance(pattern, str):
            raise _invalid(str(pattern), "pattern must be a string")

        value = pattern.strip()
        if not value:
            raise _invalid(pattern, "pattern is empty")

        try:
            kind = SpecKind(self.kind)
        except ValueError:
            raise _invalid(pattern, f"unknown spec kind {self.kind!r}") from None
        if _classify(value) != kind:
            raise _invalid(pattern, f"not a {kind.name.lower()} pattern")

        family = None
        if kind == SpecKind.WILDCARD:
            object.__setattr__(self, "octets", _parse_wildcard(pattern, value))
            family = IPFamily.IPV4
        elif kind == SpecKind.CIDR:
            try:
                network = ipaddress.ip_network(value, strict=False)
            except ValueError as e:
                raise _invalid(pattern, str(e)) from e
            object.__setattr__(self, "network", network)
            family = IPFamily(network.version)
        elif kind == SpecKind.EXACT:
            address = parse_address(value)
            if address is None:
                raise _invalid(pattern, "not an IP address, CIDR block or wildcard")
            object.__setattr__(self, "address", address)
            family = IPFamily(address.version)

        if self.family is not None and self.family != family:
            raise _invalid(pattern, f"pattern does not belong to family {self.family!r}")

        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "pattern", value)
        object.__setattr__(self, "family", family)

    def __str__(self):
        return self.pattern


def _invalid(pattern: str, detail: str) -> InvalidTrustSpecError:
    return InvalidTrustSpecError(
        f"Invalid trusted proxy '{pattern}': {detail}",
        reason=ConfigurationReason.INVALID_TRUST_SPEC,
        pattern=pattern,
    )


def _classify(value: str) -> SpecKind:
    if value == MATCH_ALL:
        return SpecKind.MATCH_ALL
    if "*" in value:
        return SpecKind.WILDCARD
    if "/" in value:
        return SpecKind.CIDR
    return SpecKind.EXACT


def _parse_wildcard(pattern: str, value: str) -> Tuple[Optional[int], ...]:
    parts = value.split(".")
    if len(parts) != 4:
        raise _invalid(pattern, "wildcard must have four dot-separated components")

    octets = []
    for part in parts:
        if part == "*":
            octets.append(None)
            continue
        if not (part.isascii() and part.isdigit()) or int(part) > 255:
            raise _invalid(pattern, f"'{part}' is not an octet or '*'")
        octets.append(int(part))
    return tuple(octets)


def parse_trust_spec(pattern: str) -> TrustSpec:
    """
    Parse a trusted proxy pattern.

    Args:
        pattern: Address, CIDR block, IPv4 wildcard or "*"

    Returns:
        TrustSpec instance

    Raises:
        InvalidTrustSpecError: If the pattern is malformed

    Example:
        >>> parse_trust_spec("10.0.160.8/29").kind
        <SpecKind.CIDR: 1>
    """
    if not isinstance(pattern, str):
        raise _invalid(str(pattern), "pattern must be a string")
    return TrustSpec(kind=_classify(pattern.strip()), pattern=pattern)


def _match_wildcard(address: IPAddress, spec: TrustSpec) -> bool:
    components = str(address).split(".")
    return all(
        expected is None or int(actual) == expected
        for expected, actual in zip(spec.octets, components)
    )


def matches(address: str, spec: TrustSpec) -> bool:
    """
    Check whether a normalized address matches a trust spec.

    Args:
        address: Normalized IP literal
        spec: Trust specification

    Returns:
        True if the address is covered by the spec
    """
    if spec.kind == SpecKind.MATCH_ALL:
        return True

    parsed = parse_address(address)
    if parsed is None or parsed.version != spec.family:
        return False

    if spec.kind == SpecKind.EXACT:
        return parsed == spec.address
    if spec.kind == SpecKind.CIDR:
        return parsed in spec.network
    if spec.kind == SpecKind.WILDCARD:
        return _match_wildcard(parsed, spec)
    return False


def is_trusted(address: str, specs: Iterable[TrustSpec]) -> bool:
    """
    Check whether any spec matches the address.

    An empty collection trusts nothing. The implicit trust given to the
    direct peer when no proxies are configured is decided by the resolver,
    not here.
    """
    return any(matches(address, spec) for spec in specs)


def parse_trust_specs(patterns: Iterable[Union[str, TrustSpec]]) -> Tuple[TrustSpec, ...]:
    """
    Parse a collection of patterns, dropping duplicates.

    TrustSpec instances are accepted as-is; they were validated when
    built. First-seen order is kept.
    """
    if isinstance(patterns, str):
        patterns = [patterns]

    specs = []
    seen = set()
    for pattern in patterns:
        spec = pattern if isinstance(pattern, TrustSpec) else parse_trust_spec(pattern)
        key = (spec.kind, spec.pattern)
        if key in seen:
            continue
        seen.add(key)
        specs.append(spec)
    return tuple(specs)
