"""
Configuration for client address resolution.

A ResolverConfig is built once at application setup and never mutated,
so a single instance can be shared by every concurrent request.
"""

from dataclasses import dataclass, fields
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import (
    ConfigurationError,
    ConfigurationReason,
    MissingTrustedProxiesError,
)
from .trust import TrustSpec, parse_trust_specs

DEFAULT_ATTRIBUTE_NAME = "ip_address"

# Inspected in order, first header that parses wins
DEFAULT_HEADER_NAMES: Tuple[str, ...] = (
    "Forwarded",
    "X-Forwarded-For",
    "X-Forwarded",
    "X-Cluster-Client-Ip",
    "Client-Ip",
)


@dataclass(frozen=True)
class ResolverConfig:
    """
    Configuration for ClientAddressResolver.

    Args:
        check_proxy_headers: Consult forwarding headers at all
        trusted_proxies: Proxy patterns whose forwarding headers are believed.
            Required when check_proxy_headers is True. An empty collection
            trusts the direct peer implicitly; None is a configuration error.
        attribute_name: Name under which adapters store the result
        header_names: Headers to inspect, in priority order
        hop_count: Number of trusted proxy hops; overrides trust-list walking

    Example:
        >>> config = ResolverConfig(
        ...     check_proxy_headers=True,
        ...     trusted_proxies=["10.0.0.0/8", "192.168.*.*"],
        ... )
        >>> resolver = ClientAddressResolver(config)
    """
    check_proxy_headers: bool = False
    trusted_proxies: Optional[Iterable[Union[str, TrustSpec]]] = None
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME
    header_names: Sequence[str] = DEFAULT_HEADER_NAMES
    hop_count: Optional[int] = None

    def __post_init__(self):
        """Validate configuration and freeze collections"""
        if self.check_proxy_headers and self.trusted_proxies is None:
            raise MissingTrustedProxiesError(
                "Use of forwarding headers requires a list of trusted proxies "
                "(pass an empty list to trust the direct peer implicitly)",
                reason=ConfigurationReason.MISSING_TRUSTED_PROXIES,
            )

        specs = parse_trust_specs(self.trusted_proxies or ())
        object.__setattr__(self, "trusted_proxies", specs)

        if not isinstance(self.attribute_name, str) or not self.attribute_name:
            raise ConfigurationError(
                "attribute_name must be a non-empty string",
                reason=ConfigurationReason.INVALID_ATTRIBUTE_NAME,
            )

        if isinstance(self.header_names, str):
            header_names = (self.header_names,)
        else:
            header_names = tuple(self.header_names)
        for name in header_names:
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(
                    f"Invalid header name: {name!r}",
                    reason=ConfigurationReason.INVALID_HEADER_NAMES,
                )
        object.__setattr__(self, "header_names", tuple(name.strip() for name in header_names))

        if self.hop_count is not None:
            if isinstance(self.hop_count, bool) or not isinstance(self.hop_count, int):
                raise ConfigurationError(
                    "hop_count must be an integer or None",
                    reason=ConfigurationReason.INVALID_HOP_COUNT,
                )
            if self.hop_count < 0:
                raise ConfigurationError(
                    "hop_count must be non-negative",
                    reason=ConfigurationReason.INVALID_HOP_COUNT,
                )

    @property
    def trusts_implicitly(self) -> bool:
        """True when no proxy patterns are configured, so the direct peer is trusted as-is"""
        return not self.trusted_proxies

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "ResolverConfig":
        """
        Build a config from a plain mapping, e.g. a parsed settings file.

        Unknown keys are rejected so typos do not silently disable
        proxy checking.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(settings) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown resolver settings: {', '.join(sorted(unknown))}"
            )
        return cls(**dict(settings))
