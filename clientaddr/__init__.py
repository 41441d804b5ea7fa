"""
clientaddr - Trusted-proxy-aware client address resolution

Determines the originating client IP of an HTTP request that may have
passed through reverse proxies or load balancers. Forwarding headers are
attacker-controlled, so they are only believed when the direct peer is a
configured trusted proxy, and a header that cannot be parsed completely
is ignored rather than partially honored.

Core Features (No Optional Dependencies):
- RFC 7239 Forwarded and X-Forwarded-For style headers
- Trusted proxies as addresses, CIDR blocks, IPv4 wildcards or "*"
- Hop-count mode for fixed proxy topologies
- Flexible Logging - Silent by default, supports any logging framework

Optional Features (Require Installation):
- Framework Integrations - FastAPI, aiohttp, Sanic

Usage:
    from clientaddr import ClientAddressResolver, ResolverConfig

    resolver = ClientAddressResolver(ResolverConfig(
        check_proxy_headers=True,
        trusted_proxies=["10.0.0.0/8"],
    ))
    client_ip = resolver.resolve(peer_address, request_headers)

    # Framework integrations
    from clientaddr.integrations.fastapi import ClientAddressMiddleware
    from clientaddr.integrations.aiohttp import create_client_address_middleware
    from clientaddr.integrations.sanic import setup_client_address
"""

# Configuration
from .config import (
    ResolverConfig,
    DEFAULT_ATTRIBUTE_NAME,
    DEFAULT_HEADER_NAMES,
)

# Exception System
from .exceptions import (
    ClientAddrError,
    ConfigurationReason,
    HeaderReason,
    ConfigurationError,
    InvalidTrustSpecError,
    MissingTrustedProxiesError,
    MalformedHeaderError,
)

from .address import (
    normalize_address,
    is_valid_address,
)

from .trust import (
    TrustSpec,
    SpecKind,
    IPFamily,
    parse_trust_spec,
    matches,
    is_trusted,
)

from .headers import (
    extract_chain,
    parse_forwarded,
    parse_comma_list,
)

from .resolver import (
    ClientAddressResolver,
    resolve_client_address,
)

# Logging Configuration
from .logging import (
    configure_logging,
    set_error_handler,
    disable_logging,
    is_logging_enabled,
)

__all__ = [
    # Configuration
    "ResolverConfig",
    "DEFAULT_ATTRIBUTE_NAME",
    "DEFAULT_HEADER_NAMES",

    # Exception System
    "ClientAddrError",
    "ConfigurationReason",
    "HeaderReason",
    "ConfigurationError",
    "InvalidTrustSpecError",
    "MissingTrustedProxiesError",
    "MalformedHeaderError",

    # Address normalization
    "normalize_address",
    "is_valid_address",

    # Trusted proxies
    "TrustSpec",
    "SpecKind",
    "IPFamily",
    "parse_trust_spec",
    "matches",
    "is_trusted",

    # Header parsing
    "extract_chain",
    "parse_forwarded",
    "parse_comma_list",

    # Resolution
    "ClientAddressResolver",
    "resolve_client_address",

    # Logging Configuration
    "configure_logging",
    "set_error_handler",
    "disable_logging",
    "is_logging_enabled",
]

__version__ = "0.1.0"
__license__ = "MIT"
