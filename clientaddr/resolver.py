"""
Client address resolution.

Determines the originating client address of a request from the direct
peer address and the forwarding headers, believing headers only when
the direct peer is a trusted proxy.

Algorithm:
1. No (valid) peer address -> no result, headers are never consulted
2. Proxy headers disabled -> the peer
3. Peer not trusted -> the peer. An empty trusted proxy list trusts
   the peer implicitly.
4. First configured header that parses yields the chain; none -> the peer
5. Pick the client from the chain:
   - hop count: index len(chain) - hop_count, moved toward the client end
     past trusted proxies
   - trust list: newest entry that is not a trusted proxy
"""

from typing import Any, List, Optional

from .address import normalize_address
from .config import ResolverConfig
from .headers import extract_chain, normalize_headers
from .logging import get_logger
from .trust import is_trusted

logger = get_logger(__name__)


class ClientAddressResolver:
    """
    Resolves the client address of requests for one configuration.

    Stateless apart from its immutable config; safe to share across
    concurrent requests.

    Example:
        resolver = ClientAddressResolver(ResolverConfig(
            check_proxy_headers=True,
            trusted_proxies=["10.0.0.0/8"],
        ))

        resolver.resolve("10.0.0.5:51234", {"X-Forwarded-For": "203.0.113.9"})
        # '203.0.113.9'
    """

    def __init__(self, config: Optional[ResolverConfig] = None, **kwargs):
        """
        Initialize resolver.

        Args:
            config: ResolverConfig instance
            **kwargs: ResolverConfig fields, used when config is not given
        """
        if config is None:
            config = ResolverConfig(**kwargs)
        elif kwargs:
            raise TypeError("Pass either config or keyword settings, not both")
        self.config = config

    @property
    def attribute_name(self) -> str:
        return self.config.attribute_name

    def resolve(self, peer_address: Optional[str], headers: Any = None) -> Optional[str]:
        """
        Resolve the client address of one request.

        Never raises for malformed request data.

        Args:
            peer_address: Transport peer address, optionally with a port
            headers: Request headers (any case-insensitive or plain mapping)

        Returns:
            Client IP literal, or None if no address could be established
        """
        peer = normalize_address(peer_address)
        if peer is None:
            if peer_address:
                logger.debug(f"Ignoring unparsable peer address {peer_address!r}")
            return None

        config = self.config
        if not config.check_proxy_headers:
            return peer

        if not config.trusts_implicitly and not is_trusted(peer, config.trusted_proxies):
            logger.debug(f"Peer {peer} is not a trusted proxy, ignoring forwarding headers")
            return peer

        chain = self._find_chain(normalize_headers(headers))
        if chain is None:
            return peer

        if config.hop_count is not None:
            client = self._select_by_hop_count(chain, peer)
        else:
            client = self._select_by_trust(chain)
        logger.debug(f"Resolved client {client} via peer {peer}")
        return client

    def _find_chain(self, headers: dict) -> Optional[List[str]]:
        """Chain from the first configured header that parses"""
        for name in self.config.header_names:
            chain = extract_chain(name, headers.get(name.lower()))
            if chain:
                logger.debug(f"Using {name} header with {len(chain)} hop(s)")
                return chain
        return None

    def _select_by_hop_count(self, chain: List[str], peer: str) -> str:
        trusted = self.config.trusted_proxies
        index = len(chain) - self.config.hop_count

        # Every hop the proxies recorded is past the trusted boundary
        if index >= len(chain):
            return peer

        while 0 <= index and is_trusted(chain[index], trusted):
            index -= 1
        if index < 0:
            return chain[0]
        return chain[index]

    def _select_by_trust(self, chain: List[str]) -> str:
        trusted = self.config.trusted_proxies
        for address in reversed(chain):
            if not is_trusted(address, trusted):
                return address
        return chain[0]


def resolve_client_address(
    peer_address: Optional[str],
    headers: Any,
    config: ResolverConfig,
) -> Optional[str]:
    """
    Resolve a client address with a one-off resolver.

    Convenience wrapper around ClientAddressResolver(config).resolve().
    """
    return ClientAddressResolver(config).resolve(peer_address, headers)
