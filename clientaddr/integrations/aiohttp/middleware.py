"""
aiohttp middleware for clientaddr
"""

from typing import Optional

from aiohttp import web

from ...config import ResolverConfig
from ...logging import get_logger
from ...resolver import ClientAddressResolver
from .utils import get_peer_address

logger = get_logger(__name__)


def create_client_address_middleware(
    config: Optional[ResolverConfig] = None,
    resolver: Optional[ClientAddressResolver] = None,
    **settings,
):
    """
    Create aiohttp middleware that resolves the client address.

    The result is stored in the request under the configured attribute
    name, so handlers read it with request["ip_address"].

    Example:
        from aiohttp import web
        from clientaddr import ResolverConfig
        from clientaddr.integrations.aiohttp import create_client_address_middleware

        app = web.Application(middlewares=[
            create_client_address_middleware(ResolverConfig(
                check_proxy_headers=True,
                trusted_proxies=["10.0.0.0/8"],
            ))
        ])

    Args:
        config: ResolverConfig instance
        resolver: Prebuilt resolver (takes precedence over config)
        **settings: ResolverConfig fields, used when neither is given

    Returns:
        aiohttp middleware function
    """
    if resolver is None:
        resolver = ClientAddressResolver(config, **settings)
    attribute_name = resolver.attribute_name

    @web.middleware
    async def client_address_middleware(request, handler):
        """Resolve client address before the handler runs"""
        request[attribute_name] = resolver.resolve(get_peer_address(request), request.headers)
        return await handler(request)

    logger.info("Client address middleware configured for aiohttp app")
    return client_address_middleware
