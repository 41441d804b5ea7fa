"""
Sanic middleware setup for clientaddr
"""

from typing import Optional

from ...config import ResolverConfig
from ...logging import get_logger
from ...resolver import ClientAddressResolver
from .utils import get_peer_address

logger = get_logger(__name__)


def setup_client_address(
    app,
    config: Optional[ResolverConfig] = None,
    resolver: Optional[ClientAddressResolver] = None,
    **settings,
) -> ClientAddressResolver:
    """
    Resolve the client address of every request of a Sanic application.

    The result is stored on request.ctx under the configured attribute
    name (default "ip_address").

    Example:
        from sanic import Sanic
        from clientaddr import ResolverConfig
        from clientaddr.integrations.sanic import setup_client_address

        app = Sanic("MyApp")
        setup_client_address(
            app,
            ResolverConfig(check_proxy_headers=True, trusted_proxies=["10.0.0.0/8"]),
        )

    Args:
        app: Sanic application instance
        config: ResolverConfig instance
        resolver: Prebuilt resolver (takes precedence over config)
        **settings: ResolverConfig fields, used when neither is given

    Returns:
        The resolver used by the middleware
    """
    if resolver is None:
        resolver = ClientAddressResolver(config, **settings)
    attribute_name = resolver.attribute_name

    @app.middleware("request")
    async def resolve_client_address(request):
        """Resolve client address before each request"""
        client = resolver.resolve(get_peer_address(request), request.headers)
        setattr(request.ctx, attribute_name, client)

    logger.info("Client address resolution configured for Sanic app")
    return resolver
