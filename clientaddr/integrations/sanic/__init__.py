"""
Sanic Integration for clientaddr

Example:
    from sanic import Sanic, response
    from clientaddr import ResolverConfig
    from clientaddr.integrations.sanic import setup_client_address

    app = Sanic("MyApp")
    setup_client_address(app, ResolverConfig(check_proxy_headers=True, trusted_proxies=[]))

    @app.get("/whoami")
    async def whoami(request):
        return response.json({"ip": request.ctx.ip_address})
"""

from .middleware import setup_client_address
from .utils import get_peer_address

__all__ = [
    # Setup
    "setup_client_address",
    # Utilities
    "get_peer_address",
]
