"""
aiohttp Integration for clientaddr

Example:
    from aiohttp import web
    from clientaddr import ResolverConfig
    from clientaddr.integrations.aiohttp import create_client_address_middleware

    app = web.Application()
    app.middlewares.append(create_client_address_middleware(
        ResolverConfig(check_proxy_headers=True, trusted_proxies=["10.0.0.0/8"])
    ))

    async def whoami(request):
        return web.json_response({"ip": request["ip_address"]})

    app.router.add_get("/whoami", whoami)
"""

from .middleware import create_client_address_middleware
from .utils import get_peer_address

__all__ = [
    # Middleware
    "create_client_address_middleware",
    # Utilities
    "get_peer_address",
]
