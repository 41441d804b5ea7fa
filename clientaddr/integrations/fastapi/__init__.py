"""
FastAPI / Starlette Integration for clientaddr

Available Middleware:
- ClientAddressMiddleware: Store the resolved client address on request.state

Available Dependencies:
- client_address_dependency: FastAPI dependency returning the client address

Utilities:
- get_peer_address: Direct transport peer of a request

Example:
    from fastapi import FastAPI
    from clientaddr import ResolverConfig
    from clientaddr.integrations.fastapi import ClientAddressMiddleware

    app = FastAPI()
    app.add_middleware(
        ClientAddressMiddleware,
        config=ResolverConfig(check_proxy_headers=True, trusted_proxies=[]),
    )
"""

from .middleware import ClientAddressMiddleware
from .dependencies import client_address_dependency
from .utils import get_peer_address

__all__ = [
    # Middleware
    "ClientAddressMiddleware",
    # Dependencies
    "client_address_dependency",
    # Utilities
    "get_peer_address",
]
