"""
FastAPI dependency injection utilities for clientaddr
"""

from typing import Optional

from fastapi import Request

from ...config import DEFAULT_ATTRIBUTE_NAME
from ...resolver import ClientAddressResolver
from .utils import get_peer_address


def client_address_dependency(
    resolver: Optional[ClientAddressResolver] = None,
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME,
):
    """
    Create FastAPI dependency returning the client address.

    Reads the value stored by ClientAddressMiddleware. When a resolver is
    given, the address is resolved on the fly for requests the middleware
    did not see.

    Example:
        from fastapi import FastAPI, Depends
        from clientaddr import ClientAddressResolver, ResolverConfig
        from clientaddr.integrations.fastapi import client_address_dependency

        resolver = ClientAddressResolver(ResolverConfig(
            check_proxy_headers=True, trusted_proxies=["10.0.0.0/8"]
        ))
        client_ip = client_address_dependency(resolver)

        @app.get("/whoami")
        async def whoami(ip: Optional[str] = Depends(client_ip)):
            return {"ip": ip}

    Args:
        resolver: Optional resolver used when the middleware is not installed
        attribute_name: Attribute the middleware stores the address under

    Returns:
        FastAPI dependency function
    """
    if resolver is not None:
        attribute_name = resolver.attribute_name

    async def get_client_address(request: Request) -> Optional[str]:
        """Client address of the current request"""
        if hasattr(request.state, attribute_name):
            return getattr(request.state, attribute_name)
        if resolver is None:
            return None
        client = resolver.resolve(get_peer_address(request), request.headers)
        setattr(request.state, attribute_name, client)
        return client

    return get_client_address
