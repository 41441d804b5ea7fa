"""
Client Address Middleware for FastAPI
"""

from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...config import ResolverConfig
from ...logging import get_logger
from ...resolver import ClientAddressResolver
from .utils import get_peer_address

logger = get_logger(__name__)


class ClientAddressMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that resolves the client address of every request.

    The result is stored on request.state under the configured attribute
    name (default "ip_address"); None when no address could be established.

    Example:
        from fastapi import FastAPI, Request
        from clientaddr import ResolverConfig
        from clientaddr.integrations.fastapi import ClientAddressMiddleware

        app = FastAPI()
        app.add_middleware(
            ClientAddressMiddleware,
            config=ResolverConfig(
                check_proxy_headers=True,
                trusted_proxies=["10.0.0.0/8"],
            ),
        )

        @app.get("/")
        async def root(request: Request):
            return {"ip": request.state.ip_address}
    """

    def __init__(
        self,
        app,
        config: Optional[ResolverConfig] = None,
        resolver: Optional[ClientAddressResolver] = None,
        **settings,
    ):
        """
        Initialize middleware

        Args:
            config: ResolverConfig instance
            resolver: Prebuilt resolver (takes precedence over config)
            **settings: ResolverConfig fields, used when neither is given
        """
        super().__init__(app)
        if resolver is None:
            resolver = ClientAddressResolver(config, **settings)
        self.resolver = resolver
        self.attribute_name = resolver.attribute_name
        logger.info("Client address middleware configured for FastAPI app")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Resolve client address and continue"""
        client = self.resolver.resolve(get_peer_address(request), request.headers)
        setattr(request.state, self.attribute_name, client)
        return await call_next(request)
