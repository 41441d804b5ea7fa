"""
Framework Integrations for clientaddr

Adapters that feed the direct peer address and request headers to a
ClientAddressResolver and store the result on the request.

Available integrations:
- FastAPI / Starlette (clientaddr.integrations.fastapi)
- Sanic (clientaddr.integrations.sanic)
- aiohttp (clientaddr.integrations.aiohttp)
"""

__all__ = []
