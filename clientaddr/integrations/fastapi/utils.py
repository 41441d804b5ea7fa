"""
Utility functions for FastAPI integration
"""

from typing import Optional

from fastapi import Request


def get_peer_address(request: Request) -> Optional[str]:
    """
    Direct transport peer address of a request.

    Args:
        request: FastAPI Request object

    Returns:
        Peer host string, or None when the server did not report one
    """
    if hasattr(request, "client") and request.client:
        return request.client.host
    return None
