"""
Utility functions for Sanic integration
"""

from typing import Optional


def get_peer_address(request) -> Optional[str]:
    """
    Direct transport peer address of a Sanic request.

    request.ip is the socket peer; request.remote_addr is already derived
    from proxy headers by Sanic and is deliberately not used.

    Args:
        request: Sanic Request object

    Returns:
        Peer host string, or None when unavailable
    """
    return request.ip or None
