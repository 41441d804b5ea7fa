"""
Utility functions for aiohttp integration
"""

from typing import Optional


def get_peer_address(request) -> Optional[str]:
    """
    Direct transport peer address of an aiohttp request.

    Reads the socket peer rather than request.remote, which aiohttp
    rewrites when the application uses its own forwarded-header helpers.

    Args:
        request: aiohttp Request object

    Returns:
        Peer host string, or None when unavailable
    """
    peername = request.transport.get_extra_info('peername') if request.transport else None
    if peername:
        if isinstance(peername, (tuple, list)):
            return peername[0]
        # Unix socket paths carry no address
        return None
    return request.remote
