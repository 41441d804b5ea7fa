"""
Pytest configuration and fixtures for clientaddr tests
"""
import pytest

from clientaddr import ClientAddressResolver, ResolverConfig
from clientaddr.logging import disable_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore silent logging around each test"""
    disable_logging()
    yield
    disable_logging()


@pytest.fixture
def make_resolver():
    """Build a resolver from ResolverConfig keyword settings"""
    def _make(**settings):
        return ClientAddressResolver(ResolverConfig(**settings))
    return _make
