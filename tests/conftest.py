"""
Shared fixtures for all tests
"""
import httpx
import pytest

from tests.helpers import MockUpstream, make_settings, relay_client


@pytest.fixture
def settings():
    """Fully configured settings, isolated from the environment"""
    return make_settings()


@pytest.fixture
def upstream():
    """Recorder for outbound calls; register canned responses with ``add``"""
    return MockUpstream()


@pytest.fixture
def http_client(upstream):
    """Outbound client wired to the upstream recorder"""
    return httpx.AsyncClient(transport=upstream.transport)


@pytest.fixture
def client(upstream):
    """Relay TestClient with every provider configured"""
    with relay_client(upstream) as test_client:
        yield test_client
