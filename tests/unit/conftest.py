"""Unit test fixtures (mocks and stubs).

Provides fake HTTP transports for testing the API client without a network.
"""

import httpx
import pytest


@pytest.fixture
def recording_transport():
    """Factory fixture building an httpx.MockTransport that replays responses.

    Each call to the transport pops the next item from ``responses``. Items
    are httpx.Response objects or exceptions to raise. Every request is
    appended to the returned list.

    Usage:
        def test_something(recording_transport):
            transport, requests = recording_transport([httpx.Response(200, json={})])
    """
    def _create(responses):
        queue = list(responses)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            item = queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        return httpx.MockTransport(handler), requests

    return _create
