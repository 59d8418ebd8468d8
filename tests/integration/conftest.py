"""Integration test fixtures.

Provides an in-memory fake of the remote associations API so the client,
pipeline and CLI can be exercised together without a network.
"""

import json

import httpx
import pytest


class FakeAssociationsApi:
    """Serves datasets and records submitted results per endpoint family."""

    def __init__(self, dataset: dict, answer: dict | None = None, user_key: str = "test-user-key"):
        self.dataset = dataset
        self.answer = answer
        self.user_key = user_key
        self.submissions: dict[str, list[dict]] = {"test": [], "live": []}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.params.get("userKey") != self.user_key:
            return httpx.Response(401, json={"message": "invalid userKey"})

        endpoint = request.url.path.rsplit("/", 1)[-1]

        if request.method == "GET" and endpoint in ("dataset", "test-dataset"):
            return httpx.Response(200, json=self.dataset)
        if request.method == "GET" and endpoint == "test-dataset-answer" and self.answer:
            return httpx.Response(200, json=self.answer)
        if request.method == "POST" and endpoint in ("result", "test-result"):
            mode = "test" if endpoint.startswith("test-") else "live"
            self.submissions[mode].append(json.loads(request.content))
            return httpx.Response(200)
        return httpx.Response(404, json={"message": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api(sample_dataset_data, sample_expected_data) -> FakeAssociationsApi:
    """Fake API serving the sample dataset and its expected answer."""
    return FakeAssociationsApi(sample_dataset_data, sample_expected_data)
