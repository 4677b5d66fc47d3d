from __future__ import annotations

import json
import os
from typing import Any, Optional

import pytest

from es_handler.connection_settings import ConnectionConfig
from es_handler.errors import TransportError


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: tests that require a running Elasticsearch cluster",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.getenv("ELASTICSEARCH_RUN_INTEGRATION") == "1":
        return

    skip_integration = pytest.mark.skip(
        reason="Set ELASTICSEARCH_RUN_INTEGRATION=1 to run integration tests"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


class DummyTransport:
    """Records every request and answers from a queue of canned bodies."""

    def __init__(self, responses: Optional[list[Any]] = None):
        self.config = ConnectionConfig(timeout=5)
        self.base_url = self.config.base_url
        self.calls: list[dict[str, Any]] = []
        self.responses = list(responses or [])

    def perform_request(self, method, path, body=None, params=None, timeout=None, allow_statuses=()):
        self.calls.append(
            {
                "method": method,
                "path": path,
                "body": body,
                "params": params,
                "timeout": timeout,
                "allow_statuses": tuple(allow_statuses),
            }
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, bytes):
            return response
        return json.dumps(response).encode()

    def head(self, path, timeout=None):
        self.calls.append({"method": "HEAD", "path": path})
        return self.responses.pop(0)


class FakeScrollEngine(DummyTransport):
    """Serves *docs* through scan/scroll in pages of *page_size*.

    Every response hands out a new scroll id and only the latest one is
    accepted, like a real engine rotating its context ids.
    """

    def __init__(self, doc_count: int, page_size: int, first_page_empty: bool = False):
        super().__init__()
        self.docs = [{"_index": "orders", "_type": "all", "_id": str(i), "_score": 1.0,
                      "_source": {"oid": i}} for i in range(doc_count)]
        self.page_size = page_size
        self.first_page_empty = first_page_empty
        self.offset = 0
        self.generation = 0
        self.fail_next: Optional[Exception] = None

    def _page(self) -> dict[str, Any]:
        hits = self.docs[self.offset:self.offset + self.page_size]
        self.offset += len(hits)
        self.generation += 1
        return {
            "_scroll_id": f"scroll-{self.generation}",
            "took": self.generation,
            "timed_out": False,
            "_shards": {"total": 5, "successful": 5, "failed": 0},
            "hits": {"total": len(self.docs), "max_score": 0.0, "hits": hits},
        }

    def perform_request(self, method, path, body=None, params=None, timeout=None, allow_statuses=()):
        self.calls.append({"method": method, "path": path, "body": body, "params": params,
                           "timeout": timeout})
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error
        if path == "/_search/scroll":
            if params["scroll_id"] != f"scroll-{self.generation}":
                raise TransportError("SearchContextMissingException", status_code=404)
            return json.dumps(self._page()).encode()
        if self.first_page_empty:
            self.generation += 1
            return json.dumps({
                "_scroll_id": f"scroll-{self.generation}",
                "hits": {"total": len(self.docs), "hits": []},
            }).encode()
        return json.dumps(self._page()).encode()


@pytest.fixture
def dummy_transport():
    return DummyTransport()
