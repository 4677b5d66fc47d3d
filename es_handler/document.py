"""Document CRUD and bulk operations."""

from __future__ import annotations

from typing import Union

from .client import HttpTransport
from .models import Bulk, Document, InsertDocument, decode

# A missing document still comes back with a decodable {"found": false} body.
_NOT_FOUND = (404,)


def insert_document(
    client: HttpTransport,
    index: str,
    doc_type: str,
    doc_id: str,
    data: Union[str, bytes],
) -> InsertDocument:
    """Index (insert or replace) a single typed document."""
    raw = client.perform_request("POST", f"/{index}/{doc_type}/{doc_id}", body=data)
    return decode(InsertDocument, raw)


def get_document(client: HttpTransport, index: str, doc_type: str, doc_id: str) -> Document:
    """Retrieve a document by ID. Check ``found`` for a missing document."""
    raw = client.perform_request(
        "GET", f"/{index}/{doc_type}/{doc_id}", allow_statuses=_NOT_FOUND
    )
    return decode(Document, raw)


def delete_document(client: HttpTransport, index: str, doc_type: str, doc_id: str) -> Document:
    """Delete a document by ID."""
    raw = client.perform_request(
        "DELETE", f"/{index}/{doc_type}/{doc_id}", allow_statuses=_NOT_FOUND
    )
    return decode(Document, raw)


def bulk(client: HttpTransport, data: Union[str, bytes]) -> Bulk:
    """Send a pre-built NDJSON bulk body.

    Item-level failures are not raised; inspect ``Bulk.errors`` and
    ``Bulk.items`` on the result.
    """
    raw = client.perform_request("POST", "/_bulk", body=data)
    return decode(Bulk, raw)
