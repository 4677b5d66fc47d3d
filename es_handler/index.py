"""Index management operations."""

from __future__ import annotations

from .client import HttpTransport
from .models import Response, decode


def index_exists(client: HttpTransport, name: str) -> bool:
    """Check whether an index exists."""
    return client.head(f"/{name}") == 200


def create_index(client: HttpTransport, name: str, mapping: str = "") -> Response:
    """Create an index; *mapping* is the raw settings/mappings document."""
    raw = client.perform_request("POST", f"/{name}", body=mapping or None)
    return decode(Response, raw)


def delete_index(client: HttpTransport, name: str) -> Response:
    """Delete an index."""
    raw = client.perform_request("DELETE", f"/{name}")
    return decode(Response, raw)


def update_index_settings(client: HttpTransport, name: str, settings: str) -> Response:
    """Update dynamic settings on an existing index."""
    raw = client.perform_request("PUT", f"/{name}/_settings", body=settings)
    return decode(Response, raw)
