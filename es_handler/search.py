"""Search operations: single search, multi-search, suggestions."""

from __future__ import annotations

from typing import Optional, Sequence

from .client import HttpTransport
from .models import MSearchQuery, MSearchResult, SearchResult, decode


def search(
    client: HttpTransport,
    index: str,
    doc_type: str,
    body: str,
    explain: bool = False,
) -> SearchResult:
    """Run a query against an index, optionally narrowed to one type."""
    path = f"/{index}/{doc_type}/_search" if doc_type else f"/{index}/_search"
    params: Optional[dict[str, str]] = {"explain": "true"} if explain else None
    raw = client.perform_request("POST", path, body=body, params=params)
    return decode(SearchResult, raw)


def build_msearch_body(queries: Sequence[MSearchQuery]) -> str:
    """Render header/body pairs as NDJSON.

    Bodies are flattened to one line and the payload ends with a newline,
    both required by the multi-search endpoint.
    """
    lines = []
    for query in queries:
        lines.append(query.header)
        lines.append(query.body.replace("\n", " "))
    return "\n".join(lines) + "\n"


def msearch(client: HttpTransport, queries: Sequence[MSearchQuery]) -> MSearchResult:
    """Execute several searches in one round trip."""
    raw = client.perform_request("POST", "/_msearch", body=build_msearch_body(queries))
    return decode(MSearchResult, raw)


def suggest(client: HttpTransport, index: str, body: str) -> bytes:
    """Run a completion suggester and return the raw response body."""
    return client.perform_request("POST", f"/{index}/_suggest", body=body)
