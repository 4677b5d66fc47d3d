"""Alias lookup."""

from __future__ import annotations

from .client import HttpTransport
from .models import AliasMap, decode


def get_indices_from_alias(client: HttpTransport, alias: str) -> list[str]:
    """Return the names of the indices *alias* points to."""
    raw = client.perform_request("GET", f"/*/_alias/{alias}")
    return list(decode(AliasMap, raw).root)
