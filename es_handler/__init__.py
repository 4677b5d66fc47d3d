"""HTTP handler for Elasticsearch: index, document, search and scan/scroll calls."""

from .alias import get_indices_from_alias
from .client import HttpTransport, create_client
from .connection_settings import ConnectionConfig, config_from_url, load_config
from .document import bulk, delete_document, get_document, insert_document
from .errors import DecodeError, SearchClientError, TransportError, ValidationError
from .index import create_index, delete_index, index_exists, update_index_settings
from .models import (
    Bulk,
    Document,
    Hit,
    InsertDocument,
    MSearchQuery,
    MSearchResult,
    Response,
    ResultHits,
    ScrollResponse,
    SearchResult,
    Shards,
)
from .scroll import ScrollConfig, ScrollCursor, open_scroll, scan_and_scroll
from .search import msearch, search, suggest

__all__ = [
    # client
    "HttpTransport",
    "create_client",
    # config
    "ConnectionConfig",
    "config_from_url",
    "load_config",
    # errors
    "SearchClientError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    # models
    "Response",
    "InsertDocument",
    "Document",
    "Bulk",
    "Shards",
    "Hit",
    "ResultHits",
    "SearchResult",
    "ScrollResponse",
    "MSearchQuery",
    "MSearchResult",
    # index
    "create_index",
    "delete_index",
    "index_exists",
    "update_index_settings",
    # document
    "insert_document",
    "get_document",
    "delete_document",
    "bulk",
    # search
    "search",
    "msearch",
    "suggest",
    # alias
    "get_indices_from_alias",
    # scroll
    "ScrollConfig",
    "ScrollCursor",
    "open_scroll",
    "scan_and_scroll",
]
