"""Scan and scroll retrieval of large result sets.

A scroll keeps a search context open on the server so a large match set can
be pulled page by page without deep pagination. Usage::

    cursor = open_scroll(client, "orders", "all", timedelta(minutes=1), body)
    handle(cursor.hits)          # may be empty in scan mode
    while cursor.advance():
        handle(cursor.hits)

or, lazily::

    for page in scan_and_scroll(client, "orders", "all", 60, body):
        handle(page)

There is no close call. A context that is no longer advanced expires on the
server once its keep-alive window lapses. Advancing an expired context fails
with a plain :class:`TransportError`.

A cursor is not safe to advance from several threads at once; open one
cursor per consumer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterator, Optional, Union

from .client import HttpTransport
from .errors import DecodeError, ValidationError
from .models import Hit, ScrollResponse, Shards, decode

logger = logging.getLogger(__name__)

ExpireTime = Union[timedelta, int, float]

SCROLL_PATH = "/_search/scroll"


def format_expire(expire: ExpireTime) -> str:
    """Render a keep-alive window as whole seconds, e.g. ``"60s"``.

    A positive sub-second window is rounded up to ``"1s"``.
    """
    if isinstance(expire, bool) or not isinstance(expire, (timedelta, int, float)):
        raise ValidationError(f"expire must be a timedelta or seconds, got {expire!r}")
    seconds = expire.total_seconds() if isinstance(expire, timedelta) else expire
    if isinstance(seconds, float) and not math.isfinite(seconds):
        raise ValidationError(f"expire must be finite, got {expire!r}")
    if not seconds > 0:
        raise ValidationError(f"expire must be greater than zero, got {expire!r}")
    return f"{max(1, int(seconds))}s"


def _validate(index: str, doc_type: str, expire: ExpireTime) -> str:
    if not index:
        raise ValidationError("index must not be empty")
    if not doc_type:
        raise ValidationError("doc_type must not be empty")
    return format_expire(expire)


@dataclass(frozen=True)
class ScrollConfig:
    """Everything fixed at open time and reused on every advance."""

    base_url: str  # informational; requests go through the cursor's client
    index: str
    doc_type: str
    expire: str
    timeout: float
    body: str = ""


def _checked(raw: bytes) -> ScrollResponse:
    response = decode(ScrollResponse, raw)
    if not response.scroll_id:
        raise DecodeError("Scroll response carries no _scroll_id", body=raw)
    return response


class ScrollCursor:
    """Iteration state of one server-side scroll context.

    ``scroll_id`` may change on every advance; the cursor always sends the
    most recent one. ``total`` is the match count reported at open time and
    is informational only.
    """

    def __init__(
        self,
        client: HttpTransport,
        config: ScrollConfig,
        response: ScrollResponse,
    ) -> None:
        self._client = client
        self.config = config
        self.total = response.hits.total
        self.advances = 0
        self._apply(response)

    def _apply(self, response: ScrollResponse) -> None:
        self.scroll_id: str = response.scroll_id
        self.hits: list[Hit] = list(response.hits.hits)
        self.took: int = response.took
        self.timed_out: bool = response.timed_out
        self.shards: Shards = response.shards

    @property
    def exhausted(self) -> bool:
        """True when the most recent advance returned an empty page."""
        return self.advances > 0 and not self.hits

    def advance(self) -> list[Hit]:
        """Fetch the next page and return it; an empty list means done.

        The cursor is updated only after the whole page decoded. On any
        error every field keeps its previous value and the scroll should be
        treated as dead.

        Raises:
            TransportError: request failed, including an expired context.
            DecodeError: the body is not a scroll response.
        """
        raw = self._client.perform_request(
            "GET",
            SCROLL_PATH,
            params={"scroll": self.config.expire, "scroll_id": self.scroll_id},
            timeout=self.config.timeout,
        )
        response = _checked(raw)
        self._apply(response)
        self.advances += 1
        if not self.hits:
            logger.info(
                "Scroll on %s/%s exhausted after %d advances",
                self.config.index,
                self.config.doc_type,
                self.advances,
            )
        return self.hits

    def __repr__(self) -> str:
        return (
            f"ScrollCursor(index={self.config.index!r}, doc_type={self.config.doc_type!r}, "
            f"page={len(self.hits)}, total={self.total}, advances={self.advances})"
        )


def open_scroll(
    client: HttpTransport,
    index: str,
    doc_type: str,
    expire: ExpireTime,
    body: str = "",
    timeout: Optional[float] = None,
) -> ScrollCursor:
    """Start a scan-mode search and return a cursor over its results.

    Args:
        client: Transport bound to the cluster.
        index: Index to scan.
        doc_type: Document type to scan.
        expire: Keep-alive window, renewed by every advance.
        body: Query document sent as-is. Its ``size`` sets the page size.
        timeout: Per-request timeout for this cursor; defaults to the
            client's configured timeout.

    Raises:
        ValidationError: empty *index* / *doc_type* or non-positive
            *expire*. Nothing is sent.
        TransportError: the request failed.
        DecodeError: the body is not a scroll response.
    """
    expire_str = _validate(index, doc_type, expire)
    config = ScrollConfig(
        base_url=client.base_url,
        index=index,
        doc_type=doc_type,
        expire=expire_str,
        timeout=client.config.timeout if timeout is None else timeout,
        body=body,
    )
    raw = client.perform_request(
        "POST",
        f"/{index}/{doc_type}/_search",
        body=body,
        params={"search_type": "scan", "scroll": expire_str},
        timeout=config.timeout,
    )
    response = _checked(raw)
    logger.info(
        "Opened scroll on %s/%s (expire=%s): %d matching documents",
        index,
        doc_type,
        expire_str,
        response.hits.total,
    )
    return ScrollCursor(client, config, response)


def scan_and_scroll(
    client: HttpTransport,
    index: str,
    doc_type: str,
    expire: ExpireTime,
    body: str = "",
    timeout: Optional[float] = None,
    max_pages: Optional[int] = None,
) -> Iterator[list[Hit]]:
    """Lazily yield every non-empty page of a scan.

    Arguments are validated immediately; nothing is sent until the first
    page is requested. The open page is yielded only when it carries hits
    (scan mode usually returns none). Iteration stops at the first empty
    page, or once *max_pages* pages were yielded (a non-empty open page
    counts as one). The sequence cannot be restarted; call again for a fresh
    scroll.
    """
    _validate(index, doc_type, expire)
    if max_pages is not None and max_pages < 0:
        raise ValidationError(f"max_pages must not be negative, got {max_pages!r}")
    return _iter_pages(client, index, doc_type, expire, body, timeout, max_pages)


def _iter_pages(
    client: HttpTransport,
    index: str,
    doc_type: str,
    expire: ExpireTime,
    body: str,
    timeout: Optional[float],
    max_pages: Optional[int],
) -> Iterator[list[Hit]]:
    if max_pages == 0:
        return
    cursor = open_scroll(client, index, doc_type, expire, body, timeout=timeout)
    yielded = 0
    if cursor.hits:
        yield cursor.hits
        yielded += 1
    while max_pages is None or yielded < max_pages:
        page = cursor.advance()
        if not page:
            return
        yield page
        yielded += 1
