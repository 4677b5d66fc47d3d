"""HTTP transport and client factory for Elasticsearch connections."""

from __future__ import annotations

import logging
import ssl
from typing import Any, Collection, Optional, Union

import httpx

from .connection_settings import ConnectionConfig, load_config
from .errors import TransportError

logger = logging.getLogger(__name__)

# 200 OK and 201 Created; everything else is a failure unless a call opts in.
SUCCESS_STATUSES = frozenset({200, 201})

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HttpTransport:
    """Send one request, return the raw body, fail on a non-success status.

    The transport is stateless per call and may be shared by any number of
    independent call sequences. Timeouts are applied per request.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url
        if http_client is None:
            kwargs: dict[str, Any] = {
                "base_url": config.base_url,
                "timeout": config.timeout,
                "verify": config.verify_certs,
            }
            if config.ca_certs:
                kwargs["verify"] = ssl.create_default_context(cafile=config.ca_certs)
            if config.http_auth:
                kwargs["auth"] = config.http_auth
            http_client = httpx.Client(**kwargs)
        self._http = http_client

    def perform_request(
        self,
        method: str,
        path: str,
        body: Union[str, bytes, None] = None,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
        allow_statuses: Collection[int] = (),
    ) -> bytes:
        """Issue *method* on *path* and return the response body.

        Args:
            method: HTTP verb.
            path: Path relative to the configured base URL.
            body: Optional payload, sent as-is.
            params: Query string parameters.
            timeout: Per-request timeout in seconds; falls back to the
                configured default.
            allow_statuses: Extra statuses treated as success for this call.

        Raises:
            TransportError: on connection failure, timeout, or any status
                outside 200/201 and *allow_statuses*. The message is the raw
                response body when the engine sent one.
        """
        headers = {}
        if method in ("POST", "PUT"):
            headers["Content-Type"] = _FORM_CONTENT_TYPE
        if isinstance(body, str):
            body = body.encode("utf-8")

        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = self._http.request(
                method,
                path,
                content=body,
                params=params,
                headers=headers,
                timeout=self.config.timeout if timeout is None else timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code not in SUCCESS_STATUSES and resp.status_code not in allow_statuses:
            logger.debug("%s %s -> HTTP %d", method, path, resp.status_code)
            raise TransportError(resp.text, status_code=resp.status_code, body=resp.text)
        return resp.content

    def head(self, path: str, timeout: Optional[float] = None) -> int:
        """Issue a HEAD request and return the status code without judging it."""
        try:
            resp = self._http.head(
                path,
                timeout=self.config.timeout if timeout is None else timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"HEAD {path} failed: {exc}") from exc
        return resp.status_code

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def create_client(
    config: Optional[ConnectionConfig] = None,
    **overrides,
) -> HttpTransport:
    """Create and return an HTTP transport bound to one cluster.

    Args:
        config: An explicit :class:`ConnectionConfig`.  When ``None``,
            one is built via :func:`load_config` (env vars + *overrides*).
        **overrides: Passed to :func:`load_config` when *config* is ``None``.

    Returns:
        A configured :class:`HttpTransport`.
    """
    if config is None:
        config = load_config(**overrides)
    return HttpTransport(config)
