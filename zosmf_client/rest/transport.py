"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Transport providers used by z/OSMF requests.

A transport issues exactly one HTTP call per send() and returns the raw
reply. It does not retry, and it does not interpret status codes. Failures
surface as ``requests.exceptions.RequestException``; the request layer turns
them into RequestFailureError.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

import requests

from zosmf_client.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TransportRequest:
    """Outbound call representation."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None
    cookies: Optional[Dict[str, str]] = None
    cert: Optional[Union[str, Tuple[str, str]]] = None


@dataclass
class TransportReply:
    """Inbound raw reply representation."""
    status_code: int
    reason: Optional[str] = None
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    encoding: Optional[str] = None

    @property
    def text(self) -> str:
        """Body decoded with the reply charset; unknown charsets fall back to UTF-8."""
        try:
            return self.content.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            logger.warning(f"Unknown reply charset {self.encoding!r}, decoding as utf-8")
            return self.content.decode("utf-8", errors="replace")

    @classmethod
    def from_json(cls, status_code: int, reason: Optional[str], data: Any) -> "TransportReply":
        """Build a reply whose body is the JSON encoding of data."""
        return cls(
            status_code=status_code,
            reason=reason,
            content=json.dumps(data).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )


class BaseTransport(ABC):
    """Abstract base for all transport providers."""

    @abstractmethod
    def send(self, request: TransportRequest) -> TransportReply:
        """Send a request and return the reply."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release transport resources."""
        ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RequestsTransport(BaseTransport):
    """Default transport backed by a ``requests.Session``.

    Args:
        timeout: Request timeout in seconds, applied to every call.
        verify: Verify the server TLS certificate (or a CA bundle path).
        session: Optional pre-built session to share connection pools.
    """

    def __init__(
        self,
        timeout: float = 30,
        verify: Union[bool, str] = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()

    def send(self, request: TransportRequest) -> TransportReply:
        reply = self.session.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            data=request.body,
            cookies=request.cookies,
            cert=request.cert,
            timeout=self.timeout,
            verify=self.verify,
        )
        return TransportReply(
            status_code=reply.status_code,
            reason=reply.reason,
            content=reply.content,
            headers=dict(reply.headers),
            encoding=reply.encoding,
        )

    def close(self) -> None:
        if self.session:
            self.session.close()
            logger.debug("Closed requests transport session")


class MockTransport(BaseTransport):
    """In-memory transport for unit tests.

    Records every request it is given, so it doubles as a spy. Replies are
    taken from the ``replies`` queue first, then from ``routes`` keyed by
    ``(method, path)``; a route value may be a list consumed in order.
    Unmatched requests get a 404.

    Args:
        replies: Replies returned in order regardless of the request.
        routes: Mapping from ``(method, path)`` to a reply or list of replies.
        error: Exception raised by every send() instead of replying.

    Example::

        transport = MockTransport(routes={
            ("GET", "/zosmf/info"): TransportReply.from_json(200, "OK", {}),
        })
    """

    def __init__(
        self,
        replies: Optional[List[TransportReply]] = None,
        routes: Optional[Dict[Tuple[str, str], Union[TransportReply, List[TransportReply]]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._replies: Deque[TransportReply] = deque(replies or [])
        self._routes = {
            key: list(value) if isinstance(value, list) else value
            for key, value in (routes or {}).items()
        }
        self._error = error
        self._sent: List[TransportRequest] = []

    def send(self, request: TransportRequest) -> TransportReply:
        self._sent.append(request)
        if self._error is not None:
            raise self._error
        if self._replies:
            return self._replies.popleft()

        key = (request.method.upper(), urlsplit(request.url).path)
        route = self._routes.get(key)
        if isinstance(route, list):
            if route:
                return route.pop(0)
        elif route is not None:
            return route
        return TransportReply.from_json(404, "Not Found", {"error": "not mocked"})

    def close(self) -> None:
        self._replies.clear()
        self._routes.clear()

    @property
    def sent_requests(self) -> List[TransportRequest]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
