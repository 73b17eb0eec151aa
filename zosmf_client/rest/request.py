"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Request abstraction for the z/OSMF REST API.

One ZosmfRequest class covers every HTTP verb and payload shape. The shape
specific behaviour (verb, Content-Type, body policy, how the reply body is
parsed) lives in a variant table keyed by RequestType.

Lifecycle of a request: create, configure (url, body, headers), execute
once, discard. Authentication follows the connection mode:

- CLASSIC: ``Authorization: Basic`` header built from user and password
- TOKEN: no Authorization header, the session cookie goes on the call
- CERT: no Authorization header, the client certificate goes on the call
"""

from __future__ import annotations

import base64
import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import requests

from zosmf_client.core.connection import AuthType, ZosConnection
from zosmf_client.core.validation import check_not_null
from zosmf_client.exceptions import InvalidStateError, RequestFailureError
from zosmf_client.logging_config import get_logger, log_zosmf_request, log_zosmf_response
from zosmf_client.rest.response import Response
from zosmf_client.rest.transport import BaseTransport, RequestsTransport, TransportReply, TransportRequest

logger = get_logger(__name__)

X_CSRF_ZOSMF_HEADER_KEY = "X-CSRF-ZOSMF-HEADER"
X_CSRF_ZOSMF_HEADER_VALUE = "true"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain; charset=UTF-8"
CONTENT_TYPE_BINARY = "binary"


class ReplyShape(str, Enum):
    """How the reply body is parsed into Response.response_phrase."""

    JSON = "json"
    BYTES = "bytes"
    TEXT = "text"


class RequestType(str, Enum):
    """Supported (verb, payload shape) combinations."""

    GET_JSON = "get_json"
    GET_STREAM = "get_stream"
    GET_TEXT = "get_text"
    PUT_JSON = "put_json"
    PUT_STREAM = "put_stream"
    PUT_TEXT = "put_text"
    POST_JSON = "post_json"
    DELETE_JSON = "delete_json"


@dataclass(frozen=True)
class _Variant:
    method: str
    shape: ReplyShape
    content_type: str
    accepts_body: bool
    extra_headers: Dict[str, str] = field(default_factory=dict)


_VARIANTS: Dict[RequestType, _Variant] = {
    RequestType.GET_JSON: _Variant("GET", ReplyShape.JSON, CONTENT_TYPE_JSON, accepts_body=False),
    RequestType.GET_STREAM: _Variant("GET", ReplyShape.BYTES, CONTENT_TYPE_JSON, accepts_body=False),
    RequestType.GET_TEXT: _Variant("GET", ReplyShape.TEXT, CONTENT_TYPE_TEXT, accepts_body=False),
    RequestType.PUT_JSON: _Variant("PUT", ReplyShape.JSON, CONTENT_TYPE_JSON, accepts_body=True),
    RequestType.PUT_STREAM: _Variant(
        "PUT", ReplyShape.TEXT, CONTENT_TYPE_BINARY, accepts_body=True,
        extra_headers={"X-IBM-Data-Type": "binary"},
    ),
    RequestType.PUT_TEXT: _Variant("PUT", ReplyShape.TEXT, CONTENT_TYPE_TEXT, accepts_body=True),
    RequestType.POST_JSON: _Variant("POST", ReplyShape.JSON, CONTENT_TYPE_JSON, accepts_body=True),
    RequestType.DELETE_JSON: _Variant("DELETE", ReplyShape.JSON, CONTENT_TYPE_JSON, accepts_body=False),
}


def basic_auth_value(user: str, password: str) -> str:
    """Encode user and password for a Basic Authorization header."""
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class ZosmfRequest:
    """
    One authenticated call to z/OSMF.

    Args:
        connection: Target system and credentials
        request_type: Verb and payload shape of this request
        transport: Transport provider; defaults to a RequestsTransport

    Example:
        >>> request = ZosmfRequest(connection, RequestType.PUT_JSON)
        >>> request.set_url(connection.base_url + "/zosmf/restfiles/fs/u/ibmuser/a.txt")
        >>> request.set_body({"request": "chmod", "mode": "rwx------"})
        >>> response = request.execute_request()
    """

    def __init__(
        self,
        connection: ZosConnection,
        request_type: RequestType,
        transport: Optional[BaseTransport] = None,
    ) -> None:
        check_not_null(connection, "connection")
        check_not_null(request_type, "request_type")
        self.connection = connection
        self.request_type = RequestType(request_type)
        self.transport = transport if transport is not None else RequestsTransport()
        self.url: Optional[str] = None
        self.body: Any = None
        self._variant = _VARIANTS[self.request_type]
        self._custom_headers: Dict[str, str] = {}
        self._executed = False

    @property
    def method(self) -> str:
        return self._variant.method

    @property
    def reply_shape(self) -> ReplyShape:
        return self._variant.shape

    @property
    def headers(self) -> Dict[str, str]:
        """Standard headers for this variant and connection, overlaid with caller headers."""
        headers = self._standard_headers()
        headers.update(self._custom_headers)
        return headers

    def _standard_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": self._variant.content_type,
            X_CSRF_ZOSMF_HEADER_KEY: X_CSRF_ZOSMF_HEADER_VALUE,
        }
        headers.update(self._variant.extra_headers)
        if self.connection.auth_type is AuthType.CLASSIC:
            headers["Authorization"] = basic_auth_value(
                self.connection.user, self.connection.password
            )
        return headers

    def set_url(self, url: Optional[str]) -> None:
        self.url = url

    def set_body(self, body: Any) -> None:
        """
        Set the payload for this request.

        Raises:
            InvalidStateError: If this variant does not carry a body
        """
        if not self._variant.accepts_body:
            raise InvalidStateError("setting body for this request is invalid")
        self.body = body

    def set_headers(self, headers: Mapping[str, str]) -> None:
        """Merge additional headers; they take precedence over the standard ones."""
        check_not_null(headers, "headers")
        self._custom_headers.update(headers)

    def validate(self) -> None:
        """
        Check the request is ready to execute.

        Raises:
            InvalidStateError: If url is unset, a required body is unset, or the
                request was already executed
        """
        if self._executed:
            raise InvalidStateError("request has already been executed")
        if not self.url:
            raise InvalidStateError("url is null")
        if self._variant.accepts_body and self.body is None:
            raise InvalidStateError("body is null")

    def execute_request(self) -> Response:
        """
        Perform the HTTP call.

        Returns:
            Response carrying status code, status text and parsed payload;
            non-2xx statuses are returned, not raised

        Raises:
            InvalidStateError: If validate() fails; no call is attempted
            RequestFailureError: If the transport call fails or the reply body
                cannot be parsed
        """
        self.validate()
        self._executed = True

        outbound = TransportRequest(
            method=self.method,
            url=self.url,
            headers=self.headers,
            body=self._encode_body(),
            cookies=self._cookies(),
            cert=self.connection.cert,
        )
        log_zosmf_request(
            logger, outbound.method, outbound.url, outbound.headers,
            self.connection.auth_type.value,
        )

        start = time.monotonic()
        try:
            reply = self.transport.send(outbound)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {self.method} {self.url}: {e}")
            raise RequestFailureError(str(e)) from e

        log_zosmf_response(
            logger, outbound.method, outbound.url, reply.status_code,
            round((time.monotonic() - start) * 1000, 2),
        )
        return self._build_response(reply)

    def _cookies(self) -> Optional[Dict[str, str]]:
        cookie = self.connection.cookie
        if cookie is None:
            return None
        name, value = cookie
        return {name: value}

    def _encode_body(self) -> Optional[Union[str, bytes]]:
        body = self.body
        if body is None:
            return None
        if self._variant.content_type == CONTENT_TYPE_JSON and not isinstance(body, (str, bytes)):
            return json.dumps(body)
        if self._variant.content_type == CONTENT_TYPE_BINARY and isinstance(body, str):
            return body.encode("utf-8")
        if isinstance(body, (str, bytes)):
            return body
        return str(body)

    def _build_response(self, reply: TransportReply) -> Response:
        shape = self._variant.shape
        if shape is ReplyShape.BYTES:
            phrase: Any = reply.content
        elif shape is ReplyShape.TEXT:
            phrase = reply.text
        else:
            text = reply.text
            if not text.strip():
                phrase = None
            else:
                try:
                    phrase = json.loads(text)
                except ValueError as e:
                    if not 200 <= reply.status_code < 300:
                        # Error pages from gateways and login filters are often HTML
                        logger.warning(
                            f"Non-JSON reply with status {reply.status_code}: {self.method} {self.url}"
                        )
                        phrase = text
                    else:
                        logger.error(f"Malformed JSON reply: {self.method} {self.url}: {e}")
                        raise RequestFailureError(f"malformed JSON reply: {e}") from e
        return Response(
            response_phrase=phrase,
            status_code=reply.status_code,
            status_text=reply.reason,
        )


class ZosmfRequestFactory:
    """Builds ZosmfRequest instances for a connection."""

    @staticmethod
    def build_request(
        connection: ZosConnection,
        request_type: RequestType,
        transport: Optional[BaseTransport] = None,
    ) -> ZosmfRequest:
        check_not_null(connection, "connection")
        check_not_null(request_type, "request_type")
        return ZosmfRequest(connection, request_type, transport=transport)
