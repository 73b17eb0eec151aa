"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Unit tests for the z/OSMF request abstraction.
"""

import base64
import json

import pytest
import requests
from hypothesis import given
from hypothesis import strategies as st

from zosmf_client.core.connection import ZosConnectionFactory
from zosmf_client.exceptions import InvalidArgumentError, InvalidStateError, RequestFailureError
from zosmf_client.rest.request import (
    X_CSRF_ZOSMF_HEADER_KEY,
    ReplyShape,
    RequestType,
    ZosmfRequest,
    ZosmfRequestFactory,
    basic_auth_value,
)
from zosmf_client.rest.transport import MockTransport, TransportReply

URL = "https://zos.example.com:443/zosmf/restfiles/fs/u/ibmuser/file.txt"

BODYLESS_TYPES = [RequestType.GET_JSON, RequestType.GET_STREAM, RequestType.GET_TEXT, RequestType.DELETE_JSON]
BODY_TYPES = [RequestType.PUT_JSON, RequestType.PUT_STREAM, RequestType.PUT_TEXT, RequestType.POST_JSON]

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=10),
    lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=10,
)


class TestRequestConstruction:
    """Test building requests."""

    def test_factory_builds_requested_variant(self, basic_connection, mock_transport):
        """Test the factory returns a request of the requested type."""
        request = ZosmfRequestFactory.build_request(
            basic_connection, RequestType.PUT_JSON, transport=mock_transport
        )
        assert isinstance(request, ZosmfRequest)
        assert request.request_type is RequestType.PUT_JSON
        assert request.method == "PUT"
        assert request.reply_shape is ReplyShape.JSON
        assert request.transport is mock_transport

    def test_factory_rejects_null_connection(self):
        """Test a connection is required."""
        with pytest.raises(InvalidArgumentError, match="connection is null"):
            ZosmfRequestFactory.build_request(None, RequestType.GET_JSON)

    @pytest.mark.parametrize(
        "request_type,method",
        [
            (RequestType.GET_JSON, "GET"),
            (RequestType.GET_STREAM, "GET"),
            (RequestType.GET_TEXT, "GET"),
            (RequestType.PUT_JSON, "PUT"),
            (RequestType.PUT_STREAM, "PUT"),
            (RequestType.PUT_TEXT, "PUT"),
            (RequestType.POST_JSON, "POST"),
            (RequestType.DELETE_JSON, "DELETE"),
        ],
    )
    def test_verbs(self, basic_connection, request_type, method):
        """Test each variant maps to its HTTP verb."""
        assert ZosmfRequest(basic_connection, request_type, MockTransport()).method == method


class TestSetBody:
    """Test body handling per variant."""

    @pytest.mark.parametrize("request_type", BODYLESS_TYPES)
    @given(payload=json_values)
    def test_bodyless_variants_reject_any_body(self, request_type, payload):
        """Test setting any body on a bodyless variant fails with InvalidStateError."""
        connection = ZosConnectionFactory.create_basic_connection("h", "443", "u", "p")
        request = ZosmfRequest(connection, request_type, MockTransport())
        with pytest.raises(InvalidStateError, match="setting body for this request is invalid"):
            request.set_body(payload)

    @pytest.mark.parametrize("request_type", BODY_TYPES)
    def test_body_required(self, basic_connection, request_type):
        """Test body variants refuse to execute without a body."""
        transport = MockTransport()
        request = ZosmfRequest(basic_connection, request_type, transport)
        request.set_url(URL)
        with pytest.raises(InvalidStateError, match="body is null"):
            request.execute_request()
        assert transport.sent_requests == []

    def test_json_body_is_serialized(self, basic_connection):
        """Test dict bodies are sent as JSON text."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(basic_connection, RequestType.PUT_JSON, transport)
        request.set_url(URL)
        request.set_body({"request": "chmod", "mode": "rwx------"})
        request.execute_request()
        assert json.loads(transport.sent_requests[0].body) == {"request": "chmod", "mode": "rwx------"}

    def test_json_string_body_passes_through(self, basic_connection):
        """Test a pre-serialized JSON string is sent unchanged."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(basic_connection, RequestType.POST_JSON, transport)
        request.set_url(URL)
        request.set_body('{"a": 1}')
        request.execute_request()
        assert transport.sent_requests[0].body == '{"a": 1}'

    def test_stream_body_is_bytes(self, basic_connection):
        """Test text given to a stream variant is sent as bytes."""
        transport = MockTransport(replies=[TransportReply(status_code=201, reason="Created")])
        request = ZosmfRequest(basic_connection, RequestType.PUT_STREAM, transport)
        request.set_url(URL)
        request.set_body("hello")
        request.execute_request()
        assert transport.sent_requests[0].body == b"hello"


class TestValidation:
    """Test pre-execution validation."""

    @pytest.mark.parametrize("request_type", list(RequestType))
    @pytest.mark.parametrize("url", [None, ""])
    def test_unset_url_fails_before_transport(self, basic_connection, request_type, url):
        """Test executing without a url fails and never reaches the transport."""
        transport = MockTransport()
        request = ZosmfRequest(basic_connection, request_type, transport)
        request.set_url(url)
        if request_type in BODY_TYPES:
            request.set_body("{}")
        with pytest.raises(InvalidStateError, match="url is null"):
            request.execute_request()
        assert len(transport.sent_requests) == 0

    def test_single_execution(self, basic_connection):
        """Test a request cannot be executed twice."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        request.execute_request()
        with pytest.raises(InvalidStateError, match="already been executed"):
            request.execute_request()
        assert len(transport.sent_requests) == 1


class TestHeaders:
    """Test header assembly and authentication."""

    def test_classic_headers(self, basic_connection):
        """Test CLASSIC connections send a Basic Authorization header and no cookie."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(basic_connection, RequestType.PUT_JSON, transport)
        request.set_url(URL)
        request.set_body({})
        request.execute_request()

        sent = transport.sent_requests[0]
        expected = "Basic " + base64.b64encode(b"ibmuser:sys1").decode("ascii")
        assert sent.headers["Authorization"] == expected
        assert sent.headers["Content-Type"] == "application/json"
        assert sent.headers[X_CSRF_ZOSMF_HEADER_KEY] == "true"
        assert sent.cookies is None
        assert sent.cert is None

    def test_token_headers(self, token_connection):
        """Test TOKEN connections send the cookie and no Authorization header."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(token_connection, RequestType.PUT_JSON, transport)
        request.set_url(URL)
        request.set_body({})
        request.execute_request()

        sent = transport.sent_requests[0]
        assert sent.headers == {"Content-Type": "application/json", X_CSRF_ZOSMF_HEADER_KEY: "true"}
        assert sent.cookies == {"LtpaToken2": "ltpa-token-value"}

    def test_cert_headers(self, cert_connection):
        """Test CERT connections pass the certificate and no Authorization header."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
        request = ZosmfRequest(cert_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        request.execute_request()

        sent = transport.sent_requests[0]
        assert "Authorization" not in sent.headers
        assert sent.cookies is None
        assert sent.cert == ("/certs/client.pem", "/certs/client.key")

    @given(user=st.text(min_size=1, max_size=10).filter(str.strip), token=st.text(min_size=1, max_size=10).filter(str.strip))
    def test_header_and_cookie_are_exclusive(self, user, token):
        """Test no request carries both an Authorization header and a cookie."""
        classic = ZosConnectionFactory.create_basic_connection("h", "443", user, "p")
        for connection in (classic, classic.with_session_token(token)):
            transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {})])
            request = ZosmfRequest(connection, RequestType.GET_JSON, transport)
            request.set_url(URL)
            request.execute_request()
            sent = transport.sent_requests[0]
            assert ("Authorization" in sent.headers) != (sent.cookies is not None)

    @pytest.mark.parametrize(
        "request_type,content_type",
        [
            (RequestType.GET_JSON, "application/json"),
            (RequestType.GET_STREAM, "application/json"),
            (RequestType.GET_TEXT, "text/plain; charset=UTF-8"),
            (RequestType.PUT_TEXT, "text/plain; charset=UTF-8"),
            (RequestType.PUT_STREAM, "binary"),
        ],
    )
    def test_content_type_per_variant(self, basic_connection, request_type, content_type):
        """Test each payload shape declares its Content-Type."""
        request = ZosmfRequest(basic_connection, request_type, MockTransport())
        assert request.headers["Content-Type"] == content_type

    def test_stream_put_declares_binary_data(self, basic_connection):
        """Test binary uploads carry X-IBM-Data-Type."""
        request = ZosmfRequest(basic_connection, RequestType.PUT_STREAM, MockTransport())
        assert request.headers["X-IBM-Data-Type"] == "binary"

    def test_custom_headers_merge(self, basic_connection):
        """Test caller headers are added and override standard ones."""
        request = ZosmfRequest(basic_connection, RequestType.PUT_TEXT, MockTransport())
        request.set_headers({"X-IBM-Data-Type": "text;fileEncoding=IBM-1047", "Content-Type": "text/plain"})
        headers = request.headers
        assert headers["X-IBM-Data-Type"] == "text;fileEncoding=IBM-1047"
        assert headers["Content-Type"] == "text/plain"
        assert headers[X_CSRF_ZOSMF_HEADER_KEY] == "true"

    def test_basic_auth_value(self):
        """Test Basic credentials are base64 encoded."""
        assert basic_auth_value("u", "p") == "Basic dTpw"


class TestExecution:
    """Test reply normalization and failure wrapping."""

    def test_json_reply(self, basic_connection):
        """Test JSON variants parse the body."""
        transport = MockTransport(replies=[TransportReply.from_json(200, "OK", {"a": 1})])
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        response = request.execute_request()
        assert response.response_phrase == {"a": 1}
        assert response.status_code == 200
        assert response.status_text == "OK"

    def test_empty_json_reply_is_absent(self, basic_connection):
        """Test an empty body on a JSON variant gives no payload."""
        transport = MockTransport(replies=[TransportReply(status_code=204, reason="No Content")])
        request = ZosmfRequest(basic_connection, RequestType.DELETE_JSON, transport)
        request.set_url(URL)
        response = request.execute_request()
        assert response.response_phrase is None
        assert response.status_code == 204

    def test_stream_reply_is_bytes(self, basic_connection):
        """Test stream variants return raw bytes."""
        transport = MockTransport(replies=[TransportReply(status_code=200, reason="OK", content=b"\x00\xc1")])
        request = ZosmfRequest(basic_connection, RequestType.GET_STREAM, transport)
        request.set_url(URL)
        assert request.execute_request().response_phrase == b"\x00\xc1"

    def test_text_reply_is_str(self, basic_connection):
        """Test text variants return a string."""
        transport = MockTransport(replies=[TransportReply(status_code=200, reason="OK", content=b"line1\nline2")])
        request = ZosmfRequest(basic_connection, RequestType.GET_TEXT, transport)
        request.set_url(URL)
        assert request.execute_request().response_phrase == "line1\nline2"

    @pytest.mark.parametrize("status_code,reason", [(200, "OK"), (404, "Not Found"), (500, "Internal Server Error")])
    def test_status_passes_through(self, basic_connection, status_code, reason):
        """Test non-2xx statuses are returned, not raised."""
        transport = MockTransport(
            replies=[TransportReply.from_json(status_code, reason, {"rc": 4, "message": "x"})]
        )
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        response = request.execute_request()
        assert response.status_code == status_code
        assert response.status_text == reason
        assert response.response_phrase == {"rc": 4, "message": "x"}

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectionError("connection refused"),
            requests.exceptions.Timeout("read timed out"),
            requests.exceptions.SSLError("certificate verify failed"),
        ],
    )
    def test_transport_errors_are_wrapped(self, basic_connection, error):
        """Test transport exceptions surface as RequestFailureError with the original message."""
        transport = MockTransport(error=error)
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        with pytest.raises(RequestFailureError, match=str(error)) as exc_info:
            request.execute_request()
        assert exc_info.value.__cause__ is error

    def test_malformed_json_is_wrapped(self, basic_connection):
        """Test an undecodable JSON body is a RequestFailureError."""
        transport = MockTransport(replies=[TransportReply(status_code=200, reason="OK", content=b"<html>")])
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        with pytest.raises(RequestFailureError, match="malformed JSON reply"):
            request.execute_request()

    @pytest.mark.parametrize("status_code,reason", [(401, "Unauthorized"), (502, "Bad Gateway")])
    def test_non_json_error_page_keeps_status(self, basic_connection, status_code, reason):
        """Test an HTML error page on a failed call is returned with its status."""
        transport = MockTransport(replies=[
            TransportReply(status_code=status_code, reason=reason, content=b"<html>login</html>")
        ])
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        response = request.execute_request()
        assert response.status_code == status_code
        assert response.status_text == reason
        assert response.response_phrase == "<html>login</html>"
        assert response.json_phrase() is None

    def test_unknown_reply_charset(self, basic_connection):
        """Test a reply declaring an unknown charset is decoded as UTF-8."""
        transport = MockTransport(replies=[
            TransportReply(status_code=200, reason="OK", content=b'{"a": 1}', encoding="x-bogus")
        ])
        request = ZosmfRequest(basic_connection, RequestType.GET_JSON, transport)
        request.set_url(URL)
        assert request.execute_request().response_phrase == {"a": 1}
