"""
Pytest configuration and shared fixtures for z/OSMF client tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest

from zosmf_client.core.connection import ZosConnection, ZosConnectionFactory
from zosmf_client.rest.transport import MockTransport, TransportReply


def _tso_page(
    servlet_key: Optional[str] = "ZOSMFAD-55-aaakaaac",
    messages: Optional[List[str]] = None,
    output: Optional[List[str]] = None,
    prompt: bool = False,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Build a z/OSMF TSO reply body.

    Args:
        servlet_key: Session handle; None leaves the field out.
        messages: messageText of each pending msgData entry.
        output: DATA of each "TSO MESSAGE" entry.
        prompt: Append a "TSO PROMPT" entry.
        **extra: Additional top-level fields.

    Returns:
        Reply body as a dictionary.
    """
    page: Dict[str, Any] = {"ver": "0100", "reused": False, "timeout": False}
    if servlet_key is not None:
        page["servletKey"] = servlet_key
    if messages:
        page["msgData"] = [
            {"messageText": text, "messageId": f"IZUG{i:04d}I"} for i, text in enumerate(messages)
        ]
    tso_data: List[Dict[str, Any]] = [
        {"TSO MESSAGE": {"VERSION": "0100", "DATA": line}} for line in (output or [])
    ]
    if prompt:
        tso_data.append({"TSO PROMPT": {"VERSION": "0100", "HIDDEN": "FALSE"}})
    if tso_data:
        page["tsoData"] = tso_data
    page.update(extra)
    return page


def _json_reply(data: Any, status_code: int = 200, reason: str = "OK") -> TransportReply:
    """Shorthand for a JSON transport reply."""
    return TransportReply.from_json(status_code, reason, data)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def basic_connection() -> ZosConnection:
    """CLASSIC connection with user and password."""
    return ZosConnectionFactory.create_basic_connection("zos.example.com", "443", "ibmuser", "sys1")


@pytest.fixture
def token_connection() -> ZosConnection:
    """TOKEN connection authenticating with an LtpaToken2 cookie."""
    return ZosConnectionFactory.create_token_connection("zos.example.com", "443", "ltpa-token-value")


@pytest.fixture
def cert_connection() -> ZosConnection:
    """CERT connection presenting a client certificate."""
    return ZosConnectionFactory.create_cert_connection(
        "zos.example.com", "443", "/certs/client.pem", "/certs/client.key"
    )


@pytest.fixture
def make_tso_page():
    """Factory for z/OSMF TSO reply bodies."""
    return _tso_page


@pytest.fixture
def make_json_reply():
    """Factory for JSON transport replies."""
    return _json_reply


@pytest.fixture
def mock_transport() -> MockTransport:
    """Spy transport with no canned replies."""
    return MockTransport()


# Hypothesis settings for property-based tests
from hypothesis import settings, Verbosity

settings.register_profile("zosmf", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("zosmf-ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("zosmf-dev", max_examples=10, verbosity=Verbosity.verbose)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "zosmf"))
