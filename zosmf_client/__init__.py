"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

zOSMF Client - REST request layer and TSO session protocol for z/OSMF

Drives z/OS services through the z/OSMF REST API: authenticated request
variants with normalized responses, and interactive TSO address space
sessions (start, send, poll, stop).
"""

from zosmf_client._version import __version__
from zosmf_client.core.connection import AuthType, ZosConnection, ZosConnectionFactory
from zosmf_client.rest.request import RequestType, ZosmfRequest, ZosmfRequestFactory
from zosmf_client.rest.response import Response
from zosmf_client.zostso.session import TsoClient, TsoSession

__all__ = [
    "__version__",
    "AuthType",
    "Response",
    "RequestType",
    "TsoClient",
    "TsoSession",
    "ZosConnection",
    "ZosConnectionFactory",
    "ZosmfRequest",
    "ZosmfRequestFactory",
]
