"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

z/OSMF REST request layer.
"""

from zosmf_client.rest.request import ReplyShape, RequestType, ZosmfRequest, ZosmfRequestFactory
from zosmf_client.rest.response import Response
from zosmf_client.rest.transport import (
    BaseTransport,
    MockTransport,
    RequestsTransport,
    TransportReply,
    TransportRequest,
)

__all__ = [
    "BaseTransport",
    "MockTransport",
    "ReplyShape",
    "RequestType",
    "RequestsTransport",
    "Response",
    "TransportReply",
    "TransportRequest",
    "ZosmfRequest",
    "ZosmfRequestFactory",
]
