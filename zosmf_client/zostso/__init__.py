"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

TSO/E address space sessions.
"""

from zosmf_client.zostso.inputs import StartTsoParams
from zosmf_client.zostso.messages import TsoMessage, TsoPrompt, ZosmfMessage, ZosmfTsoResponse
from zosmf_client.zostso.responses import SendResponse, StartStopResponse
from zosmf_client.zostso.session import TsoClient, TsoSession

__all__ = [
    "SendResponse",
    "StartStopResponse",
    "StartTsoParams",
    "TsoClient",
    "TsoMessage",
    "TsoPrompt",
    "TsoSession",
    "ZosmfMessage",
    "ZosmfTsoResponse",
]
