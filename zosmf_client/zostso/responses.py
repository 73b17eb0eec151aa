"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Results returned by the TSO session operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from zosmf_client.zostso.messages import ZosmfMessage, ZosmfTsoResponse


@dataclass(frozen=True)
class StartStopResponse:
    """Outcome of starting a TSO address space."""

    success: bool
    servlet_key: Optional[str]
    messages: str = ""
    failure_response: Optional[str] = None
    zosmf_response: Optional[ZosmfTsoResponse] = None

    @classmethod
    def from_page(cls, page: ZosmfTsoResponse) -> "StartStopResponse":
        return cls(
            success=page.pending == 0,
            servlet_key=page.servlet_key,
            messages="\n".join(page.output_lines),
            failure_response=page.failure_reason,
            zosmf_response=page,
        )


@dataclass(frozen=True)
class SendResponse:
    """
    Outcome of one Send (or Poll) call.

    ``zosmf_responses`` holds every page collected by this call, in arrival
    order; ``messages`` flattens their pending z/OSMF messages.
    """

    success: bool
    zosmf_responses: List[ZosmfTsoResponse] = field(default_factory=list)
    command_response: Optional[str] = None
    failure_response: Optional[str] = None

    @property
    def messages(self) -> List[ZosmfMessage]:
        return [message for page in self.zosmf_responses for message in page.msg_data]

    @property
    def attempts(self) -> int:
        return len(self.zosmf_responses)
