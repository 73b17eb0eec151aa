"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Parsed form of one z/OSMF TSO reply page.

A page looks like::

    {
        "servletKey": "IBMUSER-71-aabcaaaf",
        "queueID": "4",
        "ver": "0100",
        "reused": false,
        "timeout": false,
        "msgData": [{"messageText": "...", "messageId": "IZUG1126E"}],
        "tsoData": [
            {"TSO MESSAGE": {"VERSION": "0100", "DATA": "READY"}},
            {"TSO PROMPT": {"VERSION": "0100", "HIDDEN": "FALSE"}}
        ]
    }

``msgData`` entries are pending z/OSMF messages: while a page carries any,
the command has not drained yet. ``tsoData`` holds the command output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from zosmf_client.core.validation import check_not_null
from zosmf_client.exceptions import ProtocolError
from zosmf_client.zostso import constants


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() == "TRUE"
    return bool(value)


@dataclass(frozen=True)
class ZosmfMessage:
    """One z/OSMF message from a reply's msgData list."""

    message_text: Optional[str] = None
    message_id: Optional[str] = None
    stack_trace: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "ZosmfMessage":
        if not isinstance(data, dict):
            return cls(message_text=_opt_str(data))
        return cls(
            message_text=_opt_str(data.get(constants.MESSAGE_TEXT)),
            message_id=_opt_str(data.get(constants.MESSAGE_ID)),
            stack_trace=_opt_str(data.get(constants.STACK_TRACE)),
        )


@dataclass(frozen=True)
class TsoMessage:
    """A "TSO MESSAGE" output line."""

    version: Optional[str] = None
    data: Optional[str] = None


@dataclass(frozen=True)
class TsoPrompt:
    """A "TSO PROMPT" entry; the address space is waiting for input."""

    version: Optional[str] = None
    hidden: bool = False


TsoData = Union[TsoMessage, TsoPrompt]


def _entry_body(entry: Dict[str, Any], key: str) -> Dict[str, Any]:
    body = entry[key] or {}
    if not isinstance(body, dict):
        raise ProtocolError(f"\"{key}\" entry is not a JSON object")
    return body


def _parse_tso_data(entries: Any) -> List[TsoData]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ProtocolError(f"{constants.TSO_DATA} is not a JSON array")
    parsed: List[TsoData] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if constants.TSO_MESSAGE in entry:
            body = _entry_body(entry, constants.TSO_MESSAGE)
            parsed.append(TsoMessage(
                version=_opt_str(body.get("VERSION")),
                data=_opt_str(body.get("DATA")),
            ))
        elif constants.TSO_PROMPT in entry:
            body = _entry_body(entry, constants.TSO_PROMPT)
            parsed.append(TsoPrompt(
                version=_opt_str(body.get("VERSION")),
                hidden=_to_bool(body.get("HIDDEN", False)),
            ))
    return parsed


@dataclass(frozen=True)
class ZosmfTsoResponse:
    """One TSO reply page."""

    ver: Optional[str] = None
    servlet_key: Optional[str] = None
    queue_id: Optional[str] = None
    reused: bool = False
    timeout: bool = False
    msg_data: List[ZosmfMessage] = field(default_factory=list)
    tso_data: List[TsoData] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "ZosmfTsoResponse":
        """
        Parse a reply body.

        Raises:
            InvalidArgumentError: If data is None
            ProtocolError: If data is not a JSON object, or msgData or tsoData
                entries do not have the z/OSMF shape
        """
        check_not_null(data, "data")
        if not isinstance(data, dict):
            raise ProtocolError("TSO reply is not a JSON object")

        msg_data = data.get(constants.MSG_DATA) or []
        if isinstance(msg_data, dict):
            msg_data = [msg_data]
        if not isinstance(msg_data, list):
            raise ProtocolError(f"{constants.MSG_DATA} is not a JSON array")

        return cls(
            ver=_opt_str(data.get(constants.VERSION_KEY)),
            servlet_key=_opt_str(data.get(constants.SERVLET_KEY)),
            queue_id=_opt_str(data.get(constants.QUEUE_ID)),
            reused=_to_bool(data.get(constants.REUSED, False)),
            timeout=_to_bool(data.get(constants.TIMEOUT, False)),
            msg_data=[ZosmfMessage.from_json(item) for item in msg_data],
            tso_data=_parse_tso_data(data.get(constants.TSO_DATA)),
        )

    @property
    def pending(self) -> int:
        """Number of pending z/OSMF messages; zero means the output has drained."""
        return len(self.msg_data)

    @property
    def has_prompt(self) -> bool:
        return any(isinstance(item, TsoPrompt) for item in self.tso_data)

    @property
    def output_lines(self) -> List[str]:
        return [
            item.data for item in self.tso_data
            if isinstance(item, TsoMessage) and item.data is not None
        ]

    @property
    def failure_reason(self) -> Optional[str]:
        """Text of the first pending message, None when nothing is pending."""
        if not self.msg_data:
            return None
        return self.msg_data[0].message_text or constants.ZOSMF_UNKNOWN_ERROR
