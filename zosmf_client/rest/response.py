"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Normalized result of a z/OSMF request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

ResponsePhrase = Union[dict, list, bytes, str]


@dataclass(frozen=True)
class Response:
    """
    Status and parsed payload of one completed request.

    Every field may be None, meaning "not provided". An empty payload
    (``{}``, ``b""``, ``""``) is kept as-is so it can be told apart from a
    missing one. Non-2xx status codes are passed through, not raised.
    """

    response_phrase: Optional[ResponsePhrase] = None
    status_code: Optional[int] = None
    status_text: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True for a 2xx status code."""
        return self.status_code is not None and 200 <= self.status_code < 300

    def json_phrase(self) -> Optional[Any]:
        """Return the payload when it is a parsed JSON tree, else None."""
        if isinstance(self.response_phrase, (dict, list)):
            return self.response_phrase
        return None
