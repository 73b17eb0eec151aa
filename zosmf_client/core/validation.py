"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Argument checks shared by the connection, request and TSO layers.
"""

from typing import Any

from zosmf_client.exceptions import InvalidArgumentError


def check_not_null(value: Any, name: str) -> None:
    """Raise InvalidArgumentError("<name> is null") when value is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} is null")


def check_not_empty(value: Any, name: str) -> str:
    """
    Validate a required string-like argument.

    Args:
        value: Argument value; non-strings (such as an int port) are converted
        name: Argument name used in the error message

    Returns:
        The value as a stripped string

    Raises:
        InvalidArgumentError: If value is None, empty or blank
    """
    check_not_null(value, name)
    text = str(value).strip()
    if not text:
        raise InvalidArgumentError(f"{name} not specified")
    return text
