"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Exception hierarchy for the z/OSMF client.

All custom exceptions inherit from ZosmfError base class.
"""


class ZosmfError(Exception):
    """Base exception for all z/OSMF client errors."""
    pass


# Input and State Errors
class InvalidArgumentError(ZosmfError, ValueError):
    """Raised when a required input is null, empty or malformed."""
    pass


class InvalidStateError(ZosmfError):
    """Raised when an operation is invoked on an object that is not ready for it."""
    pass


# Remote Errors
class RequestFailureError(ZosmfError):
    """
    Raised when the transport call itself fails.

    Wraps network errors, timeouts and undecodable reply bodies so callers
    never see transport library exception types. The original exception is
    available as ``__cause__``.
    """
    pass


class ProtocolError(ZosmfError):
    """Raised when a well-formed reply violates the expected z/OSMF protocol contract."""
    pass


# Configuration Errors
class ConfigurationError(ZosmfError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
