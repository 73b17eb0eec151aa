"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Connection descriptor for a z/OSMF instance.

A ZosConnection says how to reach the remote system (host and port) and how
to authenticate to it. Exactly one authentication mode is populated:

- CLASSIC: user and password, sent as a Basic Authorization header
- TOKEN: a session token sent as a cookie (e.g. LtpaToken2 or jwtToken)
- CERT: a client certificate presented during the TLS handshake

Descriptors are immutable. Attaching a session token after logon returns a
new descriptor, so connections may be shared freely across threads.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from zosmf_client.core.validation import check_not_empty
from zosmf_client.exceptions import InvalidArgumentError

DEFAULT_TOKEN_NAME = "LtpaToken2"


class AuthType(str, Enum):
    """Authentication modes supported by z/OSMF."""

    CLASSIC = "classic"
    TOKEN = "token"
    CERT = "cert"


@dataclass(frozen=True, repr=False)
class ZosConnection:
    """
    Immutable description of a z/OSMF endpoint and its credentials.

    Prefer building instances through ZosConnectionFactory, which reports
    missing arguments by name.
    """

    host: str
    port: str
    auth_type: AuthType
    user: Optional[str] = None
    password: Optional[str] = None
    token_name: Optional[str] = None
    token_value: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    def __post_init__(self) -> None:
        check_not_empty(self.host, "host")
        check_not_empty(self.port, "port")

        has_basic = self.user is not None or self.password is not None
        has_token = self.token_value is not None
        has_cert = self.cert_file is not None

        if self.auth_type is AuthType.CLASSIC:
            valid = self.user is not None and self.password is not None and not (has_token or has_cert)
        elif self.auth_type is AuthType.TOKEN:
            valid = has_token and not (has_basic or has_cert)
        else:
            valid = has_cert and not (has_basic or has_token)

        if not valid:
            raise InvalidArgumentError(
                f"connection fields do not match authentication mode {self.auth_type.value}"
            )

        if self.auth_type is AuthType.CLASSIC:
            check_not_empty(self.user, "user")
            check_not_empty(self.password, "password")
        elif self.auth_type is AuthType.TOKEN:
            check_not_empty(self.token_value, "token")
        else:
            check_not_empty(self.cert_file, "cert_file")

    @property
    def base_url(self) -> str:
        """Root URL of the z/OSMF REST services on this connection."""
        return f"https://{self.host}:{self.port}"

    @property
    def cookie(self) -> Optional[Tuple[str, str]]:
        """(name, value) of the session cookie, or None outside TOKEN mode."""
        if self.auth_type is not AuthType.TOKEN:
            return None
        return self.token_name or DEFAULT_TOKEN_NAME, self.token_value

    @property
    def cert(self) -> Optional[Union[str, Tuple[str, str]]]:
        """Client certificate in the shape the transport expects, or None."""
        if self.auth_type is not AuthType.CERT:
            return None
        if self.key_file:
            return self.cert_file, self.key_file
        return self.cert_file

    def with_session_token(self, token: str, token_name: Optional[str] = None) -> "ZosConnection":
        """
        Return a TOKEN-mode copy of this connection.

        Future requests built on the returned descriptor authenticate with the
        session cookie instead of an Authorization header. This descriptor is
        left untouched.

        Args:
            token: Session token value, or "name=value"
            token_name: Cookie name; defaults to the name embedded in token or LtpaToken2

        Returns:
            New ZosConnection in TOKEN mode on the same host and port
        """
        name, value = _split_token(token, token_name)
        return dataclasses.replace(
            self,
            auth_type=AuthType.TOKEN,
            user=None,
            password=None,
            token_name=name,
            token_value=value,
            cert_file=None,
            key_file=None,
        )

    def __repr__(self) -> str:
        return (
            f"ZosConnection(host={self.host!r}, port={self.port!r}, "
            f"auth_type={self.auth_type.value!r}, user={self.user!r}, "
            f"password={_mask(self.password)}, token_name={self.token_name!r}, "
            f"token_value={_mask(self.token_value)}, cert_file={self.cert_file!r}, "
            f"key_file={self.key_file!r})"
        )


def _mask(secret: Optional[str]) -> str:
    return "None" if secret is None else "'****'"


def _split_token(token: str, token_name: Optional[str]) -> Tuple[str, str]:
    token = check_not_empty(token, "token")
    if token_name is None and "=" in token:
        name, value = token.split("=", 1)
        if name.strip() and value.strip():
            return name.strip(), value
    name = check_not_empty(token_name, "token_name") if token_name is not None else DEFAULT_TOKEN_NAME
    return name, token


class ZosConnectionFactory:
    """Builds ZosConnection values, one constructor per authentication mode."""

    @staticmethod
    def create_basic_connection(
        host: str,
        port: Union[str, int],
        user: str,
        password: str,
    ) -> ZosConnection:
        """
        Create a CLASSIC (user and password) connection.

        Raises:
            InvalidArgumentError: If any argument is None or empty
        """
        return ZosConnection(
            host=check_not_empty(host, "host"),
            port=check_not_empty(port, "port"),
            auth_type=AuthType.CLASSIC,
            user=check_not_empty(user, "user"),
            password=check_not_empty(password, "password"),
        )

    @staticmethod
    def create_token_connection(
        host: str,
        port: Union[str, int],
        token: str,
        token_name: Optional[str] = None,
    ) -> ZosConnection:
        """
        Create a TOKEN (session cookie) connection.

        Args:
            host: z/OSMF host name
            port: z/OSMF port
            token: Session token value, or "name=value"
            token_name: Cookie name; defaults to LtpaToken2

        Raises:
            InvalidArgumentError: If any argument is None or empty
        """
        host = check_not_empty(host, "host")
        port = check_not_empty(port, "port")
        name, value = _split_token(token, token_name)
        return ZosConnection(
            host=host,
            port=port,
            auth_type=AuthType.TOKEN,
            token_name=name,
            token_value=value,
        )

    @staticmethod
    def create_cert_connection(
        host: str,
        port: Union[str, int],
        cert_file: str,
        key_file: Optional[str] = None,
    ) -> ZosConnection:
        """
        Create a CERT (client certificate) connection.

        Args:
            host: z/OSMF host name
            port: z/OSMF port
            cert_file: Path to the PEM client certificate
            key_file: Optional path to the private key when not bundled in cert_file

        Raises:
            InvalidArgumentError: If host, port or cert_file is None or empty
        """
        return ZosConnection(
            host=check_not_empty(host, "host"),
            port=check_not_empty(port, "port"),
            auth_type=AuthType.CERT,
            cert_file=check_not_empty(cert_file, "cert_file"),
            key_file=check_not_empty(key_file, "key_file") if key_file is not None else None,
        )
