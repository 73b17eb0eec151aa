"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Interactive TSO session protocol over the z/OSMF request layer.

A session moves NoSession -> Active on start() and back to NoSession on
stop(). While Active it is identified by its servlet key. z/OSMF may need
several round-trips to hand back all output of one command: each reply page
that still carries msgData means more output is queued, so send() keeps
polling until a page with no pending messages arrives or the attempt
ceiling is reached. Every page is folded into the session in arrival order.

A TsoSession is not thread-safe; callers serialize operations on one session.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import quote, urlencode

from zosmf_client.config.settings import TsoConfig, ZosmfConfig, get_default_config
from zosmf_client.core.connection import ZosConnection
from zosmf_client.core.validation import check_not_empty, check_not_null
from zosmf_client.exceptions import InvalidArgumentError, InvalidStateError, ProtocolError, ZosmfError
from zosmf_client.logging_config import get_logger, log_tso_exchange
from zosmf_client.rest.request import RequestType, ZosmfRequestFactory
from zosmf_client.rest.response import Response
from zosmf_client.rest.transport import BaseTransport, RequestsTransport
from zosmf_client.zostso import constants
from zosmf_client.zostso.inputs import StartTsoParams
from zosmf_client.zostso.messages import ZosmfMessage, ZosmfTsoResponse
from zosmf_client.zostso.responses import SendResponse, StartStopResponse

logger = get_logger(__name__)


@dataclass
class TsoSession:
    """
    State of one TSO address space.

    Attributes:
        servlet_key: Session handle; None once the session is stopped
        messages: Pending z/OSMF messages seen across all pages, in arrival order
        output: TSO MESSAGE lines seen across all pages, in arrival order
        responses: Every reply page folded into this session
        success: True once the latest page reported nothing pending
        failure_reason: Reason carried by the latest page when it was not drained
    """

    servlet_key: Optional[str] = None
    messages: List[ZosmfMessage] = field(default_factory=list)
    output: List[str] = field(default_factory=list)
    responses: List[ZosmfTsoResponse] = field(default_factory=list)
    success: bool = False
    failure_reason: Optional[str] = None
    start_response: Optional[StartStopResponse] = None

    @property
    def active(self) -> bool:
        return self.servlet_key is not None

    def record(self, page: ZosmfTsoResponse) -> None:
        """Fold one reply page into the session."""
        self.responses.append(page)
        self.messages.extend(page.msg_data)
        self.output.extend(page.output_lines)
        self.success = page.pending == 0
        self.failure_reason = page.failure_reason


class TsoClient:
    """
    Starts, drives and stops TSO sessions on one z/OSMF connection.

    Args:
        connection: Target system and credentials
        config: Client configuration; TSO defaults and transport settings come from here
        transport: Transport provider shared by all requests; defaults to a
            RequestsTransport built from ``config.request``

    Example:
        >>> client = TsoClient(connection)
        >>> session = client.start(account="ACCT#")
        >>> result = client.send(session, "TIME")
        >>> print(result.command_response)
        >>> client.stop(session)
    """

    def __init__(
        self,
        connection: ZosConnection,
        config: Optional[ZosmfConfig] = None,
        transport: Optional[BaseTransport] = None,
    ) -> None:
        check_not_null(connection, "connection")
        self.connection = connection
        self.config = config or get_default_config()
        if transport is None:
            transport = RequestsTransport(
                timeout=self.config.request.timeout,
                verify=self.config.request.verify,
            )
        self.transport = transport

    @property
    def tso_config(self) -> TsoConfig:
        return self.config.tso

    def _url(self, servlet_key: Optional[str] = None) -> str:
        url = self.connection.base_url + constants.TSO_ENDPOINT
        if servlet_key is not None:
            url += "/" + quote(servlet_key, safe="")
        return url

    def _execute(self, request_type: RequestType, url: str, body: Any = None) -> Response:
        request = ZosmfRequestFactory.build_request(
            self.connection, request_type, transport=self.transport
        )
        request.set_url(url)
        if body is not None:
            request.set_body(body)
        return request.execute_request()

    @staticmethod
    def _require_active(session: TsoSession) -> None:
        check_not_null(session, "session")
        if not session.active:
            raise InvalidStateError("session is not active, servletKey is missing")

    @staticmethod
    def _page(operation: str, response: Response) -> ZosmfTsoResponse:
        if response.response_phrase is None:
            raise ProtocolError(
                f"TSO {operation} reply has no body (status {response.status_code})"
            )
        if not response.is_success:
            reason = None
            if isinstance(response.response_phrase, dict):
                try:
                    reason = ZosmfTsoResponse.from_json(response.response_phrase).failure_reason
                except ProtocolError:
                    reason = None
            reason = reason or response.status_text or constants.ZOSMF_UNKNOWN_ERROR
            raise ProtocolError(
                f"TSO {operation} rejected with status {response.status_code}: {reason}"
            )
        return ZosmfTsoResponse.from_json(response.response_phrase)

    def start(
        self,
        account: Optional[str] = None,
        params: Optional[StartTsoParams] = None,
    ) -> TsoSession:
        """
        Start a TSO address space.

        Args:
            account: Accounting info; overrides the configured tso.account
            params: Full logon parameters; when given, account is ignored

        Returns:
            Active TsoSession holding the servlet key and the logon pages

        Raises:
            InvalidArgumentError: If no account is available
            RequestFailureError: If the transport call fails
            ProtocolError: If the reply omits the servlet key
        """
        if params is None:
            params = StartTsoParams.from_config(self.tso_config, account=account)

        url = f"{self._url()}?{urlencode(params.query_params())}"
        # z/OSMF takes the logon attributes from the query; the body is empty
        response = self._execute(RequestType.POST_JSON, url, body="")

        phrase = response.response_phrase
        if not isinstance(phrase, dict):
            logger.error(f"TSO start returned status {response.status_code} without a JSON object")
            raise ProtocolError("servletKey is missing")
        page = ZosmfTsoResponse.from_json(phrase)
        if not page.servlet_key:
            logger.error(f"TSO start returned status {response.status_code} without a servletKey")
            raise ProtocolError("servletKey is missing")

        session = TsoSession(servlet_key=page.servlet_key)
        session.record(page)
        session.start_response = StartStopResponse.from_page(page)

        log_tso_exchange(
            logger, "start", page.servlet_key, session.success,
            pending=page.pending, reason=page.failure_reason,
        )
        return session

    def poll(self, session: TsoSession) -> SendResponse:
        """
        Collect one more page of queued output for the session.

        Performs exactly one GET round-trip.

        Raises:
            InvalidStateError: If the session is not active
            RequestFailureError: If the transport call fails
            ProtocolError: If the reply is not a TSO page or was rejected
        """
        self._require_active(session)
        page = self._page("poll", self._execute(RequestType.GET_JSON, self._url(session.servlet_key)))
        session.record(page)
        log_tso_exchange(
            logger, "poll", session.servlet_key, session.success,
            pending=page.pending, reason=page.failure_reason,
        )
        return SendResponse(
            success=session.success,
            zosmf_responses=[page],
            command_response="\n".join(page.output_lines),
            failure_response=session.failure_reason,
        )

    def send(
        self,
        session: TsoSession,
        command: str,
        max_attempts: Optional[int] = None,
    ) -> SendResponse:
        """
        Send a command and collect its output.

        The command itself is one round-trip; further polls follow while the
        latest page still reports pending messages. Reaching the attempt
        ceiling is not an error: the result has ``success=False`` and the
        reason carried by the last page.

        Args:
            session: Active session
            command: TSO command text
            max_attempts: Round-trip ceiling including the command itself;
                defaults to tso.max_poll_attempts

        Returns:
            SendResponse covering every page collected by this call

        Raises:
            InvalidArgumentError: If command is empty or max_attempts is below 1
            InvalidStateError: If the session is not active
            RequestFailureError: If a transport call fails
            ProtocolError: If a reply is not a TSO page or was rejected
        """
        self._require_active(session)
        command = check_not_empty(command, "command")
        if max_attempts is None:
            max_attempts = self.tso_config.max_poll_attempts
        if max_attempts < 1:
            raise InvalidArgumentError("max_attempts must be at least 1")

        body = {
            constants.TSO_RESPONSE: {
                "VERSION": constants.TSO_VERSION,
                "DATA": command,
            }
        }
        page = self._page("send", self._execute(RequestType.PUT_JSON, self._url(session.servlet_key), body))
        session.record(page)
        pages = [page]

        while page.pending and len(pages) < max_attempts:
            log_tso_exchange(
                logger, "send", session.servlet_key, False,
                pending=page.pending, reason=page.failure_reason, attempt=len(pages),
            )
            if self.tso_config.poll_interval > 0:
                time.sleep(self.tso_config.poll_interval)
            page = self.poll(session).zosmf_responses[0]
            pages.append(page)

        if page.pending:
            logger.warning(
                f"TSO command output not drained after {len(pages)} attempts "
                f"on session {session.servlet_key}"
            )
        log_tso_exchange(
            logger, "send", session.servlet_key, session.success,
            pending=page.pending, reason=session.failure_reason, attempts=len(pages),
        )

        return SendResponse(
            success=session.success,
            zosmf_responses=pages,
            command_response="\n".join(line for p in pages for line in p.output_lines),
            failure_response=session.failure_reason,
        )

    def stop(self, session: TsoSession) -> bool:
        """
        Stop the session's address space.

        The session becomes inactive whatever the remote reply says, and also
        when the teardown call fails. Stopping an inactive session does nothing.

        Returns:
            True when the teardown reply was a 2xx (or nothing had to be stopped)

        Raises:
            RequestFailureError: If the transport call fails
        """
        check_not_null(session, "session")
        if not session.active:
            logger.debug("TSO stop on an inactive session ignored")
            return True

        servlet_key = session.servlet_key
        try:
            response = self._execute(RequestType.DELETE_JSON, self._url(servlet_key))
        finally:
            session.servlet_key = None

        log_tso_exchange(
            logger, "stop", servlet_key, response.is_success,
            reason=None if response.is_success else response.status_text,
            status_code=response.status_code,
        )
        return response.is_success

    def issue_command(
        self,
        command: str,
        account: Optional[str] = None,
        params: Optional[StartTsoParams] = None,
        max_attempts: Optional[int] = None,
    ) -> SendResponse:
        """
        Run one command in a fresh session: start, send, stop.

        The session is stopped even when send() raises; a failed teardown is
        then logged and the send error propagates.
        """
        command = check_not_empty(command, "command")
        session = self.start(account=account, params=params)
        try:
            result = self.send(session, command, max_attempts=max_attempts)
        except ZosmfError:
            try:
                self.stop(session)
            except ZosmfError as stop_error:
                logger.warning(f"TSO stop after failed send did not complete: {stop_error}")
            raise
        self.stop(session)
        return result
