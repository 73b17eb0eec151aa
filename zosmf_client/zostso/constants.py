"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Constants for the z/OSMF TSO/E address space services.
"""

# Endpoint
TSO_ENDPOINT = "/zosmf/tsoApp/tso"

# Start query parameter names
QUERY_ACCOUNT = "acct"
QUERY_PROC = "proc"
QUERY_CHARSET = "chset"
QUERY_CODEPAGE = "cpage"
QUERY_ROWS = "rows"
QUERY_COLS = "cols"
QUERY_REGION_SIZE = "rsize"

# Reply and request field names
SERVLET_KEY = "servletKey"
QUEUE_ID = "queueID"
VERSION_KEY = "ver"
REUSED = "reused"
TIMEOUT = "timeout"
MSG_DATA = "msgData"
TSO_DATA = "tsoData"
MESSAGE_TEXT = "messageText"
MESSAGE_ID = "messageId"
STACK_TRACE = "stackTrace"

TSO_MESSAGE = "TSO MESSAGE"
TSO_PROMPT = "TSO PROMPT"
TSO_RESPONSE = "TSO RESPONSE"
TSO_VERSION = "0100"

# Defaults
DEFAULT_PROC = "IZUFPROC"
DEFAULT_CHARSET = "697"
DEFAULT_CODEPAGE = "1047"
DEFAULT_ROWS = 24
DEFAULT_COLS = 80
DEFAULT_REGION_SIZE = 4096
DEFAULT_MAX_POLL_ATTEMPTS = 10

ZOSMF_UNKNOWN_ERROR = "Unknown error"
