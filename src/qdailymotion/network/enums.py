"""Enumerations shared by every request and model."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Operation(IntEnum):
    """HTTP intent of the current call."""

    Get = 0
    Post = 1
    Delete = 2


class Status(IntEnum):
    """Lifecycle state of a request (and of the models mirroring one)."""

    Null = 0
    Loading = 1
    Ready = 2
    Failed = 3
    Canceled = 4


class Error(IntEnum):
    """Error kinds reported by requests.

    Values ``0``–``499`` mirror :class:`QNetworkReply.NetworkError` exactly so
    that transport failures map one to one.  ``UnknownContentError`` doubles
    as the content-level error for well-formed payloads that describe a
    server-side failure, and ``ParseError`` covers bodies that are not JSON.
    """

    NoError = 0

    ConnectionRefusedError = 1
    RemoteHostClosedError = 2
    HostNotFoundError = 3
    TimeoutError = 4
    OperationCanceledError = 5
    SslHandshakeFailedError = 6
    TemporaryNetworkFailureError = 7
    NetworkSessionFailedError = 8
    BackgroundRequestNotAllowedError = 9
    TooManyRedirectsError = 10
    InsecureRedirectError = 11
    UnknownNetworkError = 99

    ProxyConnectionRefusedError = 101
    ProxyConnectionClosedError = 102
    ProxyNotFoundError = 103
    ProxyTimeoutError = 104
    ProxyAuthenticationRequiredError = 105
    UnknownProxyError = 199

    ContentAccessDenied = 201
    ContentOperationNotPermittedError = 202
    ContentNotFoundError = 203
    AuthenticationRequiredError = 204
    ContentReSendError = 205
    ContentConflictError = 206
    ContentGoneError = 207
    UnknownContentError = 299

    ProtocolUnknownError = 301
    ProtocolInvalidOperationError = 302
    ProtocolFailure = 399

    InternalServerError = 401
    OperationNotImplementedError = 402
    ServiceUnavailableError = 403
    UnknownServerError = 499

    ParseError = 1000

    @classmethod
    def from_network_error(cls, code: Any) -> "Error":
        """Map a ``QNetworkReply.NetworkError`` (or its integer value)."""

        value = getattr(code, "value", code)
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.UnknownNetworkError


__all__ = ["Error", "Operation", "Status"]
