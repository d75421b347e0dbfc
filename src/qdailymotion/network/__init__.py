"""Asynchronous requests against the Dailymotion Data API."""

from .authentication import AuthenticationRequest
from .enums import Error, Operation, Status
from .request import Request
from .streams import StreamsRequest

__all__ = [
    "AuthenticationRequest",
    "Error",
    "Operation",
    "Request",
    "Status",
    "StreamsRequest",
]
