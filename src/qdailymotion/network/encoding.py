"""Helpers that turn Python mappings into URLs, headers and request bodies."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote_from_bytes

from PySide6.QtCore import QUrl, QUrlQuery
from PySide6.QtNetwork import QNetworkRequest

from ..config import API_URL
from ..utils.jsonio import serialize_json

logger = logging.getLogger(__name__)


def encode_value(value: Any) -> Optional[bytes]:
    """Return the wire form of *value*.

    Strings and bytes are sent verbatim; everything else is JSON encoded so
    that ``True`` becomes ``true`` and lists become JSON arrays.  ``None`` is
    returned when the value cannot be serialised.
    """

    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    payload, ok = serialize_json(value)
    if not ok:
        logger.debug("Dropping value that cannot be serialised: %r", value)
        return None
    return payload


def api_path(resource_path: str) -> str:
    """Return *resource_path* with exactly one leading slash."""

    return resource_path if resource_path.startswith("/") else "/" + resource_path


def join_path(resource_path: str, resource_id: str) -> str:
    """Append *resource_id* to *resource_path* with a single separator."""

    separator = "" if resource_path.endswith("/") else "/"
    return f"{resource_path}{separator}{resource_id}"


def add_url_query_items(url: QUrl, items: Mapping[str, Any]) -> QUrl:
    """Return a copy of *url* with *items* appended to its query."""

    query = QUrlQuery(url)
    for key, value in items.items():
        encoded = encode_value(value)
        if encoded is None:
            continue
        query.addQueryItem(str(key), encoded.decode("utf-8", errors="replace"))
    result = QUrl(url)
    result.setQuery(query)
    return result


def build_api_url(
    resource_path: str,
    filters: Optional[Mapping[str, Any]] = None,
    fields: Optional[Iterable[str]] = None,
) -> QUrl:
    """Build a Data API URL for *resource_path* with filters and a projection."""

    url = QUrl(API_URL + api_path(resource_path))
    query = dict(filters or {})
    field_list = [str(field) for field in (fields or [])]
    if field_list:
        query["fields"] = ",".join(field_list)
    if query:
        url = add_url_query_items(url, query)
    return url


def add_request_headers(request: QNetworkRequest, headers: Mapping[str, Any]) -> None:
    """Set every entry of *headers* as a raw header on *request*."""

    for key, value in headers.items():
        encoded = encode_value(value)
        if encoded is None:
            continue
        request.setRawHeader(str(key).encode("utf-8"), encoded)


def encode_form(items: Mapping[str, Any]) -> str:
    """Encode *items* as an ``application/x-www-form-urlencoded`` body."""

    pairs = []
    for key, value in items.items():
        encoded = encode_value(value)
        if encoded is None:
            continue
        pairs.append(f"{quote_from_bytes(str(key).encode('utf-8'), safe='')}="
                     f"{quote_from_bytes(encoded, safe='')}")
    return "&".join(pairs)


__all__ = [
    "add_request_headers",
    "add_url_query_items",
    "api_path",
    "build_api_url",
    "encode_form",
    "encode_value",
    "join_path",
]
