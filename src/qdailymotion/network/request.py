"""Asynchronous Data API request with OAuth 2.0 token-refresh retry."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, Optional

from PySide6.QtCore import Property, QObject, QUrl, Signal, Slot
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from ..config import FORM_CONTENT_TYPE, GRANT_TYPE_REFRESH, MAX_REDIRECTS, TOKEN_URL
from ..utils.jsonio import parse_json
from .encoding import add_request_headers, encode_form
from .enums import Error, Operation, Status

logger = logging.getLogger(__name__)

PARSE_ERROR_STRING = "Unable to parse response"
REDIRECT_ERROR_STRING = "Maximum redirects reached"


def server_error_message(payload: Any) -> Optional[str]:
    """Return the message of an error object embedded in *payload*.

    The Data API reports failures as ``{"error": {"message": ...}}`` while the
    OAuth endpoints use ``{"error": "...", "error_description": "..."}``.
    ``None`` means *payload* does not describe an error.
    """

    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not error:
        return None
    if isinstance(error, dict):
        message = error.get("message") or error.get("type")
    else:
        message = payload.get("error_description") or error
    return str(message) if message else "Unknown error"


class Request(QObject):
    """Run one HTTP call at a time against the Dailymotion Data API.

    Completion is always reported through :attr:`finished`, exactly once per
    logical call, after ``status``, ``error``, ``errorString`` and ``result``
    have been updated.  Intermediate steps such as redirects and the silent
    access token refresh are never visible to callers.
    """

    clientIdChanged = Signal()  # noqa: N815
    clientSecretChanged = Signal()  # noqa: N815
    accessTokenChanged = Signal()  # noqa: N815
    refreshTokenChanged = Signal()  # noqa: N815
    urlChanged = Signal()  # noqa: N815
    headersChanged = Signal()  # noqa: N815
    dataChanged = Signal()  # noqa: N815
    statusChanged = Signal()  # noqa: N815
    finished = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._manager: Optional[QNetworkAccessManager] = None
        self._own_manager = False
        self._reply: Optional[QNetworkReply] = None

        self._client_id = ""
        self._client_secret = ""
        self._access_token = ""
        self._refresh_token = ""

        self._url = QUrl()
        self._headers: Dict[str, Any] = {}
        self._data: Any = None
        self._result: Any = None

        self._operation = Operation.Get
        self._status = Status.Null
        self._error = Error.NoError
        self._error_string = ""

        self._auth_required = True
        self._redirects = 0
        self._refreshing = False
        self._refresh_attempted = False
        self._cancel_requested = False

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    @Property(str, notify=clientIdChanged)
    def clientId(self) -> str:  # noqa: N802
        """Client id, used only when the access token must be refreshed."""
        return self._client_id

    @clientId.setter
    def clientId(self, value: str) -> None:  # noqa: N802
        if value != self._client_id:
            self._client_id = value
            self.clientIdChanged.emit()

    @Property(str, notify=clientSecretChanged)
    def clientSecret(self) -> str:  # noqa: N802
        """Client secret, used only when the access token must be refreshed."""
        return self._client_secret

    @clientSecret.setter
    def clientSecret(self, value: str) -> None:  # noqa: N802
        if value != self._client_secret:
            self._client_secret = value
            self.clientSecretChanged.emit()

    @Property(str, notify=accessTokenChanged)
    def accessToken(self) -> str:  # noqa: N802
        """Bearer token sent with calls that require authentication."""
        return self._access_token

    @accessToken.setter
    def accessToken(self, value: str) -> None:  # noqa: N802
        if value != self._access_token:
            self._access_token = value
            self.accessTokenChanged.emit()

    @Property(str, notify=refreshTokenChanged)
    def refreshToken(self) -> str:  # noqa: N802
        """Token exchanged for a new access token after a 401."""
        return self._refresh_token

    @refreshToken.setter
    def refreshToken(self, value: str) -> None:  # noqa: N802
        if value != self._refresh_token:
            self._refresh_token = value
            self.refreshTokenChanged.emit()

    # ------------------------------------------------------------------
    # Request descriptor
    # ------------------------------------------------------------------
    @Property(QUrl, notify=urlChanged)
    def url(self) -> QUrl:
        return QUrl(self._url)

    @url.setter
    def url(self, value: QUrl | str) -> None:
        value = QUrl(value)
        if value != self._url:
            self._url = value
            self.urlChanged.emit()

    @Property("QVariantMap", notify=headersChanged)
    def headers(self) -> Dict[str, Any]:
        """Extra raw headers merged into every call."""
        return dict(self._headers)

    @headers.setter
    def headers(self, value: Dict[str, Any]) -> None:
        value = dict(value or {})
        if value != self._headers:
            self._headers = value
            self.headersChanged.emit()

    @Property("QVariant", notify=dataChanged)
    def data(self) -> Any:
        """Body sent with POST calls: a string, bytes or a mapping to url-encode."""
        return self._data

    @data.setter
    def data(self, value: Any) -> None:
        if value != self._data:
            self._data = value
            self.dataChanged.emit()

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------
    @Property(int, notify=statusChanged)
    def operation(self) -> Operation:
        return self._operation

    @Property(int, notify=statusChanged)
    def status(self) -> Status:
        return self._status

    @Property(int, notify=statusChanged)
    def error(self) -> Error:
        return self._error

    @Property(str, notify=statusChanged)
    def errorString(self) -> str:  # noqa: N802
        return self._error_string

    @Property("QVariant", notify=statusChanged)
    def result(self) -> Any:
        """Parsed payload; only meaningful while ``status`` is Ready."""
        return self._result

    # ------------------------------------------------------------------
    # Network access
    # ------------------------------------------------------------------
    def network_access_manager(self) -> QNetworkAccessManager:
        """Return the manager used for calls, creating one on first use."""

        if self._manager is None:
            self._manager = QNetworkAccessManager(self)
            self._own_manager = True
        return self._manager

    def set_network_access_manager(self, manager: QNetworkAccessManager) -> None:
        """Use *manager* for subsequent calls. Ownership is not taken."""

        if manager is self._manager:
            return
        if self._own_manager and self._manager is not None:
            self._manager.deleteLater()
        self._manager = manager
        self._own_manager = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @Slot()
    @Slot(bool)
    def get(self, auth_required: bool = True) -> None:
        """Issue a GET for the current ``url``."""
        self._begin(Operation.Get, auth_required)

    @Slot()
    def post(self) -> None:
        """Issue a POST for the current ``url`` with ``data`` as the body."""
        self._begin(Operation.Post)

    @Slot()
    def deleteResource(self) -> None:  # noqa: N802
        """Issue a DELETE for the current ``url``."""
        self._begin(Operation.Delete)

    @Slot()
    def cancel(self) -> None:
        """Abort the in-flight call; ``finished`` still fires with Canceled."""

        reply = self._reply
        if reply is None:
            return
        self._cancel_requested = True
        reply.abort()
        if reply is self._reply:
            # Some transports deliver ``finished`` for an aborted reply
            # asynchronously; finalise now so completion is never lost.
            self._on_reply_finished(reply)

    # ------------------------------------------------------------------
    # Internal lifecycle
    # ------------------------------------------------------------------
    def _begin(self, operation: Operation, auth_required: bool = True) -> bool:
        if self._status == Status.Loading:
            return False
        self._operation = operation
        self._auth_required = auth_required
        self._redirects = 0
        self._refreshing = False
        self._refresh_attempted = False
        self._cancel_requested = False
        self._result = None
        self._error = Error.NoError
        self._error_string = ""
        self._set_status(Status.Loading)
        self._send()
        return True

    def _start(
        self, operation: Operation, url: QUrl | str, data: Any = None, auth_required: bool = True
    ) -> bool:
        """Point the request at *url* with *data* and begin *operation*."""

        if self._status == Status.Loading:
            return False
        self.url = url
        self.data = data
        return self._begin(operation, auth_required)

    def _build_request(self, url: QUrl, auth_required: bool = True) -> QNetworkRequest:
        request = QNetworkRequest(url)
        request.setAttribute(
            QNetworkRequest.Attribute.RedirectPolicyAttribute,
            QNetworkRequest.RedirectPolicy.ManualRedirectPolicy,
        )
        add_request_headers(request, self._headers)
        if self._operation == Operation.Post and not self._has_header("Content-Type"):
            request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, FORM_CONTENT_TYPE)
        if auth_required and self._access_token:
            request.setRawHeader(b"Authorization", f"Bearer {self._access_token}".encode("utf-8"))
        return request

    def _body(self) -> bytes:
        data = self._data
        if data is None:
            return b""
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        if isinstance(data, dict):
            return encode_form(data).encode("utf-8")
        return str(data).encode("utf-8")

    def _has_header(self, name: str) -> bool:
        name = name.lower()
        return any(str(key).lower() == name for key in self._headers)

    def _send(self) -> None:
        """Issue the current operation, failing the call if no reply can be created."""

        try:
            self._dispatch()
        except Exception as exc:
            logger.exception("Could not issue %s %s", self._operation.name.upper(), self._url.toString())
            self._refreshing = False
            self._finish(Status.Failed, Error.UnknownNetworkError, str(exc))

    def _dispatch(self) -> None:
        request = self._build_request(self._url, self._auth_required)
        manager = self.network_access_manager()
        logger.debug("%s %s", self._operation.name.upper(), self._url.toString())
        if self._operation == Operation.Post:
            reply = manager.post(request, self._body())
        elif self._operation == Operation.Delete:
            reply = manager.deleteResource(request)
        else:
            reply = manager.get(request)
        self._watch(reply)

    def _watch(self, reply: QNetworkReply) -> None:
        self._reply = reply
        reply.finished.connect(partial(self._on_reply_finished, reply))

    def _on_reply_finished(self, reply: QNetworkReply) -> None:
        if reply is not self._reply:
            return
        self._reply = None

        body = bytes(reply.readAll().data())
        error = Error.from_network_error(reply.error())
        error_string = reply.errorString()
        redirect = reply.attribute(QNetworkRequest.Attribute.RedirectionTargetAttribute)
        reply.deleteLater()

        canceled = self._cancel_requested or error == Error.OperationCanceledError
        self._cancel_requested = False

        if self._refreshing:
            self._refreshing = False
            self._on_access_token_refreshed(body, error, error_string, canceled)
            return

        if canceled:
            self._finish(Status.Canceled, Error.NoError, "")
            return

        if error == Error.AuthenticationRequiredError:
            if self._can_refresh():
                self._refresh_access_token()
            else:
                self._finish(Status.Failed, error, error_string)
            return

        if isinstance(redirect, QUrl) and not redirect.isEmpty():
            self._follow_redirect(redirect)
            return

        if error != Error.NoError:
            self._finish(Status.Failed, error, error_string)
            return

        self._handle_response(body)

    def _handle_response(self, body: bytes) -> None:
        """Classify a successful transport response. Subclasses may reshape it."""

        result, ok = parse_json(body)
        if not ok:
            self._finish(Status.Failed, Error.ParseError, PARSE_ERROR_STRING)
            return
        message = server_error_message(result)
        if message is not None:
            self._finish(Status.Failed, Error.UnknownContentError, message)
            return
        self._result = result
        self._finish(Status.Ready, Error.NoError, "")

    def _follow_redirect(self, target: QUrl) -> None:
        if self._redirects >= MAX_REDIRECTS:
            self._finish(Status.Failed, Error.TooManyRedirectsError, REDIRECT_ERROR_STRING)
            return
        self._redirects += 1
        self.url = self._url.resolved(target)
        logger.info("Following redirect %d to %s", self._redirects, self._url.toString())
        self._send()

    def _refresh_allowed(self) -> bool:
        """Return whether a 401 for the current call may trigger a refresh."""
        return True

    def _can_refresh(self) -> bool:
        return bool(self._refresh_token) and not self._refresh_attempted and self._refresh_allowed()

    def _refresh_access_token(self) -> None:
        self._refresh_attempted = True
        self._refreshing = True
        request = QNetworkRequest(QUrl(TOKEN_URL))
        request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, FORM_CONTENT_TYPE)
        body = encode_form(
            {
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "refresh_token": self._refresh_token,
                "grant_type": GRANT_TYPE_REFRESH,
            }
        )
        logger.info("Access token rejected, refreshing before retrying %s", self._url.toString())
        try:
            self._watch(self.network_access_manager().post(request, body.encode("utf-8")))
        except Exception as exc:
            logger.exception("Could not issue the token refresh")
            self._refreshing = False
            self._finish(Status.Failed, Error.UnknownNetworkError, str(exc))

    def _on_access_token_refreshed(
        self, body: bytes, error: Error, error_string: str, canceled: bool
    ) -> None:
        if canceled:
            self._finish(Status.Canceled, Error.NoError, "")
            return
        if error != Error.NoError:
            self._finish(Status.Failed, error, error_string)
            return
        result, ok = parse_json(body)
        if not ok or not isinstance(result, dict):
            self._finish(Status.Failed, Error.ParseError, PARSE_ERROR_STRING)
            return
        message = server_error_message(result)
        if message is None and not result.get("access_token"):
            message = "No access token in response"
        if message is not None:
            self._finish(Status.Failed, Error.UnknownContentError, message)
            return
        self.accessToken = str(result["access_token"])
        if result.get("refresh_token"):
            self.refreshToken = str(result["refresh_token"])
        logger.info("Access token refreshed, retrying %s", self._url.toString())
        self._send()

    def _set_status(self, status: Status) -> None:
        if status != self._status:
            self._status = status
            self.statusChanged.emit()

    def _finish(self, status: Status, error: Error, error_string: str) -> None:
        self._error = error
        self._error_string = error_string
        if status == Status.Failed:
            logger.warning(
                "%s %s failed: %s (%s)",
                self._operation.name.upper(),
                self._url.toString(),
                error_string,
                error.name,
            )
        self._set_status(status)
        self.finished.emit()


__all__ = ["Request", "server_error_message"]
