"""OAuth 2.0 token exchange and revocation."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import List

from PySide6.QtCore import Property, QObject, QUrl, Signal, Slot

from ..config import (
    AUTH_URL,
    GRANT_TYPE_CODE,
    GRANT_TYPE_PASSWORD,
    REVOKE_TOKEN_URL,
    TOKEN_URL,
)
from ..utils.jsonio import parse_json
from .encoding import add_url_query_items, encode_form
from .enums import Error, Status
from .request import PARSE_ERROR_STRING, Request, server_error_message

logger = logging.getLogger(__name__)


class AuthRequest(IntEnum):
    """Kind of call currently handled by :class:`AuthenticationRequest`."""

    WebToken = 0
    DeviceToken = 1
    RevokeToken = 2


class AuthenticationRequest(Request):
    """Obtain and revoke access tokens for the Data API.

    Supports the web application profile (``authorization_code``), the
    native profile (``password``) and token revocation.  A successful
    exchange stores the returned tokens on the request, so the same object
    can hand them to a settings store through ``accessTokenChanged``.
    """

    redirectUriChanged = Signal()  # noqa: N815
    scopesChanged = Signal()  # noqa: N815

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._auth_request = AuthRequest.WebToken
        self._redirect_uri = ""
        self._scopes: List[str] = []

    @Property(str, notify=redirectUriChanged)
    def redirectUri(self) -> str:  # noqa: N802
        """Uri the browser is sent back to during the web flow."""
        return self._redirect_uri

    @redirectUri.setter
    def redirectUri(self, value: str) -> None:  # noqa: N802
        if value != self._redirect_uri:
            self._redirect_uri = value
            self.redirectUriChanged.emit()

    @Property("QStringList", notify=scopesChanged)
    def scopes(self) -> List[str]:
        """Scopes for which permission is requested."""
        return list(self._scopes)

    @scopes.setter
    def scopes(self, value: List[str]) -> None:
        self._scopes = [str(scope) for scope in (value or [])]
        self.scopesChanged.emit()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @Slot(result=QUrl)
    def authorizationUrl(self) -> QUrl:  # noqa: N802
        """Return the page a user must visit to grant access (web flow)."""

        items = {
            "response_type": "code",
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
        }
        if self._scopes:
            items["scope"] = " ".join(self._scopes)
        return add_url_query_items(QUrl(AUTH_URL), items)

    @Slot(str)
    def exchangeCodeForAccessToken(self, code: str) -> None:  # noqa: N802
        """Submit an authorization *code* in exchange for an access token."""

        if self._status == Status.Loading:
            return
        self._auth_request = AuthRequest.WebToken
        self.url = TOKEN_URL
        self.data = encode_form(
            {
                "code": code,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "redirect_uri": self._redirect_uri,
                "grant_type": GRANT_TYPE_CODE,
            }
        )
        self.post()

    @Slot(str, str)
    def exchangeCredentialsForAccessToken(self, username: str, password: str) -> None:  # noqa: N802
        """Submit *username* and *password* in exchange for an access token."""

        if self._status == Status.Loading:
            return
        self._auth_request = AuthRequest.DeviceToken
        self.url = TOKEN_URL
        self.data = encode_form(
            {
                "username": username,
                "password": password,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "scope": " ".join(self._scopes),
                "grant_type": GRANT_TYPE_PASSWORD,
            }
        )
        self.post()

    @Slot()
    def revokeAccessToken(self) -> None:  # noqa: N802
        """Revoke Data API access for the current access token."""

        if self._status == Status.Loading:
            return
        self._auth_request = AuthRequest.RevokeToken
        self.url = REVOKE_TOKEN_URL
        self.data = None
        self.get()

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def _refresh_allowed(self) -> bool:
        # A rejected token exchange cannot be rescued by another exchange.
        return self._auth_request == AuthRequest.RevokeToken

    def _handle_response(self, body: bytes) -> None:
        result, ok = parse_json(body)
        if self._auth_request == AuthRequest.RevokeToken:
            self._result = result if ok else {}
            logger.info("Access token revoked")
            self._finish(Status.Ready, Error.NoError, "")
            return
        if not ok:
            self._finish(Status.Failed, Error.ParseError, PARSE_ERROR_STRING)
            return
        message = server_error_message(result)
        if message is not None:
            self._finish(Status.Failed, Error.UnknownContentError, message)
            return
        if isinstance(result, dict):
            if result.get("access_token"):
                self.accessToken = str(result["access_token"])
            if result.get("refresh_token"):
                self.refreshToken = str(result["refresh_token"])
        self._result = result
        self._finish(Status.Ready, Error.NoError, "")


__all__ = ["AuthRequest", "AuthenticationRequest"]
