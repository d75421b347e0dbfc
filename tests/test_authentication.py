from __future__ import annotations

from urllib.parse import parse_qs

import pytest

pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtCore import QUrlQuery
from PySide6.QtNetwork import QNetworkReply
from PySide6.QtTest import QSignalSpy

from qdailymotion.config import REVOKE_TOKEN_URL, TOKEN_URL
from qdailymotion.network import AuthenticationRequest, Error, Status


@pytest.fixture()
def auth(network) -> AuthenticationRequest:
    request = AuthenticationRequest()
    request.set_network_access_manager(network)
    request.clientId = "client"
    request.clientSecret = "secret"
    request.redirectUri = "https://example.com/callback"
    request.scopes = ["userinfo", "manage_videos"]
    return request


def test_authorization_url_lists_web_flow_parameters(auth: AuthenticationRequest) -> None:
    url = auth.authorizationUrl()
    query = QUrlQuery(url)

    assert url.host() == "www.dailymotion.com"
    assert url.path() == "/oauth/authorize"
    assert query.queryItemValue("response_type") == "code"
    assert query.queryItemValue("client_id") == "client"
    assert query.queryItemValue("scope") == "userinfo manage_videos"


def test_exchange_code_stores_tokens(auth: AuthenticationRequest, network) -> None:
    token_spy = QSignalSpy(auth.accessTokenChanged)
    auth.exchangeCodeForAccessToken("abc")

    reply = network.last
    assert reply.operation == "POST"
    assert reply.url.toString() == TOKEN_URL
    assert reply.form() == {
        "code": "abc",
        "client_id": "client",
        "client_secret": "secret",
        "redirect_uri": "https://example.com/callback",
        "grant_type": "authorization_code",
    }

    network.respond({"access_token": "token-1", "refresh_token": "refresh-1", "expires_in": 3600})
    assert auth.status == Status.Ready
    assert auth.accessToken == "token-1"
    assert auth.refreshToken == "refresh-1"
    assert auth.result["expires_in"] == 3600
    assert token_spy.count() == 1


def test_exchange_credentials_joins_scopes(auth: AuthenticationRequest, network) -> None:
    auth.exchangeCredentialsForAccessToken("user", "p@ss word")
    form = network.last.form()

    assert form["username"] == "user"
    assert form["password"] == "p@ss word"
    assert form["scope"] == "userinfo manage_videos"
    assert "scope=userinfo%20manage_videos" in network.last.body.decode()
    assert parse_qs(network.last.body.decode())["scope"] == ["userinfo manage_videos"]
    assert form["grant_type"] == "password"


def test_rejected_exchange_reports_oauth_error(auth: AuthenticationRequest, network) -> None:
    auth.exchangeCredentialsForAccessToken("user", "wrong")
    network.respond({"error": "invalid_grant", "error_description": "Invalid credentials"})

    assert auth.status == Status.Failed
    assert auth.error == Error.UnknownContentError
    assert auth.errorString == "Invalid credentials"
    assert auth.accessToken == ""


def test_token_exchange_is_never_refreshed(auth: AuthenticationRequest, network) -> None:
    auth.refreshToken = "refresh-1"
    auth.exchangeCodeForAccessToken("abc")
    network.respond(error=QNetworkReply.NetworkError.AuthenticationRequiredError)

    assert len(network.replies) == 1
    assert auth.status == Status.Failed
    assert auth.error == Error.AuthenticationRequiredError


def test_revoke_succeeds_without_json_body(auth: AuthenticationRequest, network) -> None:
    auth.accessToken = "token-1"
    auth.revokeAccessToken()

    reply = network.last
    assert reply.operation == "GET"
    assert reply.url.toString() == REVOKE_TOKEN_URL
    assert reply.header("Authorization") == "Bearer token-1"

    network.respond(b"")
    assert auth.status == Status.Ready


def test_revoke_may_refresh_on_authentication_error(auth: AuthenticationRequest, network) -> None:
    auth.accessToken = "old"
    auth.refreshToken = "refresh-1"
    auth.revokeAccessToken()
    network.respond(error=QNetworkReply.NetworkError.AuthenticationRequiredError)

    assert network.last.url.toString() == TOKEN_URL
    network.respond({"access_token": "new"})
    assert network.last.url.toString() == REVOKE_TOKEN_URL
    assert network.last.header("Authorization") == "Bearer new"
    network.respond({})
    assert auth.status == Status.Ready
