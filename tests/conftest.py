from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

pytest.importorskip("PySide6", reason="PySide6 is required for QDailymotion tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtNetwork", reason="Qt network module not available", exc_type=ImportError)

from PySide6.QtCore import QByteArray, QCoreApplication, QObject, QTimer, QUrl, QUrlQuery, Signal
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest


class FakeReply(QObject):
    """In-memory stand-in for a ``QNetworkReply`` completed by the test."""

    finished = Signal()

    def __init__(self, manager: "FakeNetworkAccessManager", operation: str,
                 request: QNetworkRequest, body: bytes = b"") -> None:
        super().__init__(manager)
        self.manager = manager
        self.operation = operation
        self.request = request
        self.body = body
        self.done = False
        self.aborted = False
        self.deleted = False
        self._payload = b""
        self._error = QNetworkReply.NetworkError.NoError
        self._error_string = ""
        self._redirect: Optional[QUrl] = None

    # Introspection helpers ------------------------------------------------
    @property
    def url(self) -> QUrl:
        return self.request.url()

    @property
    def path(self) -> str:
        return self.url.path()

    def query(self) -> dict:
        query = QUrlQuery(self.url)
        return {key: value for key, value in query.queryItems(QUrl.ComponentFormattingOption.FullyDecoded)}

    def header(self, name: str) -> str:
        return bytes(self.request.rawHeader(name).data()).decode("utf-8")

    def form(self) -> dict:
        query = QUrlQuery(self.body.decode("utf-8"))
        return {key: value for key, value in query.queryItems(QUrl.ComponentFormattingOption.FullyDecoded)}

    # QNetworkReply surface used by the requests ---------------------------
    def readAll(self) -> QByteArray:  # noqa: N802
        return QByteArray(self._payload)

    def error(self) -> QNetworkReply.NetworkError:
        return self._error

    def errorString(self) -> str:  # noqa: N802
        return self._error_string

    def attribute(self, attribute: QNetworkRequest.Attribute) -> Any:
        if attribute == QNetworkRequest.Attribute.RedirectionTargetAttribute:
            return self._redirect
        return None

    def deleteLater(self) -> None:  # noqa: N802
        self.deleted = True

    def abort(self) -> None:
        self.aborted = True
        if self.manager.emit_finished_on_abort:
            self.complete(
                error=QNetworkReply.NetworkError.OperationCanceledError,
                error_string="Operation canceled",
            )

    def complete(
        self,
        payload: Any = b"",
        error: QNetworkReply.NetworkError = QNetworkReply.NetworkError.NoError,
        error_string: str = "",
        redirect: Optional[str] = None,
    ) -> None:
        if self.done:
            return
        self.done = True
        if isinstance(payload, (dict, list)):
            payload = json.dumps(payload)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self._payload = payload
        self._error = error
        self._error_string = error_string
        self._redirect = QUrl(redirect) if redirect is not None else None
        self.finished.emit()


class FakeNetworkAccessManager(QNetworkAccessManager):
    """Records issued calls and lets tests decide how each one completes."""

    def __init__(self) -> None:
        super().__init__()
        self.replies: List[FakeReply] = []
        self.emit_finished_on_abort = True
        self.auto_payload: Any = None

    def get(self, request: QNetworkRequest) -> FakeReply:
        return self._reply("GET", request)

    def post(self, request: QNetworkRequest, body: bytes = b"") -> FakeReply:
        return self._reply("POST", request, bytes(body))

    def deleteResource(self, request: QNetworkRequest) -> FakeReply:  # noqa: N802
        return self._reply("DELETE", request)

    def _reply(self, operation: str, request: QNetworkRequest, body: bytes = b"") -> FakeReply:
        reply = FakeReply(self, operation, request, body)
        self.replies.append(reply)
        if self.auto_payload is not None:
            payload = self.auto_payload
            QTimer.singleShot(0, lambda: reply.complete(payload))
        return reply

    @property
    def last(self) -> FakeReply:
        return self.replies[-1]

    def pending(self) -> List[FakeReply]:
        return [reply for reply in self.replies if not reply.done]

    def respond(self, payload: Any = b"", **kwargs: Any) -> FakeReply:
        """Complete the oldest pending reply."""

        reply = self.pending()[0]
        reply.complete(payload, **kwargs)
        return reply


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture()
def network(qapp: QCoreApplication) -> FakeNetworkAccessManager:
    return FakeNetworkAccessManager()

