from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtQml", reason="Qt QML module not available", exc_type=ImportError)

from qdailymotion.models import LocalesModel, VideosModel
from qdailymotion.network import AuthenticationRequest
from qdailymotion.qml import plugin
from qdailymotion.resources import REQUEST_CLASSES, VideosRequest


def test_qml_types_cover_requests_and_models() -> None:
    types = plugin.qml_types()

    assert types["AuthenticationRequest"] is AuthenticationRequest
    assert types["VideosRequest"] is VideosRequest
    assert types["VideosModel"] is VideosModel
    assert types["LocalesModel"] is LocalesModel
    for cls in REQUEST_CLASSES.values():
        assert types[cls.__name__] is cls


def test_register_types(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(plugin, "qmlRegisterType", lambda *args: calls.append(args) or 0)

    types = plugin.register_types()

    assert len(calls) == len(types)
    assert (VideosModel, "QDailymotion", 1, 0, "VideosModel") in calls
