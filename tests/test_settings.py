from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtQml", reason="Qt QML module not available", exc_type=ImportError)
pytest.importorskip("jsonschema", reason="jsonschema is required for settings tests", exc_type=ImportError)


from qdailymotion.errors import SettingsLoadError, SettingsValidationError
from qdailymotion.network import AuthenticationRequest, Request
from qdailymotion.settings import DEFAULT_SETTINGS, SettingsManager, default_settings_path
from qdailymotion.settings.schema import merge_with_defaults


@pytest.fixture()
def settings(tmp_path: Path, qapp) -> SettingsManager:
    manager = SettingsManager(tmp_path / "settings.json")
    manager.load()
    return manager


def test_load_writes_defaults(tmp_path: Path, qapp) -> None:
    path = tmp_path / "settings.json"
    manager = SettingsManager(path)
    manager.load()

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_SETTINGS
    assert manager.data == DEFAULT_SETTINGS


def test_load_merges_partial_file(tmp_path: Path, qapp) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"listing": {"limit": 50}}), encoding="utf-8")

    manager = SettingsManager(path)
    manager.load()
    assert manager.get("listing.limit") == 50
    assert manager.get("listing.family_filter") is True


def test_load_rejects_invalid_json(tmp_path: Path, qapp) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsLoadError):
        SettingsManager(path).load()


def test_load_rejects_non_object(tmp_path: Path, qapp) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsLoadError):
        SettingsManager(path).load()


def test_load_rejects_schema_violations(tmp_path: Path, qapp) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"listing": {"limit": 0}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsManager(path).load()


def test_dotted_get_and_set(settings: SettingsManager) -> None:
    changes = []
    settings.settingsChanged.connect(lambda key, value: changes.append((key, value)))
    settings.set("authentication.client_id", "client")

    assert settings.get("authentication.client_id") == "client"
    assert settings.get("authentication.missing", "fallback") == "fallback"
    assert settings.get("nothing.here") is None
    assert changes == [("authentication.client_id", "client")]

    stored = json.loads(settings.path.read_text(encoding="utf-8"))
    assert stored["authentication"]["client_id"] == "client"


def test_set_rejects_invalid_value(settings: SettingsManager) -> None:
    changes = []
    settings.settingsChanged.connect(lambda key, value: changes.append((key, value)))
    with pytest.raises(SettingsValidationError):
        settings.set("listing.limit", "many")
    assert settings.get("listing.limit") == 20
    assert changes == []


def test_scopes_accept_joined_string() -> None:
    merged = merge_with_defaults({"authentication": {"scopes": "userinfo+manage_videos email"}})
    assert merged["authentication"]["scopes"] == ["userinfo", "manage_videos", "email"]


def test_apply_credentials(settings: SettingsManager) -> None:
    settings.set("authentication.client_id", "client")
    settings.set("authentication.client_secret", "secret")
    settings.set("authentication.access_token", "token-1")
    settings.set("authentication.redirect_uri", "https://example.com/callback")
    settings.set("authentication.scopes", ["userinfo"])

    request = Request()
    settings.apply_credentials(request)
    assert (request.clientId, request.clientSecret, request.accessToken) == ("client", "secret", "token-1")

    auth = AuthenticationRequest()
    settings.apply_credentials(auth)
    assert auth.redirectUri == "https://example.com/callback"
    assert auth.scopes == ["userinfo"]


def test_track_tokens_persists_new_tokens(settings: SettingsManager) -> None:
    request = Request()
    settings.track_tokens(request)

    request.accessToken = "token-2"
    request.refreshToken = "refresh-2"

    assert settings.get("authentication.access_token") == "token-2"
    assert settings.get("authentication.refresh_token") == "refresh-2"
    stored = json.loads(settings.path.read_text(encoding="utf-8"))
    assert stored["authentication"]["access_token"] == "token-2"


def test_default_path_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("qdailymotion.settings.manager.os.name", "posix")
    monkeypatch.setattr("qdailymotion.settings.manager.sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_settings_path() == tmp_path / "QDailymotion" / "settings.json"
