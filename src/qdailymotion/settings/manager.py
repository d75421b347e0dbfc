"""Settings file management with validation and change notifications."""

from __future__ import annotations

import logging
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtQml import QJSValue

from ..errors import SettingsLoadError, SettingsValidationError
from ..network.authentication import AuthenticationRequest
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults

logger = logging.getLogger(__name__)

APP_DIR_NAME = "QDailymotion"


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME / "settings.json"
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME / "settings.json"
    return Path.home() / ".config" / APP_DIR_NAME / "settings.json"


def _normalise(payload: Any) -> Any:
    """Convert QML values to JSON-friendly Python types."""

    if isinstance(payload, QJSValue):
        payload = payload.toVariant()
    if isinstance(payload, dict):
        return {str(k): _normalise(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [_normalise(item) for item in payload]
    if isinstance(payload, Path):
        return str(payload)
    return payload


class SettingsManager(QObject):
    """Load, validate and persist client credentials and listing defaults."""

    settingsChanged = Signal(str, object)  # noqa: N815

    def __init__(self, path: Path | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    @property
    def data(self) -> dict[str, Any]:
        """A copy of the whole settings document."""
        return deepcopy(self._data)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self.path
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"Cannot read {path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{path} does not contain a JSON object")
        else:
            payload = None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()
        logger.debug("Loaded settings from %s", path)

    @Slot(str, result="QVariant")
    @Slot(str, "QVariant", result="QVariant")
    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target: Any = self._data
        for part in key.split("."):
            if not isinstance(target, dict) or part not in target:
                return default
            target = target[part]
        return target

    @Slot(str, "QVariant")
    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        value = _normalise(value)
        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc
        self._write()
        self.settingsChanged.emit(key, value)

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def apply_credentials(self, target: QObject) -> None:
        """Copy the stored credentials onto a request or model."""

        auth = self._data.get("authentication", {})
        target.clientId = auth.get("client_id", "")
        target.clientSecret = auth.get("client_secret", "")
        target.accessToken = auth.get("access_token", "")
        target.refreshToken = auth.get("refresh_token", "")
        if isinstance(target, AuthenticationRequest):
            target.redirectUri = auth.get("redirect_uri", "")
            target.scopes = list(auth.get("scopes", []))

    def track_tokens(self, source: QObject) -> None:
        """Persist tokens whenever *source* obtains new ones."""

        def _store(key: str, value: str) -> None:
            if value != self.get(key):
                self.set(key, value)

        source.accessTokenChanged.connect(
            lambda: _store("authentication.access_token", source.accessToken)
        )
        source.refreshTokenChanged.connect(
            lambda: _store("authentication.refresh_token", source.refreshToken)
        )

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        write_json(self.path, self._data)


__all__ = ["SettingsManager", "default_settings_path"]
