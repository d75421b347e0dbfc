"""Model listing the locales supported by Dailymotion."""

from __future__ import annotations

from typing import Mapping

from PySide6.QtCore import QObject, Slot

from ..resources.requests import LocalesRequest
from ..resources.types import LOCALES
from .base import BaseListModel


class LocalesModel(BaseListModel):
    """Flat list of locales; the Data API returns them in a single page."""

    request_class = LocalesRequest
    identity_field = LOCALES.identity_field

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._set_roles(LOCALES.roles)

    @Slot()
    def list(self) -> None:
        """Clear the model and request the locales."""

        if self._is_loading():
            return
        self.clear()
        self._issue(self._on_list_finished, self._request.list)

    @Slot()
    def reload(self) -> None:
        self.list()

    def _on_list_finished(self) -> None:
        result = self._ready_result()
        if isinstance(result, Mapping):
            self._append_items(result.get("list") or [])


__all__ = ["LocalesModel"]
