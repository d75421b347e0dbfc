"""Model listing the playable streams of a video."""

from __future__ import annotations

from PySide6.QtCore import QObject, Slot

from ..network.streams import StreamsRequest
from .base import BaseListModel

STREAM_ROLES = ("id", "description", "ext", "width", "height", "url")


class StreamsModel(BaseListModel):
    """Streams of one video, best quality first.

    Example::

        model = StreamsModel()
        model.list("x2abcde")
    """

    request_class = StreamsRequest

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._video_id = ""
        self._set_roles(STREAM_ROLES)

    @property
    def video_id(self) -> str:
        return self._video_id

    @Slot(str)
    def list(self, video_id: str) -> None:
        """Clear the model and resolve the streams of *video_id*."""

        if self._is_loading():
            return
        self.clear()
        self._video_id = video_id
        self._issue(self._on_list_finished, self._request.list, video_id)

    @Slot()
    def reload(self) -> None:
        """Resolve the streams of the last video again."""

        if self._video_id:
            self.list(self._video_id)

    def _on_list_finished(self) -> None:
        result = self._ready_result()
        if isinstance(result, list):
            self._append_items(result)


__all__ = ["STREAM_ROLES", "StreamsModel"]
