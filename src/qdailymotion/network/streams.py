"""Resolve direct stream URLs for a video from its embed page."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from PySide6.QtCore import QObject, QUrl, Slot
from PySide6.QtNetwork import QNetworkCookie

from ..config import FAMILY_FILTER_COOKIE, VIDEO_PAGE_URL
from ..utils.jsonio import parse_json
from .enums import Error, Status
from .request import Request, server_error_message

logger = logging.getLogger(__name__)

# The player configuration is passed as the second argument of this call in
# an inline script of the embed page.
PLAYER_CONFIG_START = "dmp.create(document.getElementById('player'), "
PLAYER_CONFIG_END = ");\n"

MP4_TYPE = "video/mp4"


@dataclass(frozen=True)
class StreamFormat:
    """Static description of one quality offered by the embed player."""

    id: str
    description: str
    ext: str
    width: int
    height: int


FORMATS: Mapping[str, StreamFormat] = MappingProxyType(
    {
        "144": StreamFormat("144", "H264 audio/video", "mp4", 256, 144),
        "240": StreamFormat("240", "H264 audio/video", "mp4", 426, 240),
        "380": StreamFormat("380", "H264 audio/video", "mp4", 640, 360),
        "480": StreamFormat("480", "H264 audio/video", "mp4", 848, 480),
        "720": StreamFormat("720", "H264 audio/video", "mp4", 1280, 720),
        "1080": StreamFormat("1080", "H264 audio/video", "mp4", 1920, 1080),
        "1440": StreamFormat("1440", "H264 audio/video", "mp4", 2560, 1440),
        "2160": StreamFormat("2160", "H264 audio/video", "mp4", 3840, 2160),
    }
)

# Highest quality first.
FORMAT_ORDER: Tuple[str, ...] = ("2160", "1440", "1080", "720", "480", "380", "240", "144")


def extract_player_config(page: str) -> Tuple[Optional[Dict[str, Any]], bool]:
    """Return the player configuration embedded in *page* as ``(config, ok)``."""

    start = page.find(PLAYER_CONFIG_START)
    if start < 0:
        return None, False
    start += len(PLAYER_CONFIG_START)
    end = page.find(PLAYER_CONFIG_END, start)
    if end < 0:
        return None, False
    config, ok = parse_json(page[start:end])
    if not ok or not isinstance(config, dict):
        return None, False
    return config, True


def streams_from_config(config: Mapping[str, Any]) -> Optional[List[Dict[str, Any]]]:
    """Flatten ``metadata.qualities`` into stream records, best quality first.

    ``None`` is returned when the configuration carries no quality data.
    """

    metadata = config.get("metadata")
    if not isinstance(metadata, dict):
        return None
    qualities = metadata.get("qualities")
    if not isinstance(qualities, dict) or not qualities:
        return None

    streams: List[Dict[str, Any]] = []
    for quality in FORMAT_ORDER:
        for source in qualities.get(quality) or []:
            if not isinstance(source, dict) or source.get("type") != MP4_TYPE:
                continue
            url = source.get("url")
            if not url:
                continue
            stream = asdict(FORMATS[quality])
            stream["url"] = url
            streams.append(stream)
            break
    return streams


class StreamsRequest(Request):
    """Request the list of playable streams for a Dailymotion video.

    ``result`` is a list of ``{id, description, ext, width, height, url}``
    records ordered from the highest to the lowest quality.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._video_id = ""

    @Slot(str)
    def list(self, video_id: str) -> None:
        """Request the streams of the video identified by *video_id*."""

        if self._status == Status.Loading:
            return
        self._video_id = video_id
        self.url = f"{VIDEO_PAGE_URL}/{video_id}"
        self.data = None
        name, value = FAMILY_FILTER_COOKIE
        jar = self.network_access_manager().cookieJar()
        jar.setCookiesFromUrl([QNetworkCookie(name.encode(), value.encode())], QUrl(self._url))
        self.get(False)

    def _handle_response(self, body: bytes) -> None:
        page = body.decode("utf-8", errors="replace")
        config, ok = extract_player_config(page)
        if not ok:
            self._finish(Status.Failed, Error.UnknownContentError, "Unable to find video player data")
            return

        message = server_error_message(config)
        metadata = config.get("metadata")
        if message is None and isinstance(metadata, dict):
            message = server_error_message(metadata)
        if message is not None:
            self._finish(Status.Failed, Error.UnknownContentError, message)
            return

        streams = streams_from_config(config)
        if streams is None:
            self._finish(Status.Failed, Error.UnknownContentError, "No video streams found")
            return
        logger.debug("Found %d streams for video %s", len(streams), self._video_id)
        self._result = streams
        self._finish(Status.Ready, Error.NoError, "")


__all__ = [
    "FORMATS",
    "FORMAT_ORDER",
    "StreamFormat",
    "StreamsRequest",
    "extract_player_config",
    "streams_from_config",
]
