"""Expose QDailymotion requests and models to QML."""

from __future__ import annotations

import logging
from typing import Dict

from PySide6.QtQml import qmlRegisterType

from ..config import QML_URI, QML_VERSION
from ..models import (
    ActivitiesModel,
    ChannelsModel,
    CommentsModel,
    ContestsModel,
    GroupsModel,
    LocalesModel,
    PlaylistsModel,
    ReportsModel,
    ResourcesModel,
    StreamsModel,
    StrongtagsModel,
    SubtitlesModel,
    UsersModel,
    VideosModel,
)
from ..network import AuthenticationRequest, StreamsRequest
from ..resources import REQUEST_CLASSES, ResourcesRequest

logger = logging.getLogger(__name__)


def qml_types() -> Dict[str, type]:
    """Return every QML element name mapped to its Python class."""

    types: Dict[str, type] = {
        "AuthenticationRequest": AuthenticationRequest,
        "ResourcesRequest": ResourcesRequest,
        "StreamsRequest": StreamsRequest,
        "ResourcesModel": ResourcesModel,
        "StreamsModel": StreamsModel,
        "LocalesModel": LocalesModel,
    }
    for cls in REQUEST_CLASSES.values():
        types[cls.__name__] = cls
    for cls in (
        ActivitiesModel,
        ChannelsModel,
        CommentsModel,
        ContestsModel,
        GroupsModel,
        PlaylistsModel,
        ReportsModel,
        StrongtagsModel,
        SubtitlesModel,
        UsersModel,
        VideosModel,
    ):
        types[cls.__name__] = cls
    return types


def register_types(
    uri: str = QML_URI, major: int = QML_VERSION[0], minor: int = QML_VERSION[1]
) -> Dict[str, type]:
    """Register the QDailymotion elements under *uri* and return them."""

    types = qml_types()
    for name, cls in types.items():
        qmlRegisterType(cls, uri, major, minor, name)
    logger.debug("Registered %d QML types under %s %d.%d", len(types), uri, major, minor)
    return types


__all__ = ["qml_types", "register_types"]
