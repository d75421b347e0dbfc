"""Qt list models backed by QDailymotion requests."""

from .base import BaseListModel, PagedListModel
from .locales import LocalesModel
from .resources import (
    ActivitiesModel,
    ChannelsModel,
    CommentsModel,
    ContestsModel,
    GroupsModel,
    PlaylistsModel,
    ReportsModel,
    ResourceModel,
    ResourcesModel,
    StrongtagsModel,
    SubtitlesModel,
    UsersModel,
    VideosModel,
)
from .streams import StreamsModel

__all__ = [
    "ActivitiesModel",
    "BaseListModel",
    "ChannelsModel",
    "CommentsModel",
    "ContestsModel",
    "GroupsModel",
    "LocalesModel",
    "PagedListModel",
    "PlaylistsModel",
    "ReportsModel",
    "ResourceModel",
    "ResourcesModel",
    "StreamsModel",
    "StrongtagsModel",
    "SubtitlesModel",
    "UsersModel",
    "VideosModel",
]
