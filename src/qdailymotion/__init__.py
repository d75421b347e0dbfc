"""Qt requests and list models for the Dailymotion Data API."""

from .errors import (
    InvalidArgumentError,
    QDailymotionError,
    SettingsError,
    SettingsLoadError,
    SettingsValidationError,
    UnsupportedOperationError,
)
from .models import (
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
from .network import AuthenticationRequest, Error, Operation, Request, Status, StreamsRequest
from .resources import (
    ActivitiesRequest,
    ChannelsRequest,
    CommentsRequest,
    ContestsRequest,
    GroupsRequest,
    LocalesRequest,
    PlaylistsRequest,
    ReportsRequest,
    ResourcesRequest,
    StrongtagsRequest,
    SubtitlesRequest,
    UsersRequest,
    VideosRequest,
)

__version__ = "0.1.0"

__all__ = [
    "ActivitiesModel",
    "ActivitiesRequest",
    "AuthenticationRequest",
    "ChannelsModel",
    "ChannelsRequest",
    "CommentsModel",
    "CommentsRequest",
    "ContestsModel",
    "ContestsRequest",
    "Error",
    "GroupsModel",
    "GroupsRequest",
    "InvalidArgumentError",
    "LocalesModel",
    "LocalesRequest",
    "Operation",
    "PlaylistsModel",
    "PlaylistsRequest",
    "QDailymotionError",
    "ReportsModel",
    "ReportsRequest",
    "Request",
    "ResourcesModel",
    "ResourcesRequest",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "Status",
    "StreamsModel",
    "StreamsRequest",
    "StrongtagsModel",
    "StrongtagsRequest",
    "SubtitlesModel",
    "SubtitlesRequest",
    "UnsupportedOperationError",
    "UsersModel",
    "UsersRequest",
    "VideosModel",
    "VideosRequest",
    "__version__",
]
