"""Resource types and the requests that address them."""

from .requests import (
    REQUEST_CLASSES,
    ActivitiesRequest,
    ChannelsRequest,
    CommentsRequest,
    ContestsRequest,
    GroupsRequest,
    LocalesRequest,
    PlaylistsRequest,
    ReportsRequest,
    ResourceRequest,
    ResourcesRequest,
    StrongtagsRequest,
    SubtitlesRequest,
    UsersRequest,
    VideosRequest,
)
from .types import RESOURCE_TYPES, InsertKind, ResourceType, resource_type

__all__ = [
    "ActivitiesRequest",
    "ChannelsRequest",
    "CommentsRequest",
    "ContestsRequest",
    "GroupsRequest",
    "InsertKind",
    "LocalesRequest",
    "PlaylistsRequest",
    "REQUEST_CLASSES",
    "RESOURCE_TYPES",
    "ReportsRequest",
    "ResourceRequest",
    "ResourceType",
    "ResourcesRequest",
    "StrongtagsRequest",
    "SubtitlesRequest",
    "UsersRequest",
    "VideosRequest",
    "resource_type",
]
