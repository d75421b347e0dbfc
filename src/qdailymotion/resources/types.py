"""Static description of every Data API resource type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


class InsertKind(Enum):
    """How ``insert`` addresses the server for a resource type."""

    # POST a url-encoded representation to a collection.
    CREATE = "create"
    # POST ``<collection>/<id>`` to link an existing resource into a relation.
    LINK = "link"


LIST = "list"
GET = "get"
INSERT = "insert"
UPDATE = "update"
DEL = "del"

READ_ONLY: FrozenSet[str] = frozenset({LIST, GET})
ALL_OPERATIONS: FrozenSet[str] = frozenset({LIST, GET, INSERT, UPDATE, DEL})


@dataclass(frozen=True)
class ResourceType:
    """URL layout, capabilities and default roles of one resource type.

    ``collection`` is listed when no resource path is given, ``singular`` is
    the prefix of ``/<singular>/<id>`` item URLs and ``insert_path`` is the
    collection used by ``insert`` when the caller does not name one.
    """

    name: str
    collection: str
    singular: str
    operations: FrozenSet[str] = READ_ONLY
    roles: Tuple[str, ...] = ("id",)
    insert_kind: InsertKind = InsertKind.CREATE
    insert_path: str = ""
    identity_field: str = "id"

    def supports(self, operation: str) -> bool:
        return operation in self.operations


ACTIVITIES = ResourceType(
    "activities", "activities", "activity",
    roles=("id", "from_tile", "object_tile", "type"),
)
CHANNELS = ResourceType(
    "channels", "channels", "channel",
    roles=("id", "description", "name"),
)
COMMENTS = ResourceType(
    "comments", "comments", "comment",
    operations=ALL_OPERATIONS,
    roles=("id", "message", "owner"),
)
CONTESTS = ResourceType(
    "contests", "contests", "contest",
    roles=("id", "name", "owner"),
)
GROUPS = ResourceType(
    "groups", "groups", "group",
    roles=("id", "name", "owner"),
)
PLAYLISTS = ResourceType(
    "playlists", "playlists", "playlist",
    operations=ALL_OPERATIONS,
    roles=("id", "name", "owner"),
    insert_path="/me/playlists",
)
REPORTS = ResourceType(
    "reports", "reports", "report",
    operations=ALL_OPERATIONS,
)
STRONGTAGS = ResourceType(
    "strongtags", "strongtags", "strongtag",
    operations=ALL_OPERATIONS,
    roles=("id", "name"),
)
SUBTITLES = ResourceType(
    "subtitles", "subtitles", "subtitle",
    operations=ALL_OPERATIONS,
    roles=("id", "language", "url"),
)
USERS = ResourceType(
    "users", "users", "user",
    operations=ALL_OPERATIONS,
    roles=("id", "screenname"),
    insert_kind=InsertKind.LINK,
)
VIDEOS = ResourceType(
    "videos", "videos", "video",
    operations=ALL_OPERATIONS,
    roles=("id", "channel", "owner", "title"),
    insert_kind=InsertKind.LINK,
)
LOCALES = ResourceType(
    "locales", "locales", "locale",
    operations=frozenset({LIST}),
    roles=(
        "locale",
        "site_code",
        "language",
        "localized_language",
        "locally_localized_language",
        "country",
        "localized_country",
        "locally_localized_country",
        "currency",
    ),
    identity_field="locale",
)

RESOURCE_TYPES: Mapping[str, ResourceType] = MappingProxyType(
    {
        resource.name: resource
        for resource in (
            ACTIVITIES,
            CHANNELS,
            COMMENTS,
            CONTESTS,
            GROUPS,
            LOCALES,
            PLAYLISTS,
            REPORTS,
            STRONGTAGS,
            SUBTITLES,
            USERS,
            VIDEOS,
        )
    }
)


def resource_type(name: str) -> ResourceType:
    """Return the :class:`ResourceType` registered under *name*."""

    try:
        return RESOURCE_TYPES[name]
    except KeyError:
        raise KeyError(f"Unknown resource type: {name!r}") from None


__all__ = [
    "ACTIVITIES",
    "ALL_OPERATIONS",
    "CHANNELS",
    "COMMENTS",
    "CONTESTS",
    "DEL",
    "GET",
    "GROUPS",
    "INSERT",
    "InsertKind",
    "LIST",
    "LOCALES",
    "PLAYLISTS",
    "READ_ONLY",
    "REPORTS",
    "RESOURCE_TYPES",
    "ResourceType",
    "STRONGTAGS",
    "SUBTITLES",
    "UPDATE",
    "USERS",
    "VIDEOS",
    "resource_type",
]
