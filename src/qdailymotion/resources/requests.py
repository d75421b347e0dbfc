"""Requests addressing Data API resources by path or by resource type."""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, Mapping, Optional

from PySide6.QtCore import Slot

from ..errors import InvalidArgumentError, UnsupportedOperationError
from ..network.encoding import api_path, build_api_url, encode_form, join_path
from ..network.enums import Operation
from ..network.request import Request
from .types import (
    ACTIVITIES,
    CHANNELS,
    COMMENTS,
    CONTESTS,
    DEL,
    GET,
    GROUPS,
    INSERT,
    LIST,
    LOCALES,
    PLAYLISTS,
    REPORTS,
    STRONGTAGS,
    SUBTITLES,
    UPDATE,
    USERS,
    VIDEOS,
    InsertKind,
    ResourceType,
)


class ResourcesRequest(Request):
    """Generic request against any Data API resource path.

    Example::

        request = ResourcesRequest()
        request.finished.connect(on_finished)
        request.list("/videos", {"search": "Qt", "limit": 10}, ["id", "title"])
    """

    @Slot(str)
    @Slot(str, "QVariantMap")
    @Slot(str, "QVariantMap", "QStringList")
    def list(
        self,
        resource_path: str,
        filters: Optional[Mapping[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> None:
        """Request a page of resources from *resource_path*."""
        self._start(Operation.Get, build_api_url(resource_path, filters, fields))

    @Slot(str)
    @Slot(str, "QVariantMap")
    @Slot(str, "QVariantMap", "QStringList")
    def get(
        self,
        resource_path: str,
        filters: Optional[Mapping[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> None:
        """Retrieve the single resource at *resource_path*."""
        self._start(Operation.Get, build_api_url(resource_path, filters, fields))

    @Slot(str)
    @Slot("QVariantMap", str)
    def insert(self, resource: Mapping[str, Any] | str, resource_path: str = "") -> None:
        """Insert into a collection.

        ``insert("/me/favorites/<id>")`` links an existing resource with an
        empty body, ``insert({...}, "/me/playlists")`` creates a new one.
        """

        if isinstance(resource, str):
            self._start(Operation.Post, build_api_url(resource))
            return
        self._start(Operation.Post, build_api_url(resource_path), encode_form(resource))

    @Slot(str, "QVariantMap")
    def update(self, resource_path: str, resource: Mapping[str, Any]) -> None:
        """Update the resource at *resource_path* with the fields of *resource*."""
        self._start(Operation.Post, build_api_url(resource_path), encode_form(resource))

    @Slot(str, name="del")
    def del_(self, resource_path: str) -> None:
        """Delete the resource at *resource_path*."""
        self._start(Operation.Delete, build_api_url(resource_path))


class ResourceRequest(Request):
    """Request bound to one :class:`ResourceType`.

    Subclasses only choose the ``resource_type``; URLs, capabilities and
    the insert flavour all come from that record.
    """

    resource_type: ClassVar[ResourceType]

    def _require(self, operation: str) -> None:
        resource_type = self.resource_type
        if not resource_type.supports(operation):
            raise UnsupportedOperationError(
                f"{resource_type.name} does not support the {operation!r} operation"
            )

    def _item_path(self, resource_id: str, resource_path: str = "") -> str:
        return join_path(api_path(resource_path or self.resource_type.singular), resource_id)

    @Slot()
    @Slot(str)
    @Slot(str, "QVariantMap")
    @Slot(str, "QVariantMap", "QStringList")
    def list(
        self,
        resource_path: str = "",
        filters: Optional[Mapping[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> None:
        """Request a page from *resource_path*, or from the type's collection."""

        self._require(LIST)
        path = resource_path or self.resource_type.collection
        self._start(Operation.Get, build_api_url(path, filters, fields))

    @Slot(str)
    @Slot(str, "QVariantMap")
    @Slot(str, "QVariantMap", "QStringList")
    def get(
        self,
        resource_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> None:
        """Retrieve the resource identified by *resource_id*."""

        self._require(GET)
        self._start(Operation.Get, build_api_url(self._item_path(resource_id), filters, fields))

    @Slot("QVariantMap")
    @Slot("QVariantMap", str)
    @Slot(str, str)
    def insert(self, resource: Mapping[str, Any] | str, resource_path: str = "") -> None:
        """Create *resource*, or link the resource with id *resource* into *resource_path*."""

        self._require(INSERT)
        resource_type = self.resource_type
        if resource_type.insert_kind == InsertKind.LINK:
            if not isinstance(resource, str) or not resource_path:
                raise InvalidArgumentError(
                    f"Inserting {resource_type.name} needs a resource id and a resource path"
                )
            self._start(Operation.Post, build_api_url(join_path(api_path(resource_path), resource)))
            return

        if not isinstance(resource, Mapping):
            raise InvalidArgumentError(f"Inserting {resource_type.name} needs a resource mapping")
        path = resource_path or resource_type.insert_path or resource_type.collection
        self._start(Operation.Post, build_api_url(path), encode_form(resource))

    @Slot(str, "QVariantMap")
    def update(self, resource_id: str, resource: Mapping[str, Any]) -> None:
        """Update the resource identified by *resource_id*."""

        self._require(UPDATE)
        self._start(Operation.Post, build_api_url(self._item_path(resource_id)), encode_form(resource))

    @Slot(str, name="del")
    @Slot(str, str, name="del")
    def del_(self, resource_id: str, resource_path: str = "") -> None:
        """Delete *resource_id*, or unlink it from *resource_path*."""

        self._require(DEL)
        self._start(Operation.Delete, build_api_url(self._item_path(resource_id, resource_path)))


# ---------------------------------------------------------------------------
# Named requests
# ---------------------------------------------------------------------------


class ActivitiesRequest(ResourceRequest):
    resource_type = ACTIVITIES


class ChannelsRequest(ResourceRequest):
    resource_type = CHANNELS


class CommentsRequest(ResourceRequest):
    resource_type = COMMENTS


class ContestsRequest(ResourceRequest):
    resource_type = CONTESTS


class GroupsRequest(ResourceRequest):
    resource_type = GROUPS


class PlaylistsRequest(ResourceRequest):
    resource_type = PLAYLISTS


class ReportsRequest(ResourceRequest):
    resource_type = REPORTS


class StrongtagsRequest(ResourceRequest):
    resource_type = STRONGTAGS


class SubtitlesRequest(ResourceRequest):
    resource_type = SUBTITLES


class UsersRequest(ResourceRequest):
    resource_type = USERS


class VideosRequest(ResourceRequest):
    resource_type = VIDEOS


class LocalesRequest(ResourceRequest):
    """Request the locales supported by Dailymotion."""

    resource_type = LOCALES

    @Slot()
    def list(self) -> None:  # type: ignore[override]
        super().list()


REQUEST_CLASSES: Mapping[str, type] = {
    cls.resource_type.name: cls
    for cls in (
        ActivitiesRequest,
        ChannelsRequest,
        CommentsRequest,
        ContestsRequest,
        GroupsRequest,
        LocalesRequest,
        PlaylistsRequest,
        ReportsRequest,
        StrongtagsRequest,
        SubtitlesRequest,
        UsersRequest,
        VideosRequest,
    )
}


__all__ = [
    "ActivitiesRequest",
    "ChannelsRequest",
    "CommentsRequest",
    "ContestsRequest",
    "GroupsRequest",
    "LocalesRequest",
    "PlaylistsRequest",
    "REQUEST_CLASSES",
    "ReportsRequest",
    "ResourceRequest",
    "ResourcesRequest",
    "StrongtagsRequest",
    "SubtitlesRequest",
    "UsersRequest",
    "VideosRequest",
]
