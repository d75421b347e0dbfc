"""List models over Data API resource collections."""

from __future__ import annotations

from functools import partial
from typing import Any, Iterable, List, Mapping, Optional

from PySide6.QtCore import Slot

from ..network.encoding import join_path
from ..resources.requests import (
    ActivitiesRequest,
    ChannelsRequest,
    CommentsRequest,
    ContestsRequest,
    GroupsRequest,
    PlaylistsRequest,
    ReportsRequest,
    ResourcesRequest,
    StrongtagsRequest,
    SubtitlesRequest,
    UsersRequest,
    VideosRequest,
)
from ..resources.types import InsertKind, ResourceType
from .base import PagedListModel, unique_fields


class ResourcesModel(PagedListModel):
    """Model over any resource path, with roles taken from the first record.

    Example::

        model = ResourcesModel()
        model.list("/user/42/videos", {"limit": 20}, ["title", "duration"])
    """

    request_class = ResourcesRequest

    def _prepare_fields(self, fields: List[str]) -> List[str]:
        if fields and "id" not in fields:
            fields.append("id")
        return fields

    @Slot(str)
    @Slot(str, "QVariantMap")
    @Slot(str, "QVariantMap", "QStringList")
    def list(
        self,
        resource_path: str,
        filters: Optional[Mapping[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> None:
        """Clear the model and list *resource_path*."""
        self._list(resource_path, filters, fields)

    @Slot("QVariantMap")
    @Slot(int, str)
    def insert(self, resource: Mapping[str, Any] | int, resource_path: str = "") -> None:
        """Create *resource* in the current path, or link the record at row *resource*."""

        if self._is_loading():
            return
        if isinstance(resource, int):
            write_path = resource_path
            target = join_path(resource_path, self._identity(resource))
            self._write_resource_path = write_path
            self._issue(partial(self._on_insert_finished, write_path), self._request.insert, target)
            return
        write_path = self._resource_path
        self._write_resource_path = write_path
        self._issue(
            partial(self._on_insert_finished, write_path),
            self._request.insert,
            dict(resource),
            write_path,
        )

    @Slot(int, "QVariantMap")
    def update(self, row: int, resource: Mapping[str, Any]) -> None:
        """Update the record at *row* with the fields of *resource*."""

        if self._is_loading():
            return
        identity = self._identity(row)
        self._write_resource_path = self._resource_path
        self._issue(
            partial(self._on_update_finished, identity, dict(resource)),
            self._request.update,
            join_path(self._resource_path, identity),
            dict(resource),
        )

    @Slot(int, name="del")
    @Slot(int, str, name="del")
    def del_(self, row: int, resource_path: str = "") -> None:
        """Delete the record at *row* from *resource_path*, or from the current path."""

        if self._is_loading():
            return
        identity = self._identity(row)
        write_path = resource_path or self._resource_path
        self._write_resource_path = write_path
        self._issue(
            partial(self._on_delete_finished, identity, write_path),
            self._request.del_,
            join_path(write_path, identity),
        )


class ResourceModel(PagedListModel):
    """Model over one resource type.

    Subclasses set ``request_class`` to a :class:`ResourceRequest` subclass;
    its resource type supplies the default roles and the insert flavour.
    """

    @property
    def resource_type(self) -> ResourceType:
        return self._request.resource_type

    def _prepare_fields(self, fields: List[str]) -> List[str]:
        if fields:
            return unique_fields([self.identity_field, *fields])
        return fields

    def _roles_for(self, fields: List[str]) -> Optional[List[str]]:
        return list(fields) if fields else list(self.resource_type.roles)

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
        """Clear the model and list *resource_path*, or the type's collection."""
        self._list(resource_path, filters, fields)

    @Slot("QVariantMap")
    @Slot(int, str)
    def insert(self, resource: Mapping[str, Any] | int, resource_path: str = "") -> None:
        """Create *resource*, or link the record at row *resource* into *resource_path*.

        Linking applies to types whose inserts are relation links (users and
        videos); the linked record is only prepended when *resource_path* is
        the path currently listed.
        """

        if self._is_loading():
            return
        if self.resource_type.insert_kind == InsertKind.LINK:
            write_path = resource_path
            if isinstance(resource, int):
                resource = self._identity(resource)
        else:
            write_path = self._resource_path
        self._write_resource_path = write_path
        self._issue(
            partial(self._on_insert_finished, write_path),
            self._request.insert,
            resource,
            write_path,
        )

    @Slot(int, "QVariantMap")
    def update(self, row: int, resource: Mapping[str, Any]) -> None:
        """Update the record at *row* with the fields of *resource*."""

        if self._is_loading():
            return
        identity = self._identity(row)
        self._issue(
            partial(self._on_update_finished, identity, dict(resource)),
            self._request.update,
            identity,
            dict(resource),
        )

    @Slot(int, name="del")
    @Slot(int, str, name="del")
    def del_(self, row: int, resource_path: str = "") -> None:
        """Delete the record at *row*, or unlink it from *resource_path*."""

        if self._is_loading():
            return
        identity = self._identity(row)
        self._write_resource_path = resource_path
        self._issue(
            partial(self._on_delete_finished, identity, resource_path),
            self._request.del_,
            identity,
            resource_path,
        )


# ---------------------------------------------------------------------------
# Named models
# ---------------------------------------------------------------------------


class ActivitiesModel(ResourceModel):
    request_class = ActivitiesRequest


class ChannelsModel(ResourceModel):
    request_class = ChannelsRequest


class CommentsModel(ResourceModel):
    request_class = CommentsRequest


class ContestsModel(ResourceModel):
    request_class = ContestsRequest


class GroupsModel(ResourceModel):
    request_class = GroupsRequest


class PlaylistsModel(ResourceModel):
    request_class = PlaylistsRequest


class ReportsModel(ResourceModel):
    request_class = ReportsRequest


class StrongtagsModel(ResourceModel):
    request_class = StrongtagsRequest


class SubtitlesModel(ResourceModel):
    request_class = SubtitlesRequest


class UsersModel(ResourceModel):
    request_class = UsersRequest


class VideosModel(ResourceModel):
    request_class = VideosRequest


__all__ = [
    "ActivitiesModel",
    "ChannelsModel",
    "CommentsModel",
    "ContestsModel",
    "GroupsModel",
    "PlaylistsModel",
    "ReportsModel",
    "ResourceModel",
    "ResourcesModel",
    "StrongtagsModel",
    "SubtitlesModel",
    "UsersModel",
    "VideosModel",
]
