from __future__ import annotations

import pytest

from qdailymotion.errors import InvalidArgumentError, UnsupportedOperationError
from qdailymotion.network import Status
from qdailymotion.resources import (
    RESOURCE_TYPES,
    ChannelsRequest,
    CommentsRequest,
    InsertKind,
    LocalesRequest,
    PlaylistsRequest,
    ResourcesRequest,
    UsersRequest,
    VideosRequest,
    resource_type,
)
from qdailymotion.resources.requests import REQUEST_CLASSES


def _bind(cls, network):
    request = cls()
    request.set_network_access_manager(network)
    request.accessToken = "token-1"
    return request


def test_every_resource_type_has_a_request_class() -> None:
    assert set(REQUEST_CLASSES) == set(RESOURCE_TYPES)
    for name, cls in REQUEST_CLASSES.items():
        assert cls.resource_type is resource_type(name)


def test_unknown_resource_type_is_rejected() -> None:
    with pytest.raises(KeyError):
        resource_type("podcasts")


def test_generic_list_builds_query(network) -> None:
    request = _bind(ResourcesRequest, network)
    request.list("/user/42/videos", {"limit": 2, "page": 1}, ["id", "title"])

    reply = network.last
    assert reply.operation == "GET"
    assert reply.path == "/user/42/videos"
    assert reply.query() == {"limit": "2", "page": "1", "fields": "id,title"}
    assert reply.header("Authorization") == "Bearer token-1"


def test_generic_writes(network) -> None:
    request = _bind(ResourcesRequest, network)

    request.insert("/me/favorites/x42")
    assert (network.last.operation, network.last.path, network.last.body) == ("POST", "/me/favorites/x42", b"")
    network.respond({})

    request.insert({"name": "Mix"}, "/me/playlists")
    assert network.last.path == "/me/playlists"
    assert network.last.form() == {"name": "Mix"}
    network.respond({"id": "p1"})

    request.update("/playlist/p1", {"name": "Renamed"})
    assert (network.last.operation, network.last.path) == ("POST", "/playlist/p1")
    assert network.last.form() == {"name": "Renamed"}
    network.respond({})

    request.del_("/me/favorites/x42")
    assert (network.last.operation, network.last.path) == ("DELETE", "/me/favorites/x42")


def test_typed_list_defaults_to_collection(network) -> None:
    request = _bind(VideosRequest, network)
    request.list()
    assert network.last.path == "/videos"
    network.respond({"list": []})

    request.list("/user/42/videos", {"limit": 5})
    assert network.last.path == "/user/42/videos"
    assert network.last.query() == {"limit": "5"}


def test_typed_get_update_and_delete_use_item_urls(network) -> None:
    request = _bind(CommentsRequest, network)

    request.get("c1", None, ["id", "message"])
    assert network.last.path == "/comment/c1"
    assert network.last.query() == {"fields": "id,message"}
    network.respond({"id": "c1"})

    request.update("c1", {"message": "Edited"})
    assert (network.last.operation, network.last.path) == ("POST", "/comment/c1")
    assert network.last.form() == {"message": "Edited"}
    network.respond({})

    request.del_("c1")
    assert (network.last.operation, network.last.path) == ("DELETE", "/comment/c1")


def test_delete_from_relation(network) -> None:
    request = _bind(VideosRequest, network)
    request.del_("x42", "/me/favorites")
    assert network.last.path == "/me/favorites/x42"


def test_create_insert(network) -> None:
    request = _bind(CommentsRequest, network)
    request.insert({"message": "Nice"}, "/video/x42/comments")
    assert network.last.path == "/video/x42/comments"
    assert network.last.form() == {"message": "Nice"}
    network.respond({"id": "c2"})
    assert request.status == Status.Ready
    assert request.result == {"id": "c2"}


def test_playlist_insert_defaults_to_own_playlists(network) -> None:
    request = _bind(PlaylistsRequest, network)
    request.insert({"name": "Mix"})
    assert network.last.path == "/me/playlists"


def test_link_insert(network) -> None:
    assert UsersRequest.resource_type.insert_kind == InsertKind.LINK
    request = _bind(UsersRequest, network)
    request.insert("u7", "/me/following")
    assert (network.last.operation, network.last.path, network.last.body) == ("POST", "/me/following/u7", b"")


def test_link_insert_requires_id_and_path(network) -> None:
    request = _bind(VideosRequest, network)
    with pytest.raises(InvalidArgumentError):
        request.insert("x42")
    with pytest.raises(InvalidArgumentError):
        request.insert({"title": "New"}, "/me/favorites")
    assert network.replies == []


def test_create_insert_requires_mapping(network) -> None:
    request = _bind(CommentsRequest, network)
    with pytest.raises(InvalidArgumentError):
        request.insert("c1", "/video/x42/comments")
    assert network.replies == []


@pytest.mark.parametrize(
    ("cls", "call"),
    [
        (ChannelsRequest, lambda request: request.insert({"name": "New"})),
        (ChannelsRequest, lambda request: request.update("c1", {"name": "New"})),
        (ChannelsRequest, lambda request: request.del_("c1")),
        (LocalesRequest, lambda request: request.get("en_US")),
    ],
)
def test_unsupported_operations_raise(cls, call, network) -> None:
    request = _bind(cls, network)
    with pytest.raises(UnsupportedOperationError):
        call(request)
    assert network.replies == []
    assert request.status == Status.Null


def test_locales_list(network) -> None:
    request = _bind(LocalesRequest, network)
    request.list()
    assert network.last.path == "/locales"
    network.respond({"list": [{"locale": "en_US"}]})
    assert request.result["list"][0]["locale"] == "en_US"
