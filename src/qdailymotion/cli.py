"""Typer-based CLI entry point."""

from __future__ import annotations

import sys
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer
from PySide6.QtCore import QCoreApplication, QEventLoop
from rich import print, print_json
from rich.table import Table

from .errors import InvalidArgumentError, QDailymotionError, SettingsError
from .network import AuthenticationRequest, Request, Status, StreamsRequest
from .resources import (
    REQUEST_CLASSES,
    RESOURCE_TYPES,
    InsertKind,
    LocalesRequest,
    ResourcesRequest,
)
from .settings import SettingsManager
from .utils.jsonio import parse_json
from .utils.logging import setup_logging

app = typer.Typer(help="Command-line client for the Dailymotion Data API")
auth_app = typer.Typer(help="Obtain and revoke access tokens")
config_app = typer.Typer(help="Inspect and change the stored settings")
app.add_typer(auth_app, name="auth")
app.add_typer(config_app, name="config")

_state: Dict[str, Any] = {"settings_path": None}
_application: Optional[QCoreApplication] = None

SECRET_KEYS = ("client_secret", "access_token", "refresh_token")


def _handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SettingsError as exc:
            typer.echo(f"Settings error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except QDailymotionError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _settings() -> SettingsManager:
    settings = SettingsManager(_state["settings_path"])
    settings.load()
    return settings


def _prepare(request: Request, settings: SettingsManager) -> Request:
    settings.apply_credentials(request)
    settings.track_tokens(request)
    return request


def _run(request: Request, start: Callable[[], Any]) -> Request:
    """Run *start* and spin an event loop until *request* finishes."""

    global _application
    if QCoreApplication.instance() is None:
        _application = QCoreApplication(sys.argv[:1])
    loop = QEventLoop()
    request.finished.connect(loop.quit)
    try:
        start()
        if request.status == Status.Loading:
            loop.exec()
    finally:
        request.finished.disconnect(loop.quit)
    return request


def _finish(request: Request) -> Any:
    """Return the result of *request*, or exit with status 1 when it did not succeed."""

    status = Status(request.status)
    if status == Status.Ready:
        return request.result
    if status == Status.Canceled:
        typer.echo("Request canceled", err=True)
    else:
        typer.echo(f"Request failed: {request.errorString}", err=True)
    raise typer.Exit(1)


def _json_argument(text: Optional[str], what: str) -> Any:
    if not text:
        return {}
    value, ok = parse_json(text)
    if not ok or not isinstance(value, dict):
        raise InvalidArgumentError(f"{what} must be a JSON object: {text}")
    return value


def _field_list(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [field.strip() for field in text.split(",") if field.strip()]


def _typed_request(name: str) -> Optional[Request]:
    cls = REQUEST_CLASSES.get(name)
    return cls() if cls is not None else None


def _show(result: Any) -> None:
    if isinstance(result, dict) and isinstance(result.get("list"), list):
        records = [record for record in result["list"] if isinstance(record, dict)]
        if records:
            table = Table(show_lines=False)
            columns = sorted({key for record in records for key in record})
            for column in columns:
                table.add_column(column)
            for record in records:
                table.add_row(*(str(record.get(column, "")) for column in columns))
            print(table)
        else:
            print("[yellow]No results")
        if result.get("has_more"):
            print(f"[dim]More results available (page {result.get('page', 1)})")
        return
    print_json(data=result if result is not None else {})


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr."),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings file to use."),
) -> None:
    """Dailymotion Data API client."""

    setup_logging(verbose)
    _state["settings_path"] = settings


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


@app.command("list")
@_handle_errors
def list_resources(
    target: str = typer.Argument(..., help="Resource type (e.g. videos) or resource path."),
    path: str = typer.Option("", "--path", help="Resource path for a typed listing."),
    filters: Optional[str] = typer.Option(None, "--filters", help="JSON object of filters."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated fields."),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page to request."),
) -> None:
    """List resources of a type, or from an arbitrary resource path."""

    settings = _settings()
    query = _json_argument(filters, "--filters")
    query.setdefault("limit", settings.get("listing.limit", 20))
    if not settings.get("listing.family_filter", True):
        query.setdefault("family_filter", False)
    if page is not None:
        query["page"] = page

    request = _typed_request(target)
    if isinstance(request, LocalesRequest):
        # Locales come as a single unfiltered page.
        _prepare(request, settings)
        _run(request, request.list)
        _show(_finish(request))
        return
    if request is None:
        request = ResourcesRequest()
        resource_path = target
    else:
        resource_path = path
    _prepare(request, settings)
    _run(request, lambda: request.list(resource_path, query, _field_list(fields)))
    _show(_finish(request))


@app.command()
@_handle_errors
def get(
    target: str = typer.Argument(..., help="Resource type or resource path."),
    resource_id: Optional[str] = typer.Argument(None, help="Id, when TARGET is a type."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated fields."),
) -> None:
    """Retrieve a single resource."""

    settings = _settings()
    request = _typed_request(target) if resource_id else None
    if request is None:
        if resource_id:
            raise InvalidArgumentError(f"Unknown resource type: {target}")
        request = ResourcesRequest()
        args: tuple = (target, {}, _field_list(fields))
    else:
        args = (resource_id, {}, _field_list(fields))
    _prepare(request, settings)
    _run(request, lambda: request.get(*args))
    _show(_finish(request))


@app.command()
@_handle_errors
def insert(
    target: str = typer.Argument(..., help="Resource type or resource path."),
    resource: Optional[str] = typer.Argument(
        None, help="JSON object to create, or the id to link for users and videos."
    ),
    path: str = typer.Option("", "--path", help="Collection to insert into."),
) -> None:
    """Create a resource, or link an existing one into a collection."""

    settings = _settings()
    request = _typed_request(target)
    if request is None:
        request = ResourcesRequest()
        args: tuple = (
            (_json_argument(resource, "RESOURCE"), target) if resource else (target,)
        )
    elif RESOURCE_TYPES[target].insert_kind == InsertKind.LINK:
        args = (resource or "", path)
    else:
        args = (_json_argument(resource, "RESOURCE"), path)
    _prepare(request, settings)
    _run(request, lambda: request.insert(*args))
    _show(_finish(request))


@app.command()
@_handle_errors
def update(
    target: str = typer.Argument(..., help="Resource type or resource path."),
    resource_id_or_resource: str = typer.Argument(..., metavar="ID_OR_RESOURCE"),
    resource: Optional[str] = typer.Argument(None, help="JSON object of changed fields."),
) -> None:
    """Update a resource (TYPE ID RESOURCE, or PATH RESOURCE)."""

    settings = _settings()
    request = _typed_request(target)
    if request is None:
        request = ResourcesRequest()
        args: tuple = (target, _json_argument(resource_id_or_resource, "RESOURCE"))
    else:
        args = (resource_id_or_resource, _json_argument(resource, "RESOURCE"))
    _prepare(request, settings)
    _run(request, lambda: request.update(*args))
    _show(_finish(request))


@app.command()
@_handle_errors
def delete(
    target: str = typer.Argument(..., help="Resource type or resource path."),
    resource_id: Optional[str] = typer.Argument(None, help="Id, when TARGET is a type."),
    path: str = typer.Option("", "--path", help="Collection to unlink the resource from."),
) -> None:
    """Delete a resource, or unlink it from a collection."""

    settings = _settings()
    request = _typed_request(target) if resource_id else None
    if request is None:
        if resource_id:
            raise InvalidArgumentError(f"Unknown resource type: {target}")
        request = ResourcesRequest()
        args: tuple = (target,)
    else:
        args = (resource_id, path)
    _prepare(request, settings)
    _run(request, lambda: request.del_(*args))
    _finish(request)
    print("[green]Deleted")


@app.command()
@_handle_errors
def streams(video_id: str = typer.Argument(..., help="Dailymotion video id.")) -> None:
    """List the direct stream URLs of a video."""

    request = StreamsRequest()
    _run(request, lambda: request.list(video_id))
    table = Table("id", "description", "size", "url")
    for stream in _finish(request):
        table.add_row(
            stream["id"],
            stream["description"],
            f"{stream['width']}x{stream['height']}",
            stream["url"],
        )
    print(table)


@app.command()
@_handle_errors
def locales() -> None:
    """List the locales supported by Dailymotion."""

    request = LocalesRequest()
    _prepare(request, _settings())
    _run(request, request.list)
    _show(_finish(request))


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


def _auth_request(settings: SettingsManager) -> AuthenticationRequest:
    request = AuthenticationRequest()
    _prepare(request, settings)
    return request


@auth_app.command("password")
@_handle_errors
def auth_password(
    username: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Exchange account credentials for an access token."""

    request = _auth_request(_settings())
    _run(request, lambda: request.exchangeCredentialsForAccessToken(username, password))
    _finish(request)
    print("[green]Access token stored")


@auth_app.command("code")
@_handle_errors
def auth_code(code: str = typer.Argument(..., help="Code returned to the redirect uri.")) -> None:
    """Exchange an authorization code for an access token."""

    request = _auth_request(_settings())
    _run(request, lambda: request.exchangeCodeForAccessToken(code))
    _finish(request)
    print("[green]Access token stored")


@auth_app.command("revoke")
@_handle_errors
def auth_revoke() -> None:
    """Revoke the stored access token."""

    settings = _settings()
    request = _auth_request(settings)
    _run(request, request.revokeAccessToken)
    _finish(request)
    settings.set("authentication.access_token", "")
    settings.set("authentication.refresh_token", "")
    print("[green]Access token revoked")


@auth_app.command("url")
@_handle_errors
def auth_url() -> None:
    """Print the page to visit to authorize this client."""

    request = _auth_request(_settings())
    # Plain echo so the url is never wrapped.
    typer.echo(request.authorizationUrl().toString())


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@config_app.command("show")
@_handle_errors
def config_show(
    reveal: bool = typer.Option(False, "--reveal", help="Show secrets and tokens."),
) -> None:
    """Print the stored settings."""

    settings = _settings()
    data = settings.data
    auth = data.get("authentication", {})
    if not reveal:
        for key in SECRET_KEYS:
            if auth.get(key):
                auth[key] = "********"
    print(f"[dim]{settings.path}")
    print_json(data=data)


@config_app.command("set")
@_handle_errors
def config_set(
    key: str = typer.Argument(..., help="Dotted key, e.g. authentication.client_id."),
    value: str = typer.Argument(..., help="Value; JSON literals are decoded."),
) -> None:
    """Change one stored setting."""

    settings = _settings()
    decoded, ok = parse_json(value)
    settings.set(key, decoded if ok else value)
    print(f"[green]Set {key}")


if __name__ == "__main__":  # pragma: no cover
    app()
