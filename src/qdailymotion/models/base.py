"""Shared list model machinery for QDailymotion models."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from PySide6.QtCore import (
    Property,
    QAbstractListModel,
    QByteArray,
    QModelIndex,
    QObject,
    Qt,
    Signal,
    Slot,
)
from PySide6.QtNetwork import QNetworkAccessManager

from ..network.enums import Error, Status
from ..network.request import Request

logger = logging.getLogger(__name__)

FIRST_ROLE = int(Qt.ItemDataRole.UserRole) + 1


def unique_fields(fields: Iterable[str]) -> List[str]:
    """Return *fields* with duplicates removed, keeping the first occurrence."""

    seen = set()
    result = []
    for field in fields:
        field = str(field)
        if field and field not in seen:
            seen.add(field)
            result.append(field)
    return result


class BaseListModel(QAbstractListModel):
    """List of records backed by a single private :class:`Request`.

    The model issues at most one call at a time.  Each call registers one
    pending handler that is consumed by the next ``finished`` of the
    request, after which ``statusChanged`` is emitted.
    """

    clientIdChanged = Signal()  # noqa: N815
    clientSecretChanged = Signal()  # noqa: N815
    accessTokenChanged = Signal()  # noqa: N815
    refreshTokenChanged = Signal()  # noqa: N815
    statusChanged = Signal()  # noqa: N815
    countChanged = Signal()  # noqa: N815

    request_class: type = Request
    identity_field = "id"

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._request = self.request_class(self)
        self._items: List[Dict[str, Any]] = []
        self._roles: Dict[int, str] = {}
        self._pending: Optional[Callable[[], None]] = None

        self._request.clientIdChanged.connect(self.clientIdChanged)
        self._request.clientSecretChanged.connect(self.clientSecretChanged)
        self._request.accessTokenChanged.connect(self.accessTokenChanged)
        self._request.refreshTokenChanged.connect(self.refreshTokenChanged)
        self._request.finished.connect(self._on_request_finished)

    # ------------------------------------------------------------------
    # Credentials, forwarded to the request
    # ------------------------------------------------------------------
    @Property(str, notify=clientIdChanged)
    def clientId(self) -> str:  # noqa: N802
        return self._request.clientId

    @clientId.setter
    def clientId(self, value: str) -> None:  # noqa: N802
        self._request.clientId = value

    @Property(str, notify=clientSecretChanged)
    def clientSecret(self) -> str:  # noqa: N802
        return self._request.clientSecret

    @clientSecret.setter
    def clientSecret(self, value: str) -> None:  # noqa: N802
        self._request.clientSecret = value

    @Property(str, notify=accessTokenChanged)
    def accessToken(self) -> str:  # noqa: N802
        return self._request.accessToken

    @accessToken.setter
    def accessToken(self, value: str) -> None:  # noqa: N802
        self._request.accessToken = value

    @Property(str, notify=refreshTokenChanged)
    def refreshToken(self) -> str:  # noqa: N802
        return self._request.refreshToken

    @refreshToken.setter
    def refreshToken(self, value: str) -> None:  # noqa: N802
        self._request.refreshToken = value

    # ------------------------------------------------------------------
    # Status, mirrored from the request
    # ------------------------------------------------------------------
    @Property(int, notify=statusChanged)
    def status(self) -> Status:
        return self._request.status

    @Property(int, notify=statusChanged)
    def error(self) -> Error:
        return self._request.error

    @Property(str, notify=statusChanged)
    def errorString(self) -> str:  # noqa: N802
        return self._request.errorString

    @Property(int, notify=countChanged)
    def count(self) -> int:
        return len(self._items)

    @property
    def request(self) -> Request:
        """The request used by this model."""
        return self._request

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Copies of the records currently held, in display order."""
        return [dict(item) for item in self._items]

    def set_network_access_manager(self, manager: QNetworkAccessManager) -> None:
        """Use *manager* for the model's calls. Ownership is not taken."""
        self._request.set_network_access_manager(manager)

    # ------------------------------------------------------------------
    # Qt model interface
    # ------------------------------------------------------------------
    def roleNames(self) -> Dict[int, QByteArray]:  # noqa: N802
        return {role: QByteArray(name.encode("utf-8")) for role, name in self._roles.items()}

    def rowCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802
        if parent is not None and parent.isValid():
            return 0
        return len(self._items)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        row = index.row()
        if not index.isValid() or row < 0 or row >= len(self._items):
            return None
        name = self._roles.get(int(role))
        if name is None:
            return None
        return self._items[row].get(name)

    # ------------------------------------------------------------------
    # Local accessors
    # ------------------------------------------------------------------
    @Slot(int, result="QVariantMap")
    def get(self, row: int) -> Dict[str, Any]:
        """Return a copy of the record at *row*, or an empty mapping."""

        if 0 <= row < len(self._items):
            return dict(self._items[row])
        return {}

    @Slot(int, "QVariantMap")
    def set(self, row: int, record: Mapping[str, Any]) -> None:
        """Replace the record at *row* with *record*."""

        if 0 <= row < len(self._items):
            self._items[row] = dict(record)
            index = self.index(row, 0)
            self.dataChanged.emit(index, index)

    @Slot()
    def clear(self) -> None:
        """Remove every record."""

        if not self._items:
            return
        self.beginResetModel()
        self._items.clear()
        self.endResetModel()
        self.countChanged.emit()

    @Slot()
    def cancel(self) -> None:
        """Cancel the call in flight, if any."""
        self._request.cancel()

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------
    def _is_loading(self) -> bool:
        return self._request.status == Status.Loading

    def _set_roles(self, names: Sequence[str]) -> None:
        self._roles = {FIRST_ROLE + offset: name for offset, name in enumerate(names)}

    def _issue(self, handler: Callable[[], None], call: Callable[..., Any], *args: Any) -> None:
        """Register *handler* for the next completion and run *call*."""

        self._pending = handler
        try:
            call(*args)
        except Exception:
            self._pending = None
            raise
        self.statusChanged.emit()

    def _on_request_finished(self) -> None:
        handler, self._pending = self._pending, None
        if handler is not None:
            handler()
        self.statusChanged.emit()

    def _ready_result(self) -> Any:
        """Return the request result when the call succeeded, else ``None``."""

        if self._request.status != Status.Ready:
            return None
        return self._request.result

    def _identity(self, row: int) -> str:
        if 0 <= row < len(self._items):
            value = self._items[row].get(self.identity_field)
            return "" if value is None else str(value)
        return ""

    def _row_of(self, identity: str) -> int:
        """Return the current row of the record whose identity is *identity*."""

        if not identity:
            return -1
        for row, item in enumerate(self._items):
            value = item.get(self.identity_field)
            if value is not None and str(value) == identity:
                return row
        return -1

    def _append_items(self, records: Sequence[Any]) -> None:
        records = [dict(record) for record in records if isinstance(record, Mapping)]
        if not records:
            return
        first = len(self._items)
        self.beginInsertRows(QModelIndex(), first, first + len(records) - 1)
        self._items.extend(records)
        self.endInsertRows()
        self.countChanged.emit()

    def _prepend_item(self, record: Mapping[str, Any]) -> None:
        self.beginInsertRows(QModelIndex(), 0, 0)
        self._items.insert(0, dict(record))
        self.endInsertRows()
        self.countChanged.emit()

    def _remove_row(self, row: int) -> None:
        self.beginRemoveRows(QModelIndex(), row, row)
        del self._items[row]
        self.endRemoveRows()
        self.countChanged.emit()


class PagedListModel(BaseListModel):
    """Model over a paginated Data API collection.

    ``list`` replaces the records, ``fetchMore`` appends the next page and
    writes patch the records in place.  Write completions resolve their row
    by identity when they complete, never by the row they were issued for.
    """

    hasMoreChanged = Signal()  # noqa: N815

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._resource_path = ""
        self._write_resource_path = ""
        self._filters: Dict[str, Any] = {}
        self._fields: List[str] = []
        self._has_more = False

    @Property(bool, notify=hasMoreChanged)
    def hasMore(self) -> bool:  # noqa: N802
        return self._has_more

    @property
    def resource_path(self) -> str:
        return self._resource_path

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    @property
    def fields(self) -> List[str]:
        return list(self._fields)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def _prepare_fields(self, fields: List[str]) -> List[str]:
        """Return the fields actually requested for *fields*."""
        return fields

    def _roles_for(self, fields: List[str]) -> Optional[List[str]]:
        """Return the role names for a listing, or ``None`` to derive them later."""
        return None

    def _request_list(self) -> None:
        self._request.list(self._resource_path, self._filters, self._fields)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------
    def _list(
        self,
        resource_path: str,
        filters: Optional[Mapping[str, Any]],
        fields: Optional[Iterable[str]],
    ) -> None:
        if self._is_loading():
            return
        self.clear()
        self._resource_path = resource_path
        self._filters = dict(filters or {})
        self._fields = self._prepare_fields(unique_fields(fields or []))
        self._set_roles(self._roles_for(self._fields) or [])
        if self._has_more:
            self._has_more = False
            self.hasMoreChanged.emit()
        self._issue(self._on_list_finished, self._request_list)

    def canFetchMore(self, parent: QModelIndex | None = None) -> bool:  # noqa: N802
        if self._is_loading():
            return False
        return self._has_more

    def fetchMore(self, parent: QModelIndex | None = None) -> None:  # noqa: N802
        if not self.canFetchMore():
            return
        try:
            page = int(self._filters.get("page") or 0)
        except (TypeError, ValueError):
            page = 0
        self._filters["page"] = page + 1 if page > 0 else 2
        self._issue(self._on_list_finished, self._request_list)

    @Slot()
    def reload(self) -> None:
        """Clear the records and list the first page again."""

        if self._is_loading():
            return
        self.clear()
        self._filters["page"] = 1
        self._issue(self._on_list_finished, self._request_list)

    def _on_list_finished(self) -> None:
        result = self._ready_result()
        if not isinstance(result, Mapping):
            return
        records = result.get("list") or []
        if not self._items and records and not self._roles:
            self._derive_roles(records[0])
        self._append_items(records)
        has_more = bool(result.get("has_more"))
        if has_more != self._has_more:
            self._has_more = has_more
            self.hasMoreChanged.emit()
        logger.debug(
            "Listed %d records from %s (has_more=%s)",
            len(records),
            self._resource_path or "<default>",
            has_more,
        )

    def _derive_roles(self, record: Any) -> None:
        if isinstance(record, Mapping):
            self._set_roles(sorted(str(key) for key in record))

    # ------------------------------------------------------------------
    # Write completions
    # ------------------------------------------------------------------
    def _on_insert_finished(self, write_path: str) -> None:
        result = self._ready_result()
        if result is None or write_path != self._resource_path:
            return
        if isinstance(result, Mapping) and result:
            self._prepend_item(result)

    def _on_update_finished(self, identity: str, resource: Mapping[str, Any]) -> None:
        result = self._ready_result()
        if self._request.status != Status.Ready:
            return
        row = self._row_of(identity)
        if row < 0:
            logger.debug("Updated %s is no longer listed", identity)
            return
        if isinstance(result, Mapping) and result:
            record = dict(result)
        else:
            record = dict(self._items[row])
            record.update(resource)
        self.set(row, record)

    def _on_delete_finished(self, identity: str, write_path: str) -> None:
        if self._request.status != Status.Ready:
            return
        if write_path and write_path != self._resource_path:
            return
        row = self._row_of(identity)
        if row < 0:
            logger.debug("Deleted %s is no longer listed", identity)
            return
        self._remove_row(row)


__all__ = ["BaseListModel", "FIRST_ROLE", "PagedListModel", "unique_fields"]
