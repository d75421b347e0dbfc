"""JSON helpers shared by the requests and the settings store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Tuple


def parse_json(text: bytes | bytearray | str) -> Tuple[Any, bool]:
    """Decode *text* and return ``(value, ok)``.

    Empty input is reported as a failure so that callers can tell an empty
    reply body apart from a literal ``null``.
    """

    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError:
            return None, False
    if not text.strip():
        return None, False
    try:
        return json.loads(text), True
    except ValueError:
        return None, False


def serialize_json(value: Any) -> Tuple[bytes, bool]:
    """Encode *value* as compact UTF-8 JSON and return ``(payload, ok)``."""

    try:
        payload = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return b"", False
    return payload.encode("utf-8"), True


def read_json(path: Path) -> Any:
    """Return the decoded JSON document stored at *path*."""

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def write_json(path: Path, payload: Any) -> None:
    """Atomically replace *path* with the JSON encoding of *payload*."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


__all__ = ["parse_json", "read_json", "serialize_json", "write_json"]
