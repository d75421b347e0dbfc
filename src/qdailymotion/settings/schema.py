"""Schema helpers for the QDailymotion settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "QDailymotion/settings.schema.json",
    "type": "object",
    "required": ["schema", "authentication", "listing"],
    "properties": {
        "schema": {"const": "QDailymotion/settings@1"},
        "authentication": {
            "type": "object",
            "properties": {
                "client_id": {"type": "string"},
                "client_secret": {"type": "string"},
                "redirect_uri": {"type": "string"},
                "access_token": {"type": "string"},
                "refresh_token": {"type": "string"},
                "scopes": {
                    "type": "array",
                    "items": {"type": "string"},
                },
            },
            "additionalProperties": True,
        },
        "listing": {
            "type": "object",
            "properties": {
                "limit": {"type": "integer", "minimum": 1, "maximum": 100},
                "family_filter": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "QDailymotion/settings@1",
    "authentication": {
        "client_id": "",
        "client_secret": "",
        "redirect_uri": "",
        "access_token": "",
        "refresh_token": "",
        "scopes": [],
    },
    "listing": {
        "limit": 20,
        "family_filter": True,
    },
}

# Sections merged key by key instead of being replaced wholesale.
_SECTIONS = ("authentication", "listing")

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _normalise_scopes(entries: Any) -> list[str]:
    if isinstance(entries, str):
        entries = entries.replace("+", " ").split()
    if not isinstance(entries, (list, tuple)):
        return []
    return [str(entry) for entry in entries if str(entry)]


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    if key == "authentication" and sub_key == "scopes":
                        sub_value = _normalise_scopes(sub_value)
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
