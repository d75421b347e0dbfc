"""QML integration for QDailymotion."""

from .plugin import qml_types, register_types

__all__ = ["qml_types", "register_types"]
