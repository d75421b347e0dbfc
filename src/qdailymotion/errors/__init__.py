"""Custom exception hierarchy for QDailymotion.

Network and content failures of a request are never raised; they are
reported through the request's ``status``/``error``/``errorString``.  The
exceptions below cover programming and configuration mistakes only.
"""

from __future__ import annotations


class QDailymotionError(Exception):
    """Base class for all custom errors raised by QDailymotion."""


class UnsupportedOperationError(QDailymotionError):
    """Raised when a resource type does not support the requested operation."""


class InvalidArgumentError(QDailymotionError):
    """Raised when an argument cannot be turned into a Data API call."""


class SettingsError(QDailymotionError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "InvalidArgumentError",
    "QDailymotionError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "UnsupportedOperationError",
]
