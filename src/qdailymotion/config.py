"""Default configuration values for QDailymotion."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Data API endpoints
# ---------------------------------------------------------------------------

API_URL: Final[str] = "https://api.dailymotion.com"

AUTH_URL: Final[str] = "https://www.dailymotion.com/oauth/authorize"
TOKEN_URL: Final[str] = "https://api.dailymotion.com/oauth/token"
REVOKE_TOKEN_URL: Final[str] = "https://api.dailymotion.com/logout"

# The embed page is the only public source of direct stream URLs.  It is
# plain HTML, so requests against it never carry the bearer token.
VIDEO_PAGE_URL: Final[str] = "http://www.dailymotion.com/embed/video"

# ---------------------------------------------------------------------------
# OAuth 2.0
# ---------------------------------------------------------------------------

GRANT_TYPE_CODE: Final[str] = "authorization_code"
GRANT_TYPE_PASSWORD: Final[str] = "password"
GRANT_TYPE_REFRESH: Final[str] = "refresh_token"


# ---------------------------------------------------------------------------
# Request behaviour
# ---------------------------------------------------------------------------

# Upper bound on redirects followed for a single logical call.
MAX_REDIRECTS: Final[int] = 8

FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"

# Cookie set on the embed page so that the family filter does not hide
# stream data for restricted videos.
FAMILY_FILTER_COOKIE: Final[tuple[str, str]] = ("ff", "off")

# ---------------------------------------------------------------------------
# QML
# ---------------------------------------------------------------------------

QML_URI: Final[str] = "QDailymotion"
QML_VERSION: Final[tuple[int, int]] = (1, 0)
