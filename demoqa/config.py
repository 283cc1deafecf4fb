"""Suite configuration.

Every setting is resolved in this order:
  1) env:      NAME
  2) behave:   -D NAME=...
  3) default
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://demoqa.com"
DEFAULT_API_BASE_URL = "https://api.restful-api.dev"


def _resolve(name: str, userdata: Mapping[str, str], default: str) -> str:
    """Return the raw string value for a setting."""
    return os.getenv(name) or userdata.get(name) or default


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class Settings:  # pylint: disable=too-many-instance-attributes
    """Resolved runtime settings for one behave run."""

    def __init__(self, userdata: Optional[Mapping[str, str]] = None):
        userdata = userdata or {}
        self.base_url = _resolve("BASE_URL", userdata, DEFAULT_BASE_URL).rstrip("/")
        self.api_base_url = _resolve("API_BASE_URL", userdata, DEFAULT_API_BASE_URL).rstrip("/")
        self.downloads_dir = os.path.abspath(_resolve("DOWNLOADS_DIR", userdata, "downloads"))

        # seconds
        self.wait_timeout = float(_resolve("WAIT_TIMEOUT", userdata, "10"))
        self.ready_timeout = float(_resolve("READY_TIMEOUT", userdata, "20"))
        self.file_timeout = float(_resolve("FILE_TIMEOUT", userdata, "40"))
        self.page_load_timeout = float(_resolve("PAGE_LOAD_TIMEOUT", userdata, "120"))
        self.api_timeout = float(_resolve("API_TIMEOUT", userdata, "30"))
        self.grid_settle = float(_resolve("GRID_SETTLE", userdata, "0.12"))

        self.headless = _as_bool(_resolve("HEADLESS", userdata, "true"))
        self.use_wdm = _as_bool(_resolve("USE_WDM", userdata, "0"))

    def url(self, path: str) -> str:
        """Absolute URL on the site under test."""
        return self.base_url + "/" + path.lstrip("/")

    def __repr__(self):
        return f"<Settings base_url={self.base_url} api_base_url={self.api_base_url}>"
