"""Browser-facing glue: host capability, tab helpers and navigation."""

from .host import (
    DEFAULT_COOKIE_STORE_ID,
    BrowserHost,
    ContainerError,
    ExecutionContext,
    NoActiveTabError,
    Tab,
)
from .tabs import NEWTAB_PAGE, WebExt, major_version

__all__ = [
    "DEFAULT_COOKIE_STORE_ID",
    "BrowserHost",
    "ContainerError",
    "ExecutionContext",
    "NoActiveTabError",
    "Tab",
    "NEWTAB_PAGE",
    "WebExt",
    "major_version",
]
