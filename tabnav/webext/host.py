"""Browser host capability consumed by the navigation glue.

The host wraps whatever actually owns the tabs (an extension runtime, a
remote-control session, the desktop browser). Every call may suspend until the
browser answers; failures propagate to the caller untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from tabnav.address.models import SearchEngine

DEFAULT_COOKIE_STORE_ID = "firefox-default"


class ExecutionContext(str, Enum):
    CONTENT = "content"
    BACKGROUND = "background"
    EXTENSION = "extension"


class ContainerError(ValueError):
    """The default cookie store was used where a real container is required."""


class NoActiveTabError(LookupError):
    pass


@dataclass(frozen=True)
class Tab:
    id: int
    index: int
    window_id: Optional[int] = None
    active: bool = False
    url: str = ""
    cookie_store_id: str = DEFAULT_COOKIE_STORE_ID


class BrowserHost(ABC):
    @abstractmethod
    async def query_tabs(
        self,
        active: Optional[bool] = None,
        current_window: Optional[bool] = None,
    ) -> List[Tab]:
        """Tabs matching the filters, in tab-strip order."""

    @abstractmethod
    async def create_tab(self, options: Dict) -> Tab:
        """Open a tab. ``options`` uses the tabs.create keys (url, active, index, openerTabId, cookieStoreId)."""

    @abstractmethod
    async def update_tab(self, tab_id: int, options: Dict) -> Tab:
        pass

    @abstractmethod
    async def create_window(self, options: Dict) -> None:
        pass

    @abstractmethod
    async def search_engines(self) -> List[SearchEngine]:
        """Installed search engines in the browser's order."""

    @abstractmethod
    async def search(self, tab_id: int, query: str, engine: Optional[str] = None) -> None:
        """Run ``query`` in ``tab_id`` with the named engine, or the default one when ``engine`` is None."""

    @abstractmethod
    async def browser_info(self) -> Dict:
        """At least ``{"version": "<major>.<minor>..."}``."""

    @abstractmethod
    async def contextual_identity(self, cookie_store_id: str) -> Dict:
        pass

    @abstractmethod
    async def send_message(self, message: Dict) -> Tab:
        """Ask the background side about the sender; answers ``owntab_background`` with the sender's tab."""
