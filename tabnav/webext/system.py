"""A ``BrowserHost`` backed by the desktop's default web browser.

The desktop browser exposes no tab strip, so this host pretends there is a
single tab in the default container. Searches are turned into URLs through
per-engine search-URL templates; default searches fall back to
DuckDuckGo when no template is configured.
"""

from __future__ import annotations

import asyncio
import os
import webbrowser
from typing import Dict, List, Optional, Sequence

from tabnav.address.models import SearchEngine
from tabnav.address.searchurls import interpolate_search_item

from .host import BrowserHost, ContainerError, Tab
from .tabs import NEWTAB_PAGE

DEFAULT_BROWSER_VERSION = "115.0"
DEFAULT_SEARCH_URL = "https://duckduckgo.com/?q="
BLANK_PAGE = "about:blank"


class SystemBrowserHost(BrowserHost):
    def __init__(
        self,
        engines: Sequence[SearchEngine] = (),
        engine_urls: Optional[Dict[str, str]] = None,
        default_search_url: str = "",
        dry_run: bool = False,
    ) -> None:
        self.engines = list(engines)
        self.engine_urls = dict(engine_urls or {})
        self.default_search_url = default_search_url or DEFAULT_SEARCH_URL
        self.dry_run = dry_run
        self.opened: List[str] = []
        self._tab = Tab(id=1, index=0, window_id=1, active=True)
        # Set by an empty create_tab; the next URL opens in a new tab instead.
        self._pending_tab = False

    async def _open(self, url: str, new: int) -> None:
        if url == NEWTAB_PAGE:
            url = BLANK_PAGE
        if self._pending_tab:
            new = 2
            self._pending_tab = False
        self.opened.append(url)
        if self.dry_run:
            return
        await asyncio.to_thread(webbrowser.open, url, new)

    async def query_tabs(self, active: Optional[bool] = None, current_window: Optional[bool] = None) -> List[Tab]:
        return [self._tab]

    async def create_tab(self, options: Dict) -> Tab:
        url = options.get("url")
        if not url or url in (NEWTAB_PAGE, BLANK_PAGE):
            self._pending_tab = True
            return self._tab
        await self._open(url, new=2)
        return self._tab

    async def update_tab(self, tab_id: int, options: Dict) -> Tab:
        await self._open(options.get("url") or BLANK_PAGE, new=0)
        return self._tab

    async def create_window(self, options: Dict) -> None:
        url = options.get("url") or BLANK_PAGE
        if isinstance(url, list):
            url = url[0] if url else BLANK_PAGE
        await self._open(url, new=1)

    async def search_engines(self) -> List[SearchEngine]:
        return list(self.engines)

    async def search(self, tab_id: int, query: str, engine: Optional[str] = None) -> None:
        template = self.engine_urls.get(engine, "") if engine else self.default_search_url
        if not template:
            raise LookupError(f"no search URL for engine {engine}")
        href = interpolate_search_item(template, query)
        if href is None:
            raise ValueError(f"search URL template is not a URL: {template}")
        await self._open(href, new=0)

    async def browser_info(self) -> Dict:
        return {"name": "system", "version": os.environ.get("TABNAV_BROWSER_VERSION", DEFAULT_BROWSER_VERSION)}

    async def contextual_identity(self, cookie_store_id: str) -> Dict:
        raise ContainerError(f"containers are not available in the system browser ({cookie_store_id})")

    async def send_message(self, message: Dict) -> Tab:
        return self._tab
