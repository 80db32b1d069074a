"""Tab helpers and command-bar navigation on top of a ``BrowserHost``."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Optional

from tabnav.address.classify import classify
from tabnav.address.models import (
    ClassifiedAddress,
    ConfiguredSearchURL,
    DirectURL,
    Empty,
    NamedEngineSearch,
)
from tabnav.placement.planner import (
    TabPlacementResult,
    needs_browser_version,
    needs_tab_count,
    plan,
    resolve_policy,
)

from .host import (
    DEFAULT_COOKIE_STORE_ID,
    BrowserHost,
    ContainerError,
    ExecutionContext,
    NoActiveTabError,
    Tab,
)

NEWTAB_PAGE = "/static/newtab.html"
OWNTAB_MESSAGE = {"type": "owntab_background"}


def major_version(version: str) -> int:
    match = re.match(r"\s*(\d+)", str(version or "").split(".")[0])
    if match is None:
        return 0
    return int(match.group(1))


class WebExt:
    """Navigation entry points bound to one host and one configuration snapshot.

    ``context`` records where the caller runs (content script, background page
    or extension page); the host passed in is already the right channel for it.
    """

    def __init__(
        self,
        host: BrowserHost,
        config: Optional[Dict] = None,
        context: ExecutionContext = ExecutionContext.BACKGROUND,
    ) -> None:
        self.host = host
        self.config = config or {}
        self.context = ExecutionContext(context)

    def in_content_script(self) -> bool:
        return self.context is ExecutionContext.CONTENT

    async def active_tab(self) -> Tab:
        tabs = await self.host.query_tabs(active=True, current_window=True)
        if not tabs:
            raise NoActiveTabError("no active tab in the current window")
        return tabs[0]

    async def active_tab_id(self) -> int:
        return (await self.active_tab()).id

    async def active_tab_container_id(self) -> str:
        return (await self.active_tab()).cookie_store_id

    async def own_tab(self) -> Tab:
        return await self.host.send_message(dict(OWNTAB_MESSAGE))

    async def own_tab_id(self) -> int:
        return (await self.own_tab()).id

    async def _container(self, cookie_store_id: str, caller: str) -> Dict:
        if cookie_store_id == DEFAULT_COOKIE_STORE_ID:
            raise ContainerError(f"{DEFAULT_COOKIE_STORE_ID} is not a valid contextualIdentity ({caller})")
        return await self.host.contextual_identity(cookie_store_id)

    async def own_tab_container(self) -> Dict:
        return await self._container((await self.own_tab()).cookie_store_id, "own_tab_container")

    async def active_tab_container(self) -> Dict:
        return await self._container(await self.active_tab_container_id(), "active_tab_container")

    async def browser_major_version(self) -> int:
        info = await self.host.browser_info()
        return major_version(info.get("version", ""))

    async def browser_version_at_least(self, desired_major: int) -> bool:
        return await self.browser_major_version() >= desired_major

    async def plan_new_tab(self, related: bool = False, current_tab: Optional[Tab] = None) -> TabPlacementResult:
        """Placement for a tab opened from ``current_tab`` (the active tab by default)."""
        this_tab = current_tab or await self.active_tab()
        policy = resolve_policy(self.config, related)

        total = 0
        if needs_tab_count(policy):
            total = len(await self.host.query_tabs(current_window=True))
        version = 0
        if needs_browser_version(policy, related):
            version = await self.browser_major_version()
        return plan(policy, related, this_tab, total, version)

    async def open_in_new_tab(
        self,
        url: str,
        active: bool = True,
        related: bool = False,
        cookie_store_id: Optional[str] = None,
    ) -> Tab:
        """Open ``url`` in a new tab placed per ``tabopenpos`` / ``relatedopenpos``.

        ``related`` opens the tab as if the link had been middle-clicked in the
        active tab.
        """
        options: Dict = {"active": active, "url": url}
        if cookie_store_id is not None:
            options["cookieStoreId"] = cookie_store_id
        placement = await self.plan_new_tab(related=related)
        options.update(placement.as_create_options())
        return await self.host.create_tab(options)

    async def open_in_new_window(self, create_data: Optional[Dict] = None) -> None:
        await self.host.create_window(dict(create_data or {}))

    async def classify(self, words: Iterable[str]) -> ClassifiedAddress:
        engines = await self.host.search_engines()
        return classify(" ".join(words), self.config, engines)

    async def open_in_tab(self, tab: Tab, words: Iterable[str], opts: Optional[Dict] = None) -> ClassifiedAddress:
        """Navigate ``tab`` to whatever the command-bar ``words`` mean.

        Returns the classification that was acted on.
        """
        target = await self.classify(words)
        extra = dict(opts or {})

        if isinstance(target, Empty):
            await self.host.update_tab(tab.id, {"url": NEWTAB_PAGE, **extra})
        elif isinstance(target, (DirectURL, ConfiguredSearchURL)):
            await self.host.update_tab(tab.id, {"url": target.href, **extra})
        elif isinstance(target, NamedEngineSearch):
            await self.host.search(tab.id, target.query, engine=target.engine)
        else:
            await self.host.search(tab.id, target.query)
        return target

    async def dispatch(self, words: Iterable[str], opts: Optional[Dict] = None) -> ClassifiedAddress:
        return await self.open_in_tab(await self.active_tab(), words, opts)
