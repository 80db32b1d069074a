"""New-tab placement relative to the tab that opened it.

``related`` placement is expressed through the opener graph where the browser
supports it (major version 57+) and falls back to "right after the current
tab" elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

from tabnav import config

if TYPE_CHECKING:
    from tabnav.webext.host import Tab

OPENER_TAB_ID_MIN_VERSION = 57


class TabPlacementPolicy(str, Enum):
    NEXT = "next"
    LAST = "last"
    RELATED = "related"


@dataclass(frozen=True)
class TabPlacementResult:
    index: Optional[int] = None
    opener_tab_id: Optional[int] = None

    def as_create_options(self) -> Dict:
        options: Dict = {}
        if self.index is not None:
            options["index"] = self.index
        if self.opener_tab_id is not None:
            options["openerTabId"] = self.opener_tab_id
        return options


def resolve_policy(cfg: Dict | None, related: bool) -> TabPlacementPolicy:
    key = "relatedopenpos" if related else "tabopenpos"
    return TabPlacementPolicy(config.safe_position(config.get(cfg, key)))


def needs_tab_count(policy: TabPlacementPolicy) -> bool:
    return TabPlacementPolicy(policy) is TabPlacementPolicy.LAST


def needs_browser_version(policy: TabPlacementPolicy, is_related_open: bool) -> bool:
    policy = TabPlacementPolicy(policy)
    if policy is TabPlacementPolicy.RELATED:
        return True
    return policy is TabPlacementPolicy.NEXT and is_related_open


def plan(
    policy: TabPlacementPolicy,
    is_related_open: bool,
    current_tab: "Tab",
    total_tab_count: int,
    browser_major_version: int,
) -> TabPlacementResult:
    policy = TabPlacementPolicy(policy)
    supports_opener = browser_major_version >= OPENER_TAB_ID_MIN_VERSION

    if policy is TabPlacementPolicy.NEXT:
        opener = current_tab.id if is_related_open and supports_opener else None
        return TabPlacementResult(index=current_tab.index + 1, opener_tab_id=opener)

    if policy is TabPlacementPolicy.LAST:
        # Tabs are zero-indexed, so the count is the append position. No opener.
        return TabPlacementResult(index=total_tab_count)

    if supports_opener:
        return TabPlacementResult(opener_tab_id=current_tab.id)
    return TabPlacementResult(index=current_tab.index + 1)
