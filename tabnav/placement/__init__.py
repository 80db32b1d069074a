"""Tab placement planning for newly opened tabs."""

from .planner import (
    OPENER_TAB_ID_MIN_VERSION,
    TabPlacementPolicy,
    TabPlacementResult,
    needs_browser_version,
    needs_tab_count,
    plan,
    resolve_policy,
)

__all__ = [
    "OPENER_TAB_ID_MIN_VERSION",
    "TabPlacementPolicy",
    "TabPlacementResult",
    "needs_browser_version",
    "needs_tab_count",
    "plan",
    "resolve_policy",
]
