import pytest

from tabnav.placement.planner import (
    OPENER_TAB_ID_MIN_VERSION,
    TabPlacementPolicy,
    TabPlacementResult,
    needs_browser_version,
    needs_tab_count,
    plan,
    resolve_policy,
)
from tabnav.webext.host import Tab

CURRENT = Tab(id=7, index=2)


def test_next_sets_opener_only_for_related_opens_on_new_browsers():
    assert plan("next", True, CURRENT, 5, 57) == TabPlacementResult(index=3, opener_tab_id=7)
    assert plan("next", True, CURRENT, 5, 56) == TabPlacementResult(index=3)
    assert plan("next", False, CURRENT, 5, 120) == TabPlacementResult(index=3)


def test_last_appends_and_never_sets_opener():
    assert plan(TabPlacementPolicy.LAST, False, CURRENT, 5, 120) == TabPlacementResult(index=5)
    assert plan(TabPlacementPolicy.LAST, True, CURRENT, 5, 120) == TabPlacementResult(index=5)


def test_related_prefers_opener_and_falls_back_to_position():
    assert plan("related", True, CURRENT, 5, OPENER_TAB_ID_MIN_VERSION) == TabPlacementResult(opener_tab_id=7)
    assert plan("related", False, CURRENT, 5, 56) == TabPlacementResult(index=3)


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        plan("first", False, CURRENT, 5, 57)


def test_as_create_options_omits_absent_fields():
    assert TabPlacementResult().as_create_options() == {}
    assert TabPlacementResult(index=5).as_create_options() == {"index": 5}
    assert TabPlacementResult(index=0, opener_tab_id=7).as_create_options() == {"index": 0, "openerTabId": 7}


def test_resolve_policy_reads_the_matching_key():
    cfg = {"tabopenpos": "last", "relatedopenpos": "next"}

    assert resolve_policy(cfg, related=False) is TabPlacementPolicy.LAST
    assert resolve_policy(cfg, related=True) is TabPlacementPolicy.NEXT


def test_resolve_policy_defaults_and_validation():
    assert resolve_policy(None, related=False) is TabPlacementPolicy.NEXT
    assert resolve_policy(None, related=True) is TabPlacementPolicy.RELATED
    assert resolve_policy({"tabopenpos": " Last "}, related=False) is TabPlacementPolicy.LAST

    with pytest.raises(ValueError, match="invalid tab position"):
        resolve_policy({"tabopenpos": "middle"}, related=False)


def test_lookups_needed_per_policy():
    assert needs_tab_count("last")
    assert not needs_tab_count("next")
    assert needs_browser_version("related", False)
    assert needs_browser_version("next", True)
    assert not needs_browser_version("next", False)
    assert not needs_browser_version("last", True)
