"""Navigation configuration defaults and lookups."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

TAB_POSITIONS = ("next", "last", "related")

DEFAULT_SEARCHURLS: Dict[str, str] = {
    "google": "https://www.google.com/search?q=",
    "googlelucky": "https://www.google.com/search?btnI=I'm Feeling Lucky&q=",
    "scholar": "https://scholar.google.com/scholar?q=",
    "googleuk": "https://www.google.co.uk/search?q=",
    "bing": "https://www.bing.com/search?q=",
    "duckduckgo": "https://duckduckgo.com/?q=",
    "yahoo": "https://search.yahoo.com/search?p=",
    "twitter": "https://twitter.com/search?q=",
    "wikipedia": "https://en.wikipedia.org/wiki/Special:Search/",
    "youtube": "https://www.youtube.com/results?search_query=",
    "amazon": "https://www.amazon.com/s/ref=nb_sb_noss?url=search-alias%3Daps&field-keywords=",
    "amazonuk": "https://www.amazon.co.uk/s/ref=nb_sb_noss?url=search-alias%3Daps&field-keywords=",
    "startpage": "https://startpage.com/do/search?language=english&cat=web&query=",
    "github": "https://github.com/search?utf8=✓&q=",
    "searx": "https://searx.me/?category_general=on&q=",
    "cnrtl": "http://www.cnrtl.fr/lexicographie/",
    "osm": "https://www.openstreetmap.org/search?query=",
    "mdn": "https://developer.mozilla.org/en-US/search?q=",
    "gentoo_wiki": "https://wiki.gentoo.org/index.php?title=Special%3ASearch&profile=default&fulltext=Search&search=",
    "qwant": "https://www.qwant.com/?q=",
}

DEFAULT_CFG: Dict[str, Any] = {
    "tabopenpos": "next",
    "relatedopenpos": "related",
    "newtab": "",
    "searchengine": "google",
    "searchurls": DEFAULT_SEARCHURLS,
}


def merge_cfg(payload_cfg: Dict | None, override_cfg: Dict | None) -> Dict:
    """Layer payload then override onto the defaults.

    ``searchurls`` merges per alias so user aliases extend the built-in set.
    """
    merged = dict(DEFAULT_CFG)
    merged["searchurls"] = dict(DEFAULT_SEARCHURLS)
    for cfg in (payload_cfg, override_cfg):
        if not cfg:
            continue
        for key, value in cfg.items():
            if key == "searchurls" and isinstance(value, dict):
                merged["searchurls"].update(value)
            else:
                merged[key] = value
    return merged


def load_cfg(p: Path) -> dict:
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    return json.loads(p.read_text(encoding="utf-8"))


def get(cfg: Dict | None, key: str) -> Any:
    if cfg and key in cfg:
        return cfg[key]
    return DEFAULT_CFG.get(key)


def safe_position(value: object) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in TAB_POSITIONS:
            return candidate
    raise ValueError(f"invalid tab position {value!r}; expected one of: {', '.join(TAB_POSITIONS)}")
