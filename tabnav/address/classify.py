"""Command-bar address classification.

Rules run in order and the first one to return a result wins, so a later rule
never sees input an earlier rule accepted:

1. empty input -> configured ``newtab`` (still empty -> ``Empty``)
2. ``scheme:...`` that parses as a URL -> ``DirectURL``
3. first word is a ``searchurls`` alias -> ``ConfiguredSearchURL``
4. first word is a search engine alias -> ``NamedEngineSearch``
5. bare domain (dot, port or password) -> ``DirectURL``
6. configured ``searchengine`` (searchurl or engine alias)
7. browser default engine -> ``DefaultEngineSearch``

A leading ``search`` word drops out of the query text used by rules 6 and 7.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from .models import (
    AddressQuery,
    ClassifiedAddress,
    ConfiguredSearchURL,
    DefaultEngineSearch,
    DirectURL,
    Empty,
    NamedEngineSearch,
    SearchEngine,
    find_engine,
)
from .searchurls import interpolate_search_item
from .urls import guess_bare_domain, has_uri_scheme, parse_url

FORCE_SEARCH_WORD = "search"


@dataclass(frozen=True)
class _Snapshot:
    searchurls: Dict[str, str]
    searchengine: Optional[str]
    engines: Tuple[SearchEngine, ...]


Rule = Callable[[AddressQuery, _Snapshot], Optional[ClassifiedAddress]]


def _query_string(query: AddressQuery) -> str:
    if query.first_word == FORCE_SEARCH_WORD:
        return query.remainder
    return query.original


def _expand_alias(alias: str, text: str, snap: _Snapshot) -> Optional[ConfiguredSearchURL]:
    template = snap.searchurls.get(alias)
    if not template:
        return None
    href = interpolate_search_item(template, text)
    if href is None:
        return None
    return ConfiguredSearchURL(alias=alias, href=href)


def _engine_search(alias: str, text: str, snap: _Snapshot) -> Optional[NamedEngineSearch]:
    engine = find_engine(snap.engines, alias)
    if engine is None:
        return None
    return NamedEngineSearch(alias=alias, engine=engine.name, query=text)


def match_empty(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    if query.first_word == "":
        return Empty()
    return None


def match_uri(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    if not has_uri_scheme(query.first_word):
        return None
    url = parse_url(query.original)
    if url is None:
        return None
    return DirectURL(href=url.href)


def match_searchurl_alias(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    return _expand_alias(query.first_word, query.remainder, snap)


def match_engine_alias(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    return _engine_search(query.first_word, query.remainder, snap)


def match_bare_domain(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    url = guess_bare_domain(query.original)
    if url is None:
        return None
    return DirectURL(href=url.href)


def match_configured_engine(query: AddressQuery, snap: _Snapshot) -> Optional[ClassifiedAddress]:
    name = snap.searchengine
    if not name:
        return None
    text = _query_string(query)
    if snap.searchurls.get(name):
        return _expand_alias(name, text, snap)
    return _engine_search(name, text, snap)


def match_default_engine(query: AddressQuery, snap: _Snapshot) -> DefaultEngineSearch:
    return DefaultEngineSearch(query=_query_string(query))


RULES: Tuple[Rule, ...] = (
    match_empty,
    match_uri,
    match_searchurl_alias,
    match_engine_alias,
    match_bare_domain,
    match_configured_engine,
)


def classify(
    query: str,
    config: Optional[Dict] = None,
    search_engines: Iterable[SearchEngine] = (),
) -> ClassifiedAddress:
    """Decide what navigating to ``query`` means.

    ``config`` is a snapshot with ``searchurls``, ``searchengine`` and
    ``newtab``; absent keys read as empty. Never raises for bad input.
    """
    cfg = config or {}
    address = query
    if not address.strip():
        address = str(cfg.get("newtab") or "")

    snap = _Snapshot(
        searchurls=dict(cfg.get("searchurls") or {}),
        searchengine=cfg.get("searchengine") or None,
        engines=tuple(search_engines),
    )
    parsed = AddressQuery(address)
    for rule in RULES:
        result = rule(parsed, snap)
        if result is not None:
            return result
    return match_default_engine(parsed, snap)
