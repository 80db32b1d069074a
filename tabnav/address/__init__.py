"""Command-bar address classification and search-URL expansion."""

from .classify import classify
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
from .searchurls import encode_uri_component, interpolate_search_item
from .urls import ParsedURL, guess_bare_domain, has_uri_scheme, parse_url

__all__ = [
    "classify",
    "AddressQuery",
    "ClassifiedAddress",
    "ConfiguredSearchURL",
    "DefaultEngineSearch",
    "DirectURL",
    "Empty",
    "NamedEngineSearch",
    "SearchEngine",
    "find_engine",
    "encode_uri_component",
    "interpolate_search_item",
    "ParsedURL",
    "guess_bare_domain",
    "has_uri_scheme",
    "parse_url",
]
