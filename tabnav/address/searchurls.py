"""Search-URL template expansion."""

from __future__ import annotations

import re
import urllib.parse
from typing import Optional

from .urls import parse_url

PLACEHOLDER = "%s"

_POSITIONAL_RE = re.compile(r"%s(\d+)")


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way ``encodeURIComponent`` does."""
    return urllib.parse.quote(value, safe="-_.!~*'()")


def interpolate_search_item(template: str, query: str) -> Optional[str]:
    """Expand a search-URL template with ``query`` and return the href.

    ``%sN`` takes the N-th space-separated word of the query, the first plain
    ``%s`` takes the whole query. A template without a placeholder gets the
    query appended. Returns ``None`` when the template is not a URL.
    """
    base = parse_url(template)
    if base is None:
        return None

    href = base.href
    if PLACEHOLDER in href:
        words = query.split(" ")

        def _word(match: re.Match) -> str:
            index = int(match.group(1)) - 1
            if index < 0 or index >= len(words):
                return ""
            return encode_uri_component(words[index])

        href = _POSITIONAL_RE.sub(_word, href)
        href = href.replace(PLACEHOLDER, encode_uri_component(query), 1)
    else:
        href = href + encode_uri_component(query)

    expanded = parse_url(href)
    if expanded is None:
        return None
    return expanded.href
