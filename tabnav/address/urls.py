"""Fallible URL parsing and address heuristics.

``parse_url`` follows the browser URL parser closely enough for command-bar
input: it returns ``None`` instead of raising when the text is not a URL, and
``ParsedURL.href`` is the serialized form a browser would navigate to
(lowercased scheme and host, default port dropped, "/" path for web schemes,
spaces and non-ASCII characters percent-encoded).
"""

from __future__ import annotations

import ipaddress
import re
import urllib.parse
from dataclasses import dataclass
from typing import List, Optional, Tuple

SPECIAL_SCHEMES = {
    "ftp": "21",
    "http": "80",
    "https": "443",
    "ws": "80",
    "wss": "443",
}

URI_SCHEME_RE = re.compile(r"^[a-zA-Z0-9+.-]+:[^\s:]")

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):(.*)$", re.DOTALL)
_IPV4_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]*$")
_IPV4_DIGITS = {
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}

_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#/:<>?@[\\]^|")
_FORBIDDEN_DOMAIN_CHARS = _FORBIDDEN_HOST_CHARS | frozenset("%")

_FRAGMENT_UNSAFE = frozenset(' "<>`')
_QUERY_UNSAFE = frozenset(' "#<>')
_SPECIAL_QUERY_UNSAFE = _QUERY_UNSAFE | frozenset("'")
_PATH_UNSAFE = _QUERY_UNSAFE | frozenset("?`{}")
_USERINFO_UNSAFE = _PATH_UNSAFE | frozenset("/:;=@[\\]^|")


@dataclass(frozen=True)
class ParsedURL:
    href: str
    scheme: str
    username: str = ""
    password: str = ""
    hostname: str = ""
    port: str = ""
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None


def _encode(value: str, unsafe: frozenset) -> str:
    out = []
    for ch in value:
        code = ord(ch)
        if 0x20 < code < 0x7F and ch not in unsafe:
            out.append(ch)
        else:
            out.append(urllib.parse.quote(ch, safe=""))
    return "".join(out)


def _split_off(value: str, marker: str) -> Tuple[str, Optional[str]]:
    head, sep, tail = value.partition(marker)
    if not sep:
        return value, None
    return head, tail


def _strip_input(text: str) -> str:
    value = str(text or "").strip("".join(chr(c) for c in range(0x21)))
    return value.replace("\t", "").replace("\n", "").replace("\r", "")


def _parse_ipv4_number(part: str) -> Optional[int]:
    if not part:
        return None
    radix = 10
    if part[:2] in ("0x", "0X"):
        part = part[2:]
        radix = 16
    elif len(part) > 1 and part.startswith("0"):
        part = part[1:]
        radix = 8
    if not part:
        return 0
    # int() would also take a sign, "_" separators and non-ASCII digits.
    if any(ch not in _IPV4_DIGITS[radix] for ch in part):
        return None
    return int(part, radix)


def _ends_in_number(host: str) -> bool:
    parts = host.split(".")
    if parts[-1] == "" and len(parts) > 1:
        parts.pop()
    last = parts[-1]
    if last and last.isascii() and last.isdigit():
        return True
    return bool(_IPV4_HEX_RE.match(last))


def _parse_ipv4(host: str) -> Optional[str]:
    parts = host.split(".")
    if parts[-1] == "" and len(parts) > 1:
        parts.pop()
    if len(parts) > 4:
        return None
    numbers: List[int] = []
    for part in parts:
        number = _parse_ipv4_number(part)
        if number is None:
            return None
        numbers.append(number)
    if any(n > 255 for n in numbers[:-1]):
        return None
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        return None
    value = numbers[-1]
    for i, n in enumerate(numbers[:-1]):
        value += n * 256 ** (3 - i)
    return str(ipaddress.IPv4Address(value))


def _parse_host(raw: str, *, special: bool) -> Optional[str]:
    if raw.startswith("["):
        if not raw.endswith("]"):
            return None
        try:
            addr = ipaddress.IPv6Address(raw[1:-1])
        except ValueError:
            return None
        return f"[{addr.compressed}]"

    if not special:
        if any(ch in _FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 for ch in raw):
            return None
        return _encode(raw, frozenset())

    host = urllib.parse.unquote(raw).lower()
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return None
    if any(ch in _FORBIDDEN_DOMAIN_CHARS or ord(ch) <= 0x20 or ord(ch) == 0x7F for ch in host):
        return None
    if _ends_in_number(host):
        return _parse_ipv4(host)
    return host


def _split_host_port(hostport: str) -> Tuple[str, str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            return hostport, ""
        tail = hostport[end + 1 :]
        if tail.startswith(":"):
            return hostport[: end + 1], tail[1:]
        return hostport[: end + 1] + tail, ""
    host, _, port = hostport.partition(":")
    return host, port


def _normalize_port(port: str, scheme: str) -> Optional[str]:
    if not port:
        return ""
    if not (port.isascii() and port.isdigit()):
        return None
    number = int(port)
    if number > 65535:
        return None
    value = str(number)
    if SPECIAL_SCHEMES.get(scheme) == value:
        return ""
    return value


def _remove_dot_segments(path: str) -> str:
    segments = path.split("/")[1:]
    out: List[str] = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        lowered = segment.lower()
        if lowered in ("..", ".%2e", "%2e.", "%2e%2e"):
            if out:
                out.pop()
            if last:
                out.append("")
        elif lowered in (".", "%2e"):
            if last:
                out.append("")
        else:
            out.append(segment)
    return "/" + "/".join(out)


def _serialize(
    scheme: str,
    *,
    host: Optional[str],
    username: str = "",
    password: str = "",
    port: str = "",
    path: str = "",
    query: Optional[str] = None,
    fragment: Optional[str] = None,
) -> str:
    href = scheme + ":"
    if host is not None:
        href += "//"
        if username or password:
            href += username
            if password:
                href += ":" + password
            href += "@"
        href += host
        if port:
            href += ":" + port
    href += path
    if query is not None:
        href += "?" + query
    if fragment is not None:
        href += "#" + fragment
    return href


def _parse_authority(authority: str, scheme: str, *, special: bool):
    userinfo, at, hostport = authority.rpartition("@")
    if not at:
        userinfo = ""
    username, _, password = userinfo.partition(":")
    raw_host, raw_port = _split_host_port(hostport)
    port = _normalize_port(raw_port, scheme)
    if port is None:
        return None
    if not raw_host:
        if special or userinfo or port:
            return None
        return "", "", "", ""
    host = _parse_host(raw_host, special=special)
    if host is None or (special and not host):
        return None
    return (
        _encode(username, _USERINFO_UNSAFE),
        _encode(password, _USERINFO_UNSAFE),
        host,
        port,
    )


def _parse_special(scheme: str, rest: str) -> Optional[ParsedURL]:
    rest = rest.replace("\\", "/")
    rest, fragment = _split_off(rest, "#")
    rest, query = _split_off(rest, "?")
    authority, sep, tail = rest.lstrip("/").partition("/")
    parts = _parse_authority(authority, scheme, special=True)
    if parts is None:
        return None
    username, password, host, port = parts

    path = _encode(_remove_dot_segments(sep + tail), _PATH_UNSAFE)
    query = None if query is None else _encode(query, _SPECIAL_QUERY_UNSAFE)
    fragment = None if fragment is None else _encode(fragment, _FRAGMENT_UNSAFE)
    href = _serialize(
        scheme,
        host=host,
        username=username,
        password=password,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )
    return ParsedURL(
        href=href,
        scheme=scheme,
        username=username,
        password=password,
        hostname=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


def _parse_non_special(scheme: str, rest: str) -> Optional[ParsedURL]:
    rest, fragment = _split_off(rest, "#")
    rest, query = _split_off(rest, "?")
    query = None if query is None else _encode(query, _QUERY_UNSAFE)
    fragment = None if fragment is None else _encode(fragment, _FRAGMENT_UNSAFE)

    if not rest.startswith("//"):
        # Opaque path (mailto:, about:, javascript:, ...) keeps its spaces.
        path = "".join(ch if ord(ch) >= 0x20 else urllib.parse.quote(ch, safe="") for ch in rest)
        href = _serialize(scheme, host=None, path=path, query=query, fragment=fragment)
        return ParsedURL(href=href, scheme=scheme, path=path, query=query, fragment=fragment)

    authority, sep, tail = rest[2:].partition("/")
    parts = _parse_authority(authority, scheme, special=False)
    if parts is None:
        return None
    username, password, host, port = parts
    path = sep + tail
    if path:
        path = _encode(_remove_dot_segments(path), _PATH_UNSAFE)
    href = _serialize(
        scheme,
        host=host,
        username=username,
        password=password,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )
    return ParsedURL(
        href=href,
        scheme=scheme,
        username=username,
        password=password,
        hostname=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


def parse_url(text: str) -> Optional[ParsedURL]:
    """Parse an absolute URL, or return ``None`` when ``text`` is not one."""
    value = _strip_input(text)
    match = _SCHEME_RE.match(value)
    if match is None:
        return None
    scheme = match.group(1).lower()
    rest = match.group(2)
    if scheme in SPECIAL_SCHEMES:
        return _parse_special(scheme, rest)
    return _parse_non_special(scheme, rest)


def has_uri_scheme(word: str) -> bool:
    return bool(URI_SCHEME_RE.match(word or ""))


def guess_bare_domain(address: str) -> Optional[ParsedURL]:
    """Read ``address`` as a web address typed without its scheme.

    Single-label guesses ("search term", "foo/bar") are rejected unless they
    carry a port or a password.
    """
    url = parse_url("http://" + address)
    if url is None:
        return None
    if "." in url.hostname or url.port or url.password:
        return url
    return None
