"""Identity calculation for headlines."""

import hashlib
import re
from urllib.parse import urlsplit, urlunsplit

from ..S2_clean.html import decode_entities

DEFAULT_PORTS = {
    "http": "80",
    "https": "443",
    "ftp": "21",
    "ws": "80",
    "wss": "443",
    "gopher": "70",
    "nntp": "119",
    "news": "119",
    "telnet": "23",
}

_UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)
_PERCENT_RE = re.compile(r"%([0-9A-Fa-f]{2})")


def _normalize_percent(match: re.Match) -> str:
    char = chr(int(match.group(1), 16))
    if char in _UNRESERVED:
        return char
    return "%" + match.group(1).upper()


def _remove_dot_segments(path: str) -> str:
    """Resolve "." and ".." segments in a URL path."""
    if not path:
        return path

    segments = path.split("/")
    floor = 1 if path.startswith("/") else 0
    resolved: list[str] = []
    for segment in segments:
        if segment == "..":
            if len(resolved) > floor:
                resolved.pop()
        elif segment != ".":
            resolved.append(segment)

    # "/a/b/.." and "/a/." still name a directory
    if segments[-1] in (".", ".."):
        resolved.append("")
    return "/".join(resolved)


def _normalize_netloc(scheme: str, netloc: str) -> str:
    userinfo, at, hostport = netloc.rpartition("@")

    if hostport.startswith("["):
        # IPv6 literal: [::1]:8080
        end = hostport.find("]") + 1
        host, port = hostport[:end], hostport[end:].lstrip(":")
    else:
        host, _, port = hostport.partition(":")

    host = host.lower()
    if port == DEFAULT_PORTS.get(scheme):
        port = ""

    netloc = f"{userinfo}{at}{host}"
    if port:
        netloc += f":{port}"
    return netloc


def canonicalize_url(url: str | None) -> str:
    """
    Normalize a link so equivalent spellings compare equal.

    - Lowercase scheme and host
    - Drop the scheme's default port (and an empty port)
    - Resolve dot segments in the path
    - Uppercase percent-escapes, decode escaped unreserved characters
    - Empty http(s) path becomes "/"

    Examples:
        "HTTP://Example.com:80/a/./b/../c" -> "http://example.com/a/c"
        "https://example.com" -> "https://example.com/"
    """
    if not url:
        return ""

    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    scheme = parts.scheme.lower()
    netloc = _normalize_netloc(scheme, parts.netloc) if parts.netloc else ""

    path = _PERCENT_RE.sub(_normalize_percent, parts.path)
    path = _remove_dot_segments(path)
    if not path and netloc and scheme in ("http", "https"):
        path = "/"

    query = _PERCENT_RE.sub(_normalize_percent, parts.query)
    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def normalize_headline(headline: str | None) -> str:
    """Decode entities and trim surrounding whitespace."""
    return decode_entities(headline).strip()


def hash_headline(headline: str | None) -> str:
    """Hash normalized headline to MD5."""
    normalized = normalize_headline(headline)
    if not normalized:
        return ""
    return hashlib.md5(normalized.encode("utf-8")).hexdigest()


def resolve_identity(headline: str | None, url: str | None, headline_as_id: bool = False) -> str:
    """
    Get the identity used to recognize a headline across refreshes.

    Some feeds reuse links for different entries or switch between host
    spellings (www.x.org / x.org / x.org:80) inside one document. For those,
    ``headline_as_id`` hashes the headline text instead.

    Returns:
        Canonical url, or 32-char md5 hex digest of the headline;
        empty string if neither can be computed
    """
    if headline_as_id:
        return hash_headline(headline)
    return canonicalize_url(url)
