"""Domain normalization for user-entered site addresses.

Users type anything from ``example.com`` to
``https://Example.com/some/page?q=1``. Both the exclude list and the
category map key sites by their host name, so every entry goes through
``normalize_domain`` first.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

DEFAULT_SCHEME = "https"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_HOST_RE = re.compile(r"^[^\s/\\?#@]+$")


def has_scheme(value: str) -> bool:
    """Check if the string starts with ``<scheme>://``."""
    return bool(_SCHEME_RE.match(value))


def normalize_domain(raw: str) -> str:
    """Turn a URL or bare host into a lower-cased host name.

    Strings without a scheme are parsed as ``https://<raw>``. Non-ASCII
    hosts are converted to punycode. This never
    raises: when the input cannot be parsed into a usable host, the
    original string is returned lower-cased.

    Args:
        raw: URL or host as typed by the user.

    Returns:
        Canonical domain string.

    Example:
        >>> normalize_domain("https://Example.com/path")
        'example.com'
        >>> normalize_domain("news.ycombinator.com")
        'news.ycombinator.com'
    """
    candidate = raw.strip()
    if not has_scheme(candidate):
        candidate = f"{DEFAULT_SCHEME}://{candidate}"

    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        # Accessing .port validates it; a garbage port means a garbage URL.
        _ = parts.port
        if host and not host.isascii():
            host = host.encode("idna").decode("ascii")
    except ValueError:
        return raw.lower()

    if not host or not _HOST_RE.match(host):
        return raw.lower()
    return host
