"""Conversion between the exclude-list text box and the stored list.

The options page edits the exclude list as one domain per line. Decoding
trims every line and drops blank ones; order and duplicates are kept.
"""

from __future__ import annotations

from typing import Iterable

SEPARATOR = "\n"


def encode(entries: Iterable[str]) -> str:
    """Join exclude-list entries into newline-separated text."""
    return SEPARATOR.join(entries)


def decode(text: str) -> list[str]:
    """Split newline-separated text into trimmed, non-empty entries.

    Example:
        >>> decode("example.com\\n\\n  ads.net \\nexample.com")
        ['example.com', 'ads.net', 'example.com']
    """
    return [line.strip() for line in text.split(SEPARATOR) if line.strip()]
