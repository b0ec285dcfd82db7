"""Extract ``+tag`` references from prompt text.

A tag is a ``+`` immediately followed by one or more of
``[A-Za-z0-9_-]``. ``x + y`` is not a tag.
"""

from __future__ import annotations

import re

TAG_PREFIX = "+"

_TAG_RE = re.compile(r"\+([A-Za-z0-9_-]+)")


def extract_tags(text: str) -> list[str]:
    """Return unique tags in order of first occurrence."""
    seen: set[str] = set()
    tags: list[str] = []
    for tag in _TAG_RE.findall(text):
        if tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags
