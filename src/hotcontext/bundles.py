"""Load bundle files and strip leading front-matter.

Front-matter is a block delimited by ``---`` lines at the very start of the
file::

    ---
    name: simple
    ---
    # Body

Anything else, including a ``---`` block that is not at the start, is kept
as body text.
"""

from __future__ import annotations

import pathlib
import re

_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n?(.*)\Z", re.DOTALL)


class BundleLoadError(Exception):
    """A resolved bundle file could not be read or decoded."""


def strip_frontmatter(content: str) -> str:
    """Return *content* without its leading front-matter block, if any."""
    match = _FRONTMATTER_RE.match(content)
    if match:
        return match.group(2)
    return content


def load_bundle(path: pathlib.Path) -> str:
    """Read a bundle as UTF-8 and return its trimmed body."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BundleLoadError(str(exc)) from exc
    return strip_frontmatter(raw).strip()
