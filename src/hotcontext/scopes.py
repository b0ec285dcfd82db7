"""Layered lookup of bundle files across project and personal scopes.

PROJECT is always searched before PERSONAL so a project bundle shadows a
personal bundle with the same tag.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import pathlib

import hotcontext.config

logger = logging.getLogger("hotcontext.scopes")

BUNDLE_SUFFIX = ".md"


class Scope(enum.Enum):
    PROJECT = "project"
    PERSONAL = "personal"


@dataclasses.dataclass(frozen=True)
class SearchDir:
    scope: Scope
    path: pathlib.Path


@dataclasses.dataclass(frozen=True)
class Resolution:
    tag: str
    scope: Scope
    path: pathlib.Path


def default_search_dirs(
    cwd: pathlib.Path,
    home: pathlib.Path,
    bundle_dir: str = hotcontext.config.DEFAULT_BUNDLE_DIR,
) -> list[SearchDir]:
    """Build the ordered search path from explicit roots."""
    return [
        SearchDir(Scope.PROJECT, cwd / bundle_dir),
        SearchDir(Scope.PERSONAL, home / bundle_dir),
    ]


def bundle_path(directory: pathlib.Path, tag: str) -> pathlib.Path:
    return directory / f"{tag}{BUNDLE_SUFFIX}"


def resolve_tag(tag: str, search_dirs: list[SearchDir]) -> Resolution | None:
    """Return the first scope holding ``<tag>.md``, or None.

    Inaccessible directories count as a miss for that scope only.
    """
    for search_dir in search_dirs:
        path = bundle_path(search_dir.path, tag)
        try:
            found = path.exists()
        except OSError:
            logger.debug(
                "Cannot stat %s, skipping %s scope", path, search_dir.scope.value
            )
            continue
        if found:
            return Resolution(tag=tag, scope=search_dir.scope, path=path)
    return None


def list_bundles(search_dirs: list[SearchDir]) -> list[tuple[Resolution, bool]]:
    """List every bundle per scope, flagging those shadowed by an earlier scope.

    Returns ``(resolution, shadowed)`` pairs in search order, tags sorted
    within each scope.
    """
    seen: set[str] = set()
    entries: list[tuple[Resolution, bool]] = []
    for search_dir in search_dirs:
        try:
            files = sorted(search_dir.path.glob(f"*{BUNDLE_SUFFIX}"))
        except OSError:
            continue
        for path in files:
            tag = path.stem
            entries.append((Resolution(tag, search_dir.scope, path), tag in seen))
        seen.update(path.stem for path in files)
    return entries
