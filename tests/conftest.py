"""Shared test fixtures for hotcontext tests."""

from __future__ import annotations

import json
import pathlib

import pytest

import hotcontext.config
import hotcontext.scopes

SIMPLE_PROJECT = """\
---
name: simple
description: A simple test bundle
---
# Simple Test Bundle

Project-scoped content.
"""

SIMPLE_PERSONAL = """\
---
name: simple
---
# Personal Simple Bundle
"""

NO_FRONTMATTER = """\
# No Frontmatter Bundle

Just plain markdown content.
"""

PERSONAL_ONLY = """\
---
name: personal-only
---
# Personal Only Bundle
"""


@pytest.fixture(autouse=True)
def home(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Point the home directory and global config at a temp dir."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.setattr(
        hotcontext.config,
        "_global_path",
        lambda: home_dir / ".config" / "hotcontext" / "config.toml",
    )
    return home_dir


@pytest.fixture
def project(tmp_path: pathlib.Path) -> pathlib.Path:
    """An empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_bundle():
    """Factory writing ``<root>/.claude/hotcontext/<tag>.md``."""

    def _write(root: pathlib.Path, tag: str, content: str) -> pathlib.Path:
        bundle_dir = root / ".claude" / "hotcontext"
        bundle_dir.mkdir(parents=True, exist_ok=True)
        path = bundle_dir / f"{tag}.md"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bundles(project: pathlib.Path, home: pathlib.Path, write_bundle) -> None:
    """Populate both scopes: ``simple`` in both, one bundle unique to each."""
    write_bundle(project, "simple", SIMPLE_PROJECT)
    write_bundle(project, "no-frontmatter", NO_FRONTMATTER)
    write_bundle(home, "simple", SIMPLE_PERSONAL)
    write_bundle(home, "personal-only", PERSONAL_ONLY)


@pytest.fixture
def search_dirs(
    project: pathlib.Path, home: pathlib.Path
) -> list[hotcontext.scopes.SearchDir]:
    return hotcontext.scopes.default_search_dirs(project, home)


@pytest.fixture
def settings_file(project: pathlib.Path):
    """Factory for creating a project settings.local.json file."""

    def _create(settings: dict | None = None) -> pathlib.Path:
        claude_dir = project / ".claude"
        claude_dir.mkdir(parents=True, exist_ok=True)
        path = claude_dir / "settings.local.json"
        if settings is None:
            settings = {"hooks": {}}
        path.write_text(json.dumps(settings, indent=2))
        return path

    return _create
