"""Assemble resolved bundles and warnings into the hook output text."""

from __future__ import annotations

from typing import Iterable

MARKER = "[hotcontext]"


def section_header(tag: str) -> str:
    return f"--- hotcontext: {tag} ---"


def not_found_warning(tag: str) -> str:
    return f"{MARKER} No bundle found for +{tag}"


def load_error_warning(tag: str, detail: str) -> str:
    return f"{MARKER} Error loading +{tag}: {detail}"


def format_output(
    bundles: Iterable[tuple[str, str]],
    warnings: Iterable[str],
) -> str:
    """Join ``(tag, content)`` sections, then warnings, into one block.

    Each section is a header line, the content, and a blank separator.
    The result is stripped; empty input yields ``""``.
    """
    lines: list[str] = []
    for tag, content in bundles:
        lines.append(section_header(tag))
        lines.append(content)
        lines.append("")
    lines.extend(warnings)
    return "\n".join(lines).strip()
