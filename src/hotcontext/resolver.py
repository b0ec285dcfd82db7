"""UserPromptSubmit hook — resolve ``+tag`` bundles into prompt context.

Reads the hook envelope, extracts tags from the prompt, resolves each tag
across the project then personal bundle directories, and returns the
concatenated bundle text with inline warnings for anything that failed.

``run_pass`` never raises: it returns ``Ok`` with the text to print (possibly
empty) or ``Failed`` with a diagnostic for the error channel.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import sys

import pydantic

import hotcontext.bundles
import hotcontext.config
import hotcontext.formatter
import hotcontext.scopes
import hotcontext.tags

logger = logging.getLogger("hotcontext.resolver")


class HookInput(pydantic.BaseModel):
    """The hook envelope. Only ``prompt`` is consumed; other keys are ignored."""

    model_config = pydantic.ConfigDict(extra="ignore")

    prompt: str = ""

    @pydantic.field_validator("prompt", mode="before")
    @classmethod
    def _none_is_empty(cls, value: object) -> object:
        return "" if value is None else value


@dataclasses.dataclass(frozen=True)
class Ok:
    text: str


@dataclasses.dataclass(frozen=True)
class Failed:
    error: str


PassResult = Ok | Failed


@dataclasses.dataclass
class Composition:
    bundles: list[tuple[str, str]] = dataclasses.field(default_factory=list)
    warnings: list[str] = dataclasses.field(default_factory=list)


def compose(
    tags: list[str], search_dirs: list[hotcontext.scopes.SearchDir]
) -> Composition:
    """Resolve and load each tag in order, collecting bundles and warnings."""
    result = Composition()
    for tag in tags:
        resolution = hotcontext.scopes.resolve_tag(tag, search_dirs)
        if resolution is None:
            result.warnings.append(hotcontext.formatter.not_found_warning(tag))
            continue
        logger.debug(
            "+%s -> %s (%s)", tag, resolution.path, resolution.scope.value
        )
        try:
            content = hotcontext.bundles.load_bundle(resolution.path)
        except hotcontext.bundles.BundleLoadError as exc:
            logger.warning("Failed to load +%s from %s: %s", tag, resolution.path, exc)
            result.warnings.append(
                hotcontext.formatter.load_error_warning(tag, str(exc))
            )
            continue
        result.bundles.append((tag, content))
    return result


def resolve_prompt(
    prompt: str, search_dirs: list[hotcontext.scopes.SearchDir]
) -> str:
    """Return the formatted bundle text for *prompt* (``""`` without tags)."""
    tags = hotcontext.tags.extract_tags(prompt)
    if not tags:
        return ""
    logger.debug("Tags: %s", ", ".join(tags))
    composed = compose(tags, search_dirs)
    return hotcontext.formatter.format_output(composed.bundles, composed.warnings)


def run_pass(
    raw: str | bytes, search_dirs: list[hotcontext.scopes.SearchDir]
) -> PassResult:
    """Parse the raw envelope and run the pipeline, containing all failures."""
    try:
        hook_input = HookInput.model_validate_json(raw)
    except pydantic.ValidationError as exc:
        return Failed(f"invalid hook input: {exc.errors()[0]['msg']}")

    try:
        return Ok(resolve_prompt(hook_input.prompt, search_dirs))
    except Exception as exc:
        logger.debug("Resolver pass failed", exc_info=True)
        return Failed(str(exc) or type(exc).__name__)


def search_dirs_for(
    cwd: pathlib.Path | None = None, home: pathlib.Path | None = None
) -> list[hotcontext.scopes.SearchDir]:
    """Search dirs for the running process, using the configured bundle_dir."""
    cfg = hotcontext.config.load_config(cwd)
    return hotcontext.scopes.default_search_dirs(
        cwd if cwd is not None else pathlib.Path.cwd(),
        home if home is not None else pathlib.Path.home(),
        cfg.bundle_dir,
    )


def main(raw: str | bytes) -> int:
    """Host-facing entry point: print ``Ok`` text, report ``Failed`` on stderr."""
    try:
        search_dirs = search_dirs_for()
    except Exception as exc:
        # Path.home() raises when no home directory can be determined
        logger.debug("Cannot build search dirs", exc_info=True)
        result: PassResult = Failed(str(exc) or type(exc).__name__)
    else:
        result = run_pass(raw, search_dirs)
    if isinstance(result, Failed):
        print(f"[hotcontext] Resolver error: {result.error}", file=sys.stderr)
    elif result.text:
        sys.stdout.write(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.stdin.buffer.read()))
