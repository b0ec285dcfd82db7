"""hotcontext CLI — +tag context bundles for Claude Code prompts.

Usage:
    hotcontext install             Register the prompt hook in current project
    hotcontext install --global    Register globally (~/.claude/settings.json)
    hotcontext install --remove    Remove the hook (add --global for global)
    hotcontext list [--path DIR]   List bundles available per scope
    hotcontext show <tag>          Print the bundle a tag resolves to
    hotcontext config <cmd>        Configuration (get/set/list/show)
    hotcontext hook                Run the hook (called by Claude Code, not users)
"""

from __future__ import annotations

import json
import logging
import pathlib
import sys

_HOOK_EVENT = "UserPromptSubmit"
_HOOK_COMMAND = "hotcontext hook"
_HOOK_TIMEOUT = 5


def _configure_logging() -> None:
    """Send log records to stderr at the configured level."""
    import hotcontext.config

    # log_level is validated against the logging level names on load
    cfg = hotcontext.config.load_config()
    logging.basicConfig(level=cfg.log_level, format="%(message)s", stream=sys.stderr)


def _settings_path(is_global: bool) -> pathlib.Path:
    if is_global:
        return pathlib.Path.home() / ".claude" / "settings.json"
    return pathlib.Path.cwd() / ".claude" / "settings.local.json"


def _is_our_entry(entry: dict) -> bool:
    return any(
        h.get("command") == _HOOK_COMMAND for h in entry.get("hooks", [])
    )


def _add_hook(settings: dict) -> dict:
    """Add the prompt hook, leaving other events and commands untouched."""
    hooks = settings.setdefault("hooks", {})
    entries = [e for e in hooks.get(_HOOK_EVENT, []) if not _is_our_entry(e)]
    entries.append(
        {
            "hooks": [
                {
                    "type": "command",
                    "command": _HOOK_COMMAND,
                    "timeout": _HOOK_TIMEOUT,
                }
            ]
        }
    )
    hooks[_HOOK_EVENT] = entries
    return settings


def _remove_hook(settings: dict) -> dict:
    hooks = settings.get("hooks")
    if not hooks:
        return settings
    entries = [e for e in hooks.get(_HOOK_EVENT, []) if not _is_our_entry(e)]
    if entries:
        hooks[_HOOK_EVENT] = entries
    else:
        hooks.pop(_HOOK_EVENT, None)
    if not hooks:
        del settings["hooks"]
    return settings


def _cmd_install(args: list[str]) -> int:
    """Register or remove the hotcontext hook.

    By default writes to .claude/settings.local.json in the current
    project.  Use ``--global`` to write to ~/.claude/settings.json
    instead.
    """
    remove = "--remove" in args
    is_global = "--global" in args
    settings_path = _settings_path(is_global)

    settings: dict = {}
    if settings_path.exists():
        try:
            settings = json.loads(settings_path.read_text())
        except json.JSONDecodeError as exc:
            print(f"Cannot parse {settings_path}: {exc}", file=sys.stderr)
            return 1

    if remove:
        _remove_hook(settings)
        if settings_path.exists():
            settings_path.write_text(json.dumps(settings, indent=2) + "\n")
        print("hotcontext hook removed from", settings_path)
        return 0

    settings_path.parent.mkdir(parents=True, exist_ok=True)
    _add_hook(settings)
    settings_path.write_text(json.dumps(settings, indent=2) + "\n")
    scope = "global" if is_global else "project"
    print(f"hotcontext hook registered ({scope}) in {settings_path}")
    return 0


def _parse_opt_value(args: list[str], key: str) -> str | None:
    if key not in args:
        return None
    idx = args.index(key)
    if idx + 1 >= len(args):
        return None
    return args[idx + 1]


def _cmd_list(args: list[str]) -> int:
    """List bundles per scope, marking those shadowed by the project scope."""
    import hotcontext.resolver
    import hotcontext.scopes

    path_opt = _parse_opt_value(args, "--path")
    cwd = pathlib.Path(path_opt) if path_opt else None
    search_dirs = hotcontext.resolver.search_dirs_for(cwd=cwd)

    entries = hotcontext.scopes.list_bundles(search_dirs)
    if not entries:
        print("No bundles found. Searched:")
        for search_dir in search_dirs:
            print(f"  {search_dir.scope.value:<8}  {search_dir.path}")
        return 0

    for resolution, shadowed in entries:
        suffix = "  (shadowed)" if shadowed else ""
        print(
            f"{resolution.scope.value:<8}  +{resolution.tag:<24}  "
            f"{resolution.path}{suffix}"
        )
    return 0


def _cmd_show(args: list[str]) -> int:
    """Print the scope, path and body a single tag resolves to."""
    if not args:
        print("Usage: hotcontext show <tag>", file=sys.stderr)
        return 1

    import hotcontext.bundles
    import hotcontext.resolver
    import hotcontext.scopes

    tag = args[0].removeprefix("+")
    resolution = hotcontext.scopes.resolve_tag(
        tag, hotcontext.resolver.search_dirs_for()
    )
    if resolution is None:
        print(f"No bundle found for +{tag}", file=sys.stderr)
        return 1
    try:
        content = hotcontext.bundles.load_bundle(resolution.path)
    except hotcontext.bundles.BundleLoadError as exc:
        print(f"Error loading +{tag}: {exc}", file=sys.stderr)
        return 1

    print(f"# +{tag} ({resolution.scope.value}) {resolution.path}")
    print(content)
    return 0


def _cmd_hook(args: list[str]) -> int:
    """Run the prompt hook on stdin. Called by Claude Code, not users."""
    import hotcontext.resolver

    return hotcontext.resolver.main(sys.stdin.buffer.read())


def _cmd_config(args: list[str]) -> int:
    """Configuration."""
    import hotcontext.config_cli

    return hotcontext.config_cli.main(args)


def main() -> None:
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        sys.exit(1)

    cmd = args[0]
    rest = args[1:]

    _configure_logging()

    if cmd == "hook":
        sys.exit(_cmd_hook(rest))
    elif cmd == "install":
        sys.exit(_cmd_install(rest))
    elif cmd == "list":
        sys.exit(_cmd_list(rest))
    elif cmd == "show":
        sys.exit(_cmd_show(rest))
    elif cmd == "config":
        sys.exit(_cmd_config(rest))
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
