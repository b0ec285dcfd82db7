"""CLI for the resolver configuration.

Usage:
    hotcontext config list                      Show keys, defaults and rules
    hotcontext config get <key>                 Print the effective value
    hotcontext config set [--global] <key> <v>  Write an override
    hotcontext config reset [--global] <key>    Remove an override
    hotcontext config show                      Effective values and their source
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

import hotcontext.config

_DESCRIPTIONS = {
    "bundle_dir": "relative directory searched under cwd, then under home",
    "log_level": "stderr log level (DEBUG, INFO, WARNING, ...)",
}


def cmd_list() -> int:
    """Print every key with its default and what it controls."""
    for f in dataclasses.fields(hotcontext.config.ResolverConfig):
        print(f"{f.name} = {f.default!r}")
        print(f"    {_DESCRIPTIONS.get(f.name, '')}")
    return 0


def cmd_get(key: str, root: Path) -> int:
    """Print the effective value for *key*."""
    values = hotcontext.config.effective(root)
    if key not in values:
        print(f"Unknown key: {key}", file=sys.stderr)
        return 1
    print(values[key][0])
    return 0


def cmd_set(key: str, value: str, *, global_flag: bool, root: Path) -> int:
    """Validate and write an override."""
    scope = "global" if global_flag else "local"
    try:
        stored = hotcontext.config.set_value(key, value, scope=scope, root=root)
    except hotcontext.config.ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Set {key} = {stored} ({scope}: {hotcontext.config.path_for(scope, root)})")
    return 0


def cmd_reset(key: str, *, global_flag: bool, root: Path) -> int:
    """Remove an override."""
    scope = "global" if global_flag else "local"
    try:
        removed = hotcontext.config.reset_value(key, scope=scope, root=root)
    except hotcontext.config.ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Reset {key} ({scope})" if removed else f"No {scope} override for {key}")
    return 0


def cmd_show(root: Path) -> int:
    """Print effective values and where each one comes from."""
    for key, (value, source) in hotcontext.config.effective(root).items():
        print(f"{key} = {value!r}  ({source})")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``hotcontext config``."""
    parser = argparse.ArgumentParser(
        prog="hotcontext config",
        description="Resolver configuration.",
    )
    sub = parser.add_subparsers(dest="subcmd")

    sub.add_parser("list", help="Show keys, defaults and rules")

    p_get = sub.add_parser("get", help="Print the effective value")
    p_get.add_argument("key")

    p_set = sub.add_parser("set", help="Write an override")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument("--global", dest="global_flag", action="store_true")

    p_reset = sub.add_parser("reset", help="Remove an override")
    p_reset.add_argument("key")
    p_reset.add_argument("--global", dest="global_flag", action="store_true")

    p_show = sub.add_parser("show", help="Effective values and their source")

    for p in (p_get, p_set, p_reset, p_show):
        p.add_argument("--path", type=Path, default=Path.cwd())

    args = parser.parse_args(argv)

    if args.subcmd == "list":
        return cmd_list()
    elif args.subcmd == "get":
        return cmd_get(args.key, args.path)
    elif args.subcmd == "set":
        return cmd_set(
            args.key, args.value, global_flag=args.global_flag, root=args.path
        )
    elif args.subcmd == "reset":
        return cmd_reset(args.key, global_flag=args.global_flag, root=args.path)
    elif args.subcmd == "show":
        return cmd_show(args.path)
    else:
        parser.print_help()
        return 1
