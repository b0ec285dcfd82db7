"""Resolver configuration backed by two TOML files.

Config files, both holding a ``[resolver]`` table:
    ~/.config/hotcontext/config.toml     global (user-wide)
    <cwd>/.hotcontext/config.toml        local  (same root as the project scope)

Local values override global ones, which override the dataclass defaults.
A value that fails validation is logged and skipped, so a bad override
never changes where bundles are searched.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import tomllib
from typing import Any, Callable

logger = logging.getLogger("hotcontext.config")

SECTION = "resolver"
DEFAULT_BUNDLE_DIR = ".claude/hotcontext"
SCOPES = ("local", "global")


class ConfigError(ValueError):
    """A config key or value was rejected."""


@dataclasses.dataclass
class ResolverConfig:
    # Relative segment joined under both cwd (project) and home (personal)
    bundle_dir: str = DEFAULT_BUNDLE_DIR

    # Level for the stderr log handler installed by the CLI
    log_level: str = "WARNING"


def _check_bundle_dir(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError("bundle_dir must be a non-empty string")
    path = pathlib.PurePath(value)
    if path.anchor or ".." in path.parts:
        raise ConfigError(
            f"bundle_dir must be a relative path below the search root: {value!r}"
        )
    return value


def _check_log_level(value: Any) -> str:
    names = logging.getLevelNamesMapping()
    if not isinstance(value, str) or value.upper() not in names:
        raise ConfigError(
            f"log_level must be one of {', '.join(sorted(names))}: {value!r}"
        )
    return value.upper()


_VALIDATORS: dict[str, Callable[[Any], str]] = {
    "bundle_dir": _check_bundle_dir,
    "log_level": _check_log_level,
}


def keys() -> list[str]:
    return [f.name for f in dataclasses.fields(ResolverConfig)]


def validate(key: str, value: Any) -> str:
    """Return the normalized value for *key*, or raise ``ConfigError``."""
    check = _VALIDATORS.get(key)
    if check is None:
        raise ConfigError(
            f"Unknown key: {key} (expected one of {', '.join(keys())})"
        )
    return check(value)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def _global_path() -> pathlib.Path:
    return pathlib.Path.home() / ".config" / "hotcontext" / "config.toml"


def _local_path(root: pathlib.Path) -> pathlib.Path:
    return root / ".hotcontext" / "config.toml"


def path_for(scope: str, root: pathlib.Path | None = None) -> pathlib.Path:
    if scope == "global":
        return _global_path()
    if scope == "local":
        return _local_path(root if root is not None else pathlib.Path.cwd())
    raise ConfigError(f"Unknown scope: {scope}")


def _read_section(path: pathlib.Path) -> dict[str, Any]:
    """Return the ``[resolver]`` table of *path*; unreadable files count as empty."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring config %s: %s", path, exc)
        return {}
    section = data.get(SECTION, {})
    return section if isinstance(section, dict) else {}


def _write_section(path: pathlib.Path, section: dict[str, Any]) -> None:
    import tomli_w

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        data = {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    if section:
        data[SECTION] = section
    else:
        data.pop(SECTION, None)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def effective(root: pathlib.Path | None = None) -> dict[str, tuple[str, str]]:
    """Map each key to ``(value, source)`` where source is default/global/local."""
    result = {
        f.name: (f.default, "default") for f in dataclasses.fields(ResolverConfig)
    }
    for scope in reversed(SCOPES):
        path = path_for(scope, root)
        for key, value in _read_section(path).items():
            if key not in result:
                continue
            try:
                result[key] = (validate(key, value), scope)
            except ConfigError as exc:
                logger.warning("Ignoring %s in %s: %s", key, path, exc)
    return result


def load(root: pathlib.Path | None = None) -> ResolverConfig:
    """Merge defaults → global → local into a ``ResolverConfig``."""
    return ResolverConfig(**{k: v for k, (v, _) in effective(root).items()})


def load_config(root: pathlib.Path | None = None) -> ResolverConfig:
    """Like ``load`` but never raises; the hook falls back to defaults."""
    try:
        return load(root)
    except Exception:
        logger.debug("Failed to load resolver config", exc_info=True)
        return ResolverConfig()


def set_value(
    key: str,
    value: str,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> str:
    """Validate and write an override. Returns the stored value."""
    value = validate(key, value)
    path = path_for(scope, root)
    section = _read_section(path)
    section[key] = value
    _write_section(path, section)
    return value


def reset_value(
    key: str,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> bool:
    """Remove an override. Returns False when there was none."""
    if key not in keys():
        raise ConfigError(f"Unknown key: {key}")
    path = path_for(scope, root)
    section = _read_section(path)
    if key not in section:
        return False
    del section[key]
    _write_section(path, section)
    return True
