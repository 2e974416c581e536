"""Configuration: XDG-compliant config discovery and settings."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

from markvault.blocks import FENCE_POLICIES
from markvault.errors import ConfigError

_PROJECT_CONFIG = "markvault.toml"
_APP_DIR = "markvault"
_XDG_CONFIG = "config.toml"


def find_config() -> Path | None:
    """Discover config file.

    Search order (first existing file wins):
    1. $MARKVAULT_CONFIG env var (explicit override)
    2. markvault.toml - walk up from CWD (project-local config)
    3. $XDG_CONFIG_HOME/markvault/config.toml (default ~/.config/)
    """
    env_path = os.environ.get("MARKVAULT_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.is_file():
            raise ConfigError(
                f"MARKVAULT_CONFIG points to missing file: {env_path}",
                suggestions=["Check the path or unset MARKVAULT_CONFIG to use auto-discovery"],
            )
        return p

    cwd = Path.cwd()
    for d in [cwd, *cwd.parents]:
        candidate = d / _PROJECT_CONFIG
        if candidate.is_file():
            return candidate

    xdg_path = xdg_config_path()
    if xdg_path.is_file():
        return xdg_path

    return None


def xdg_config_path() -> Path:
    """Return the XDG config file path for markvault."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / _APP_DIR / _XDG_CONFIG


def load_config_toml(path: Path | None = None) -> dict[str, object]:
    """Load and return raw TOML config dict. Empty dict if no file."""
    if path is None:
        path = find_config()
    if path is None:
        return {}
    try:
        with open(path, "rb") as f:
            result: dict[str, object] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return result


@dataclass
class Settings:
    """Rendering and export configuration."""

    unterminated_fence: str = "flush"
    stylesheet: Path | None = None


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from env vars and/or config TOML.

    Priority per key: $MARKVAULT_* env var > config TOML > default.
    """
    raw = load_config_toml(path)

    policy = os.environ.get("MARKVAULT_UNTERMINATED_FENCE") or str(raw.get("unterminated_fence", "flush"))
    if policy not in FENCE_POLICIES:
        raise ConfigError(
            f"Invalid unterminated_fence policy: {policy!r}",
            suggestions=[f"Use one of: {', '.join(FENCE_POLICIES)}"],
        )

    stylesheet_raw = os.environ.get("MARKVAULT_STYLESHEET") or raw.get("stylesheet")
    stylesheet = Path(str(stylesheet_raw)).expanduser() if stylesheet_raw else None
    if stylesheet is not None and not stylesheet.is_file():
        raise ConfigError(
            f"Stylesheet not found: {stylesheet}",
            suggestions=["Fix the stylesheet path or remove it to use the built-in print style"],
        )

    return Settings(unterminated_fence=policy, stylesheet=stylesheet)
