"""Utilities for loading and writing configuration files."""

from __future__ import annotations

import importlib.resources
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from imgprobe.constants import (
    CONFIG_CONVERT_CANDIDATES,
    CONFIG_CONVERT_PATH,
    CONFIG_RESIZE_TIMEOUT,
    DEFAULT_CONVERT_CANDIDATES,
    DEFAULT_RESIZE_TIMEOUT,
)
from imgprobe.errors import ConfigLoadError

TOML_CONFIG = ".imgprobe.toml"
ENV_CONFIG_PATH = "IMGPROBE_CONFIG_PATH"


@dataclass(frozen=True, slots=True)
class ResizeSettings:
    """Typed view of the resize-related configuration keys."""

    timeout: float = DEFAULT_RESIZE_TIMEOUT
    convert_path: Path | None = None
    candidates: tuple[str, ...] = DEFAULT_CONVERT_CANDIDATES


def load_default_config_text() -> str:
    """Return the bundled default configuration text, formatting intact."""
    try:
        cfg_path = importlib.resources.files("imgprobe.resources").joinpath("default_config.toml")
        with cfg_path.open("r", encoding="utf-8") as f:  # type: ignore[attr-defined]
            return f.read()
    except OSError as err:  # pragma: no cover - packaging problem
        msg = f"Error loading default configuration: {err}"
        raise ConfigLoadError(msg) from err


def load_default_config() -> dict[str, Any]:
    """Return the bundled default configuration as a Python dict."""
    return tomllib.loads(load_default_config_text())


def write_default_config(target_dir: Path) -> Path:
    """Write the bundled default configuration into ``target_dir``."""
    toml_path = target_dir / TOML_CONFIG
    toml_path.write_text(load_default_config_text(), encoding="utf-8")
    return toml_path


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading {path}: {e}"
        raise ConfigLoadError(msg) from e
    try:
        return tomlkit.loads(raw).unwrap()
    except TOMLKitError as e:
        msg = f"Error parsing {path.name}: {e}"
        raise ConfigLoadError(msg) from e


def _load_with_extends(path: Path, *, _visited: set[Path] | None = None) -> dict[str, Any]:
    """Load a TOML file supporting an optional 'extends' key for inheritance.

    Later files override earlier ones. Relative paths in 'extends' are resolved
    relative to the parent of ``path``.
    """
    if _visited is None:
        _visited = set()
    real = path.resolve()
    if real in _visited:
        return {}
    _visited.add(real)

    data = _parse_toml(path)

    base_cfg: dict[str, Any] = {}
    ext = data.get("extends")
    if isinstance(ext, str):
        ext_list = [ext]
    elif isinstance(ext, list):
        ext_list = [e for e in ext if isinstance(e, str)]
    else:
        ext_list = []
    for entry in ext_list:
        ext_path = Path(entry)
        if not ext_path.is_absolute():
            ext_path = (path.parent / ext_path).resolve()
        if ext_path.exists():
            base_cfg |= _load_with_extends(ext_path, _visited=_visited)

    base_cfg |= {k: v for k, v in data.items() if k != "extends"}
    return base_cfg


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file (supports 'extends')."""
    return _load_with_extends(path)


def _xdg_config_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return xdg_dir / "imgprobe" / "config.toml"


def _merge_pyproject_cfg(pyproject_path: Path, cfg: dict[str, Any]) -> dict[str, Any]:
    if not pyproject_path.exists():
        return cfg
    data = _parse_toml(pyproject_path)
    tool = data.get("tool", {})
    if isinstance(tool, dict):
        own = tool.get("imgprobe")
        if isinstance(own, dict):
            cfg |= own
    return cfg


def read_config(
    *,
    base_path: Path,
    ignore_defaults: bool = False,
    explicit_config: Path | None = None,
) -> dict[str, Any]:
    """Read configuration merging multiple sources with clear precedence.

    Precedence (low -> high):
      1. bundled defaults (unless ``ignore_defaults``)
      2. XDG config: $XDG_CONFIG_HOME/imgprobe/config.toml (or ~/.config/imgprobe/config.toml)
      3. local project file in ``base_path``: .imgprobe.toml
      4. [tool.imgprobe] table in pyproject.toml at ``base_path``
      5. $IMGPROBE_CONFIG_PATH (if set)
      6. ``explicit_config`` (from --config)
    Later sources override earlier ones.
    """
    cfg: dict[str, Any] = {} if ignore_defaults else load_default_config()

    for p in (_xdg_config_path(), base_path / TOML_CONFIG):
        if p.exists():
            cfg |= load_toml_config(p)

    cfg = _merge_pyproject_cfg(base_path / "pyproject.toml", cfg)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        p = Path(env_path)
        if p.exists():
            cfg |= load_toml_config(p)

    if explicit_config:
        if not explicit_config.exists():
            msg = f"Explicit config file not found: {explicit_config}"
            raise ConfigLoadError(msg)
        cfg |= load_toml_config(explicit_config)

    return cfg


def resolve_resize_settings(cfg: dict[str, Any]) -> ResizeSettings:
    """Validate resize keys in ``cfg`` and return them as :class:`ResizeSettings`."""
    timeout = cfg.get(CONFIG_RESIZE_TIMEOUT, DEFAULT_RESIZE_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        msg = f"{CONFIG_RESIZE_TIMEOUT} must be a positive number, got {timeout!r}"
        raise ConfigLoadError(msg)

    convert_path = cfg.get(CONFIG_CONVERT_PATH) or None
    if convert_path is not None and not isinstance(convert_path, str):
        msg = f"{CONFIG_CONVERT_PATH} must be a string, got {convert_path!r}"
        raise ConfigLoadError(msg)

    candidates = cfg.get(CONFIG_CONVERT_CANDIDATES, list(DEFAULT_CONVERT_CANDIDATES))
    if not isinstance(candidates, list) or not all(isinstance(c, str) for c in candidates):
        msg = f"{CONFIG_CONVERT_CANDIDATES} must be a list of strings"
        raise ConfigLoadError(msg)

    return ResizeSettings(
        timeout=float(timeout),
        convert_path=Path(convert_path) if convert_path else None,
        candidates=tuple(candidates),
    )


__all__ = [
    "ENV_CONFIG_PATH",
    "TOML_CONFIG",
    "ResizeSettings",
    "load_default_config",
    "load_default_config_text",
    "load_toml_config",
    "read_config",
    "resolve_resize_settings",
    "write_default_config",
]
