"""Locations of the configuration file and the run log.

Both live beside the checkout so a portable install keeps everything in
one tree:

- Config: ``<repo_root>/config/config.toml``, or the file named by
  ``ALBUMPREP_CONFIG``.
- Log: ``<repo_root>/logs/albumprep.log``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

CONFIG_ENV_VAR: Final[str] = "ALBUMPREP_CONFIG"
CONFIG_RELATIVE_PATH: Final[Path] = Path("config") / "config.toml"
LOG_RELATIVE_PATH: Final[Path] = Path("logs") / "albumprep.log"

# Files whose presence marks the top of a checkout.
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _detect_repo_root(start: Path | None = None) -> Path:
    """First ancestor of ``start`` holding a root marker, else the working directory."""

    origin = (start or Path(__file__).resolve()).parent
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def _env_override(env: Mapping[str, str], name: str) -> Path | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Configuration file to load when none is given explicitly.

    Args:
        env: Environment to consult; ``os.environ`` when omitted.
    """

    override = _env_override(os.environ if env is None else env, CONFIG_ENV_VAR)
    if override is not None:
        return override
    return (_detect_repo_root() / CONFIG_RELATIVE_PATH).resolve()


def default_log_file() -> Path:
    return (_detect_repo_root() / LOG_RELATIVE_PATH).resolve()


__all__ = [
    "CONFIG_ENV_VAR",
    "default_config_path",
    "default_log_file",
]
