"""
Codegen configuration: host project location, dependency query and fetch
timeouts.

- Loads sane defaults and supports overrides via environment variables
  (OMNI_CODEGEN_*).
- The host project root is taken from the environment so the generator can
  be pointed at the consuming project from a build script.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .version import __version__

_DEFAULT_MANIFEST = "pyproject.toml"
_DEFAULT_LOCKFILE = "uv.lock"
_DEFAULT_UMBRELLA = "omni-sdk"

QUERY_KINDS = ("uv", "pyproject")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v not in (None, "") else default


def _env_float(name: str, default: float) -> float:
    v = _env(name)
    if v is None:
        return float(default)
    try:
        return float(v)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {v!r}") from e


def _check_query_kind(kind: str) -> str:
    k = kind.strip().lower()
    if k not in QUERY_KINDS:
        raise ValueError(f"dependency query must be one of {QUERY_KINDS}, got: {kind!r}")
    return k


@dataclass(slots=True)
class CodegenConfig:
    # Host project
    project_root: Path = field(default_factory=Path.cwd)
    manifest_name: str = _DEFAULT_MANIFEST
    lockfile_name: str = _DEFAULT_LOCKFILE
    # Dependency query
    dependency_query: str = "uv"
    uv_bin: str = "uv"
    query_timeout: float = 60.0
    umbrella_name: str = _DEFAULT_UMBRELLA
    # Remote fetch
    fetch_timeout: float = 30.0
    user_agent: str = field(default_factory=lambda: f"omni-codegen/{__version__}")

    def __post_init__(self) -> None:
        self.dependency_query = _check_query_kind(self.dependency_query)

    @property
    def manifest_path(self) -> Path:
        return Path(self.project_root) / self.manifest_name

    @property
    def lockfile_path(self) -> Path:
        return Path(self.project_root) / self.lockfile_name

    @classmethod
    def from_env(cls, prefix: str = "OMNI_CODEGEN_") -> "CodegenConfig":
        """
        Create config from environment variables:

        OMNI_CODEGEN_PROJECT_ROOT    (dir holding the host manifest; default: cwd)
        OMNI_CODEGEN_MANIFEST        (manifest file name)
        OMNI_CODEGEN_LOCKFILE        (lock file name)
        OMNI_CODEGEN_DEP_QUERY       ("uv" or "pyproject")
        OMNI_CODEGEN_UV_BIN          (uv executable)
        OMNI_CODEGEN_QUERY_TIMEOUT   (float seconds)
        OMNI_CODEGEN_UMBRELLA        (umbrella distribution name)
        OMNI_CODEGEN_FETCH_TIMEOUT   (float seconds)
        OMNI_CODEGEN_USER_AGENT      (str)
        """
        root = _env(f"{prefix}PROJECT_ROOT")
        return cls(
            project_root=Path(root).expanduser() if root else Path.cwd(),
            manifest_name=_env(f"{prefix}MANIFEST", _DEFAULT_MANIFEST) or _DEFAULT_MANIFEST,
            lockfile_name=_env(f"{prefix}LOCKFILE", _DEFAULT_LOCKFILE) or _DEFAULT_LOCKFILE,
            dependency_query=_env(f"{prefix}DEP_QUERY", "uv") or "uv",
            uv_bin=_env(f"{prefix}UV_BIN", "uv") or "uv",
            query_timeout=_env_float(f"{prefix}QUERY_TIMEOUT", 60.0),
            umbrella_name=_env(f"{prefix}UMBRELLA", _DEFAULT_UMBRELLA) or _DEFAULT_UMBRELLA,
            fetch_timeout=_env_float(f"{prefix}FETCH_TIMEOUT", 30.0),
            user_agent=_env(f"{prefix}USER_AGENT", f"omni-codegen/{__version__}")
            or f"omni-codegen/{__version__}",
        )


__all__ = ["CodegenConfig", "QUERY_KINDS"]
