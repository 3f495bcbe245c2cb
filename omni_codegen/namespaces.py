"""
omni_codegen.namespaces
=======================

Decide which module paths generated clients import from.

The runtime pieces generated code needs (core types, the contract base
client, RPC providers) ship both as standalone distributions
(``omni-core``, ``omni-contracts``, ``omni-providers``) and re-exported by the
umbrella ``omni-sdk`` distribution. Generated code must import from whichever
the *host* project (the one receiving the generated modules) depends on:

    umbrella    omni_sdk.core     omni_sdk.contracts     omni_sdk.providers
    standalone  omni_core         omni_contracts         omni_providers

We look at the direct, non-dev dependencies of the host project's root
package. If one of them is the umbrella distribution we use the umbrella
paths, otherwise (including when the project cannot be inspected at all) the
standalone ones.

Lock file
---------
The default query runs ``uv tree`` which resolves the project and writes
``uv.lock`` as a side effect. A lock file appearing in a project that does
not track one shows up as a dirty tree and breaks release builds, so the
query is wrapped in `lockfile_guard`: if no lock file existed before the
query, whatever the query left behind is removed afterwards. Removal errors
are swallowed. An existing lock file is never touched.

The result is computed once per `NamespaceResolver` under a lock; later
calls return the same object without querying again.
"""

from __future__ import annotations

import contextlib
import logging
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence

from .config import CodegenConfig
from .errors import DependencyQueryError

log = logging.getLogger(__name__)

__all__ = [
    "NamespacePaths",
    "UMBRELLA_PATHS",
    "STANDALONE_PATHS",
    "ResolutionSource",
    "Resolution",
    "DependencyKind",
    "Dependency",
    "DependencyQuery",
    "UvTreeQuery",
    "PyprojectQuery",
    "parse_uv_tree",
    "canonical_name",
    "lockfile_guard",
    "select_query",
    "determine_namespaces",
    "NamespaceResolver",
]


# ---- Result types ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NamespacePaths:
    """Dotted module paths used for qualified references in generated code."""

    core: str
    contracts: str
    providers: str

    def core_ref(self, name: str) -> str:
        return f"{self.core}.{name}"

    def contract_ref(self, name: str) -> str:
        return f"{self.contracts}.{name}"

    def provider_ref(self, name: str) -> str:
        return f"{self.providers}.{name}"


UMBRELLA_PATHS = NamespacePaths(
    core="omni_sdk.core",
    contracts="omni_sdk.contracts",
    providers="omni_sdk.providers",
)
STANDALONE_PATHS = NamespacePaths(
    core="omni_core",
    contracts="omni_contracts",
    providers="omni_providers",
)


class ResolutionSource(Enum):
    RESOLVED_FROM_DEPENDENCY = "resolved_from_dependency"
    FALLBACK_DEFAULT = "fallback_default"


@dataclass(frozen=True, slots=True)
class Resolution:
    paths: NamespacePaths
    source: ResolutionSource


_FALLBACK = Resolution(STANDALONE_PATHS, ResolutionSource.FALLBACK_DEFAULT)
_UMBRELLA = Resolution(UMBRELLA_PATHS, ResolutionSource.RESOLVED_FROM_DEPENDENCY)


# ---- Dependency queries ------------------------------------------------------


class DependencyKind(Enum):
    NORMAL = "normal"
    DEV = "dev"
    BUILD = "build"


@dataclass(frozen=True, slots=True)
class Dependency:
    name: str
    kind: DependencyKind = DependencyKind.NORMAL


# A query takes the manifest path and returns the root package's direct
# dependencies. Any exception means "could not inspect the project".
DependencyQuery = Callable[[Path], Sequence[Dependency]]

_CANON_RE = re.compile(r"[-_.]+")
_REQ_NAME_RE = re.compile(r"\s*([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)")
_UV_CHILD_RE = re.compile(
    r"^[├└]── (?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)(?:\[[^\]]*\])?(?: v\S+)?(?P<rest>.*)$"
)


def canonical_name(name: str) -> str:
    """PEP 503 normalized distribution name."""
    return _CANON_RE.sub("-", name).lower()


def parse_uv_tree(output: str) -> List[Dependency]:
    """
    Parse ``uv tree --depth 1`` output into the first root's direct dependencies.

        demo v0.1.0
        ├── httpx v0.27.2
        ├── omni-sdk v0.1.0
        └── pytest v8.3.3 (group: dev)
    """
    deps: List[Dependency] = []
    seen_root = False
    for line in output.splitlines():
        if not line.strip():
            continue
        if line[0] not in "├└│ ":
            if seen_root:
                # next workspace member; only the first root is inspected
                break
            seen_root = True
            continue
        if not seen_root:
            raise DependencyQueryError(f"unexpected uv tree line before root: {line!r}")
        m = _UV_CHILD_RE.match(line)
        if not m:
            continue
        kind = DependencyKind.DEV if "(group:" in m.group("rest") else DependencyKind.NORMAL
        deps.append(Dependency(m.group("name"), kind))
    if not seen_root:
        raise DependencyQueryError("uv tree produced no root package")
    return deps


@dataclass(slots=True)
class UvTreeQuery:
    """Ask ``uv tree`` for the root package's direct dependencies (writes uv.lock)."""

    uv_bin: str = "uv"
    timeout: Optional[float] = 60.0

    def __call__(self, manifest_path: Path) -> List[Dependency]:
        if not manifest_path.is_file():
            raise DependencyQueryError(f"manifest not found: {manifest_path}")
        cmd = [
            self.uv_bin,
            "tree",
            "--depth",
            "1",
            "--color",
            "never",
            "--project",
            str(manifest_path.parent),
        ]
        try:
            out = subprocess.run(
                cmd,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise DependencyQueryError(f"{' '.join(cmd)} failed: {e}") from e
        return parse_uv_tree(out.stdout)


def _requirement_name(req: object) -> Optional[str]:
    if not isinstance(req, str):
        # e.g. {include-group = "..."} entries in [dependency-groups]
        return None
    m = _REQ_NAME_RE.match(req)
    if not m:
        raise DependencyQueryError(f"malformed requirement: {req!r}")
    return m.group(1)


@dataclass(slots=True)
class PyprojectQuery:
    """Read direct dependencies straight from pyproject.toml (no lock file)."""

    def __call__(self, manifest_path: Path) -> List[Dependency]:
        try:
            with open(manifest_path, "rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise DependencyQueryError(f"cannot read {manifest_path}: {e}") from e

        project = doc.get("project")
        if not isinstance(project, dict):
            raise DependencyQueryError(f"{manifest_path} has no [project] table")

        sections = [(project.get("dependencies") or [], DependencyKind.NORMAL)]
        for reqs in (project.get("optional-dependencies") or {}).values():
            sections.append((reqs, DependencyKind.NORMAL))
        for reqs in (doc.get("dependency-groups") or {}).values():
            sections.append((reqs, DependencyKind.DEV))
        sections.append(((doc.get("build-system") or {}).get("requires") or [], DependencyKind.BUILD))

        deps: List[Dependency] = []
        for reqs, kind in sections:
            if not isinstance(reqs, list):
                raise DependencyQueryError(f"malformed dependency list in {manifest_path}")
            for req in reqs:
                name = _requirement_name(req)
                if name:
                    deps.append(Dependency(name, kind))
        return deps


def select_query(config: CodegenConfig) -> DependencyQuery:
    if config.dependency_query == "pyproject":
        return PyprojectQuery()
    if config.dependency_query == "uv":
        return UvTreeQuery(uv_bin=config.uv_bin, timeout=config.query_timeout)
    raise ValueError(f"unknown dependency query: {config.dependency_query!r}")


# ---- Lock file guard ---------------------------------------------------------


@contextlib.contextmanager
def lockfile_guard(lock_path: Path) -> Iterator[bool]:
    """
    Remove `lock_path` on exit unless it already existed on entry.

    Yields whether the lock file existed beforehand. Removal is best effort:
    OSError is logged and swallowed, never raised.
    """
    existed = lock_path.exists()
    try:
        yield existed
    finally:
        if not existed:
            try:
                lock_path.unlink(missing_ok=True)
            except OSError as e:
                log.debug("could not remove %s: %s", lock_path, e)


# ---- Resolution --------------------------------------------------------------


def determine_namespaces(config: CodegenConfig, query: Optional[DependencyQuery] = None) -> Resolution:
    """
    Inspect the host project once and pick the umbrella or standalone paths.

    Query failures are not errors: they select the standalone paths, exactly
    like a project that simply does not depend on the umbrella distribution.
    """
    query = query or select_query(config)
    umbrella = canonical_name(config.umbrella_name)

    with lockfile_guard(config.lockfile_path):
        try:
            deps = list(query(config.manifest_path))
        except Exception as e:
            log.debug("dependency query for %s failed: %s", config.manifest_path, e)
            return _FALLBACK

    for dep in deps:
        if dep.kind is DependencyKind.NORMAL and canonical_name(dep.name) == umbrella:
            log.debug("%s depends on %s; using umbrella paths", config.project_root, dep.name)
            return _UMBRELLA
    log.debug("%s does not depend on %s; using standalone paths", config.project_root, umbrella)
    return _FALLBACK


class NamespaceResolver:
    """Lazily computes and caches the namespace resolution (thread-safe, once)."""

    def __init__(self, config: CodegenConfig, query: Optional[DependencyQuery] = None) -> None:
        self._config = config
        self._query = query
        self._lock = threading.Lock()
        self._resolution: Optional[Resolution] = None

    @property
    def resolved(self) -> bool:
        return self._resolution is not None

    def resolution(self) -> Resolution:
        res = self._resolution
        if res is None:
            with self._lock:
                if self._resolution is None:
                    self._resolution = determine_namespaces(self._config, self._query)
                res = self._resolution
        return res

    def resolve(self) -> NamespacePaths:
        return self.resolution().paths
