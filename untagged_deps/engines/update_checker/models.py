"""Data models for the update checker engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

LookupStatus = Literal["found", "not_found", "failed"]


@dataclass(frozen=True)
class ManifestEntry:
    """A single ``require`` line from go.mod."""

    module_path: str
    version: str
    indirect: bool = False


@dataclass(frozen=True)
class Dependency:
    """A pseudo-versioned dependency selected for checking."""

    module_path: str
    version: str


@dataclass(frozen=True)
class Update:
    """A dependency whose pinned commit is behind its default branch."""

    module_path: str
    current: str
    latest: str


@dataclass(frozen=True)
class BranchLookup:
    """Outcome of resolving ``module@branch``.

    ``not_found`` means the branch does not exist and the next candidate
    may be tried; ``failed`` covers every other error.
    """

    branch: str
    status: LookupStatus
    version: str | None = None
    detail: str | None = None

    @classmethod
    def found(cls, branch: str, version: str) -> BranchLookup:
        return cls(branch=branch, status="found", version=version)

    @classmethod
    def not_found(cls, branch: str, detail: str) -> BranchLookup:
        return cls(branch=branch, status="not_found", detail=detail)

    @classmethod
    def failed(cls, branch: str, detail: str) -> BranchLookup:
        return cls(branch=branch, status="failed", detail=detail)


@dataclass(frozen=True)
class CheckResult:
    """Summary of a single check run."""

    dependencies: list[Dependency] = field(default_factory=list)
    updates: list[Update] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def has_updates(self) -> bool:
        return bool(self.updates)
