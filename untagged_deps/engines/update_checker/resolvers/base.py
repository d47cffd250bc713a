"""Resolver interface — look up the version at the tip of ``module@branch``."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from untagged_deps.engines.update_checker.models import BranchLookup

# Marker both `go list` and the module proxy emit when a branch does not exist.
UNKNOWN_REVISION = "unknown revision"


@runtime_checkable
class VersionResolver(Protocol):
    """Interface that every version resolver must satisfy."""

    async def resolve(self, module_path: str, branch: str) -> BranchLookup: ...


class ModuleInfo(BaseModel):
    """Module metadata as printed by ``go list -m -json`` and ``/@v/<rev>.info``."""

    model_config = ConfigDict(extra="ignore")

    Path: str | None = None
    Version: str
    Time: str | None = None
