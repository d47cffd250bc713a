"""Resolve the latest version on a module's default branch."""

from __future__ import annotations

import structlog

from untagged_deps.engines.update_checker.resolvers.base import VersionResolver
from untagged_deps.engines.update_checker.version import newer_version
from untagged_deps.exceptions import NoDefaultBranchFoundError, ResolutionError

log = structlog.get_logger("untagged_deps.engine")

DEFAULT_BRANCHES: tuple[str, ...] = ("main", "master")


class DefaultBranchResolver:
    """Probe ``main`` then ``master`` and keep whichever is newer.

    A missing branch moves on to the next candidate; any other resolver
    failure aborts without querying the remaining candidates.
    """

    def __init__(
        self,
        resolver: VersionResolver,
        branches: tuple[str, ...] = DEFAULT_BRANCHES,
    ) -> None:
        self._resolver = resolver
        self._branches = branches

    async def resolve_latest(self, module_path: str) -> str:
        versions: list[str] = []
        for branch in self._branches:
            lookup = await self._resolver.resolve(module_path, branch)
            if lookup.status == "not_found":
                continue
            if lookup.status == "failed" or lookup.version is None:
                raise ResolutionError(
                    module_path, branch, lookup.detail or "resolver returned no version"
                )
            versions.append(lookup.version)

        if not versions:
            raise NoDefaultBranchFoundError(module_path, self._branches)

        latest = versions[0]
        for candidate in versions[1:]:
            latest = newer_version(latest, candidate)

        log.debug("branches.resolved", module=module_path, latest=latest, candidates=len(versions))
        return latest
