"""UpdateChecker — compare pinned commits against the default branch."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import structlog

from untagged_deps.engines.update_checker.branches import DefaultBranchResolver
from untagged_deps.engines.update_checker.manifest import load_manifest
from untagged_deps.engines.update_checker.models import CheckResult, Dependency, Update
from untagged_deps.engines.update_checker.scanner import scan
from untagged_deps.exceptions import DependencyCheckError, ManifestParseError

log = structlog.get_logger("untagged_deps.engine")


class UpdateChecker:
    """Resolve the latest version of every dependency and report the stale ones.

    By default the first failing dependency aborts the run and no partial
    report is produced.  With ``fail_fast=False`` failures are collected in
    :attr:`CheckResult.errors` instead.

    With ``concurrency > 1`` dependencies are resolved in parallel; output
    order always follows input order.
    """

    def __init__(
        self,
        branch_resolver: DefaultBranchResolver,
        *,
        concurrency: int = 1,
        fail_fast: bool = True,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._branch_resolver = branch_resolver
        self._concurrency = concurrency
        self._fail_fast = fail_fast

    async def check_for_updates(self, deps: Sequence[Dependency]) -> list[Update]:
        """Strict fail-fast check: raise :class:`DependencyCheckError` on any failure."""
        outcomes = await self._resolve_all(deps, fail_fast=True)
        return _diff(deps, outcomes)

    async def check(self, deps: Sequence[Dependency]) -> CheckResult:
        """Run the check under the configured failure policy."""
        if self._fail_fast:
            return CheckResult(dependencies=list(deps), updates=await self.check_for_updates(deps))

        outcomes = await self._resolve_all(deps, fail_fast=False)
        errors = [str(o) for o in outcomes if isinstance(o, DependencyCheckError)]
        return CheckResult(dependencies=list(deps), updates=_diff(deps, outcomes), errors=errors)

    # ── internal ───────────────────────────────────────────────────────────

    async def _resolve_one(self, dep: Dependency) -> str:
        try:
            return await self._branch_resolver.resolve_latest(dep.module_path)
        except Exception as exc:
            log.error("checker.dependency_failed", module=dep.module_path, error=str(exc))
            raise DependencyCheckError(dep.module_path, exc) from exc

    async def _resolve_all(
        self,
        deps: Sequence[Dependency],
        *,
        fail_fast: bool,
    ) -> list[str | DependencyCheckError]:
        if self._concurrency == 1:
            outcomes: list[str | DependencyCheckError] = []
            for dep in deps:
                try:
                    outcomes.append(await self._resolve_one(dep))
                except DependencyCheckError as exc:
                    if fail_fast:
                        raise
                    outcomes.append(exc)
            return outcomes

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _guarded(dep: Dependency) -> str | DependencyCheckError:
            async with semaphore:
                try:
                    return await self._resolve_one(dep)
                except DependencyCheckError as exc:
                    if fail_fast:
                        raise
                    return exc

        tasks = [asyncio.create_task(_guarded(dep)) for dep in deps]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # First failure (or outer cancellation): stop everything still in flight.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise


def _diff(
    deps: Sequence[Dependency],
    outcomes: Sequence[str | DependencyCheckError],
) -> list[Update]:
    updates: list[Update] = []
    for dep, latest in zip(deps, outcomes, strict=True):
        if isinstance(latest, DependencyCheckError):
            continue
        if dep.version != latest:
            log.info("checker.update_found", module=dep.module_path, current=dep.version, latest=latest)
            updates.append(Update(module_path=dep.module_path, current=dep.version, latest=latest))
    return updates


async def check_go_mod(
    gomod_path: Path,
    checker: UpdateChecker,
    *,
    include_indirect: bool = False,
) -> CheckResult:
    """Full pipeline: load go.mod -> select pseudo-versions -> check each one."""
    try:
        entries = load_manifest(gomod_path)
    except ManifestParseError as exc:
        raise ManifestParseError(f"reading {gomod_path}: {exc}") from exc

    deps = scan(entries, include_indirect=include_indirect)
    log.info("checker.scanned", path=str(gomod_path), entries=len(entries), pseudo_versioned=len(deps))
    if not deps:
        return CheckResult()

    return await checker.check(deps)
