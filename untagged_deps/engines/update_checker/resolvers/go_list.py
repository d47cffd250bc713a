"""Resolver backed by ``go list -m -json module@branch``."""

from __future__ import annotations

import asyncio

import structlog
from pydantic import ValidationError

from untagged_deps.engines.update_checker.models import BranchLookup
from untagged_deps.engines.update_checker.resolvers.base import UNKNOWN_REVISION, ModuleInfo

log = structlog.get_logger("untagged_deps.resolver")


class GoListResolver:
    """Ask the local Go toolchain which version a branch currently resolves to.

    The toolchain honours the caller's GOPROXY / GOPRIVATE / GONOSUMDB
    settings, so private modules work whenever ``go get`` would.

    Note there are at least two cases to consider: if the repo has tagged
    versions and you depend on a commit, ``go get -u`` will not move you
    forward even when main is ahead; without tags it will.  Querying the
    branch explicitly covers both.
    """

    def __init__(self, go_bin: str = "go", timeout: float = 60.0) -> None:
        self._go_bin = go_bin
        self._timeout = timeout

    async def resolve(self, module_path: str, branch: str) -> BranchLookup:
        cmd = [self._go_bin, "list", "-m", "-json", f"{module_path}@{branch}"]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            return BranchLookup.failed(branch, f"running go list: {exc}")

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            await _terminate(proc)
            log.warning("resolver.timeout", module=module_path, branch=branch, timeout=self._timeout)
            return BranchLookup.failed(branch, f"go list timed out after {self._timeout:g}s")
        except asyncio.CancelledError:
            await _terminate(proc)
            raise

        if proc.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            if UNKNOWN_REVISION in message:
                log.debug("resolver.not_found", module=module_path, branch=branch)
                return BranchLookup.not_found(branch, message)
            return BranchLookup.failed(
                branch, message or f"go list exited with status {proc.returncode}"
            )

        try:
            info = ModuleInfo.model_validate_json(stdout)
        except ValidationError as exc:
            return BranchLookup.failed(branch, f"parsing module info: {exc}")

        log.debug("resolver.found", module=module_path, branch=branch, version=info.Version)
        return BranchLookup.found(branch, info.Version)


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill *proc* and reap it, even while the calling task is being cancelled."""
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await asyncio.shield(proc.wait())
