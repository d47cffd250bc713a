"""Shared fixtures for untagged-deps tests — no Go toolchain or network needed."""

from __future__ import annotations

import asyncio

import pytest
import structlog

from untagged_deps.engines.update_checker.models import BranchLookup


class FakeResolver:
    """In-memory VersionResolver.

    *table* maps ``(module, branch)`` to a version string, or to a
    BranchLookup for not-found / failed outcomes.  Unlisted pairs are
    reported as unknown revisions.
    """

    def __init__(
        self,
        table: dict[tuple[str, str], str | BranchLookup] | None = None,
        *,
        delay: float = 0.0,
    ) -> None:
        self.table = table or {}
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def resolve(self, module_path: str, branch: str) -> BranchLookup:
        self.calls.append((module_path, branch))
        if self.delay:
            await asyncio.sleep(self.delay)
        value = self.table.get((module_path, branch))
        if value is None:
            return BranchLookup.not_found(
                branch, f"go: {module_path}@{branch}: invalid version: unknown revision {branch}"
            )
        if isinstance(value, BranchLookup):
            return value
        return BranchLookup.found(branch, value)


@pytest.fixture
def make_resolver():
    """Factory for FakeResolver instances."""

    def _make(table=None, **kwargs) -> FakeResolver:
        return FakeResolver(table, **kwargs)

    return _make


@pytest.fixture
def write_gomod(tmp_path):
    """Write a go.mod into tmp_path and return its path."""

    def _write(body: str):
        path = tmp_path / "go.mod"
        path.write_text("module example.com/project\n\ngo 1.21\n\n" + body)
        return path

    return _write


@pytest.fixture(autouse=True)
def _silence_structlog():
    """Route engine log events nowhere so CLI output stays exact."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()
