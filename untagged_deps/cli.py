"""CLI entry point: check-untagged-go-deps.

Dependabot does not update Go dependencies pinned to commits
(pseudo-versions like v0.0.0-20231129151722-fdeea329fbba).  This command
compares every such pin in go.mod with the latest commit on the module's
default branch (main or master).

    check-untagged-go-deps                 # ./go.mod, direct deps only
    check-untagged-go-deps -i path/go.mod  # include indirect deps
    check-untagged-go-deps --resolver proxy --concurrency 8

Exit status is 1 when updates are available or anything fails, so the
command can gate a CI job.
"""

from __future__ import annotations

import asyncio
import dataclasses
import sys
from pathlib import Path

import click
import structlog

from untagged_deps.core.config import Settings, load_settings
from untagged_deps.core.logging import setup_logging
from untagged_deps.engines.update_checker.branches import DefaultBranchResolver
from untagged_deps.engines.update_checker.checker import UpdateChecker, check_go_mod
from untagged_deps.engines.update_checker.models import CheckResult
from untagged_deps.engines.update_checker.report import render_json, render_text
from untagged_deps.engines.update_checker.resolvers import (
    GoListResolver,
    ProxyResolver,
    VersionResolver,
)
from untagged_deps.exceptions import UntaggedDepsError

log = structlog.get_logger("untagged_deps.cli")


def _build_resolver(settings: Settings) -> VersionResolver:
    if settings.resolver == "proxy":
        return ProxyResolver(settings.proxy_url, timeout=settings.timeout)
    return GoListResolver(settings.go_bin, timeout=settings.timeout)


async def _run(
    gomod: Path,
    settings: Settings,
    *,
    include_indirect: bool,
    keep_going: bool,
) -> CheckResult:
    resolver = _build_resolver(settings)
    try:
        checker = UpdateChecker(
            DefaultBranchResolver(resolver),
            concurrency=settings.concurrency,
            fail_fast=not keep_going,
        )
        return await check_go_mod(gomod, checker, include_indirect=include_indirect)
    finally:
        if isinstance(resolver, ProxyResolver):
            await resolver.close()


@click.command()
@click.argument("gomod", default="go.mod", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-i", "--include-indirect", is_flag=True, help="Include indirect dependencies")
@click.option(
    "--resolver",
    type=click.Choice(["go", "proxy"]),
    default=None,
    help="Resolve via 'go list' or the module proxy directly (env: UNTAGGED_DEPS_RESOLVER)",
)
@click.option(
    "--proxy",
    "proxy_url",
    default=None,
    help="Module proxy URL; implies --resolver proxy (env: GOPROXY)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds per resolver call (env: UNTAGGED_DEPS_TIMEOUT)",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Dependencies resolved in parallel (env: UNTAGGED_DEPS_CONCURRENCY)",
)
@click.option("--keep-going", is_flag=True, help="Report per-dependency errors instead of aborting")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    gomod: Path,
    include_indirect: bool,
    resolver: str | None,
    proxy_url: str | None,
    timeout: float | None,
    concurrency: int | None,
    keep_going: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """Check commit-pinned Go dependencies for newer default-branch commits."""
    setup_logging("DEBUG" if verbose else None)

    try:
        settings = load_settings()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    # --proxy only makes sense for the proxy resolver
    if proxy_url is not None:
        if resolver is None:
            resolver = "proxy"
        elif resolver == "go":
            click.echo("Warning: --proxy is ignored with --resolver go", err=True)

    overrides = {
        "resolver": resolver,
        "proxy_url": proxy_url,
        "timeout": timeout,
        "concurrency": concurrency,
    }
    settings = dataclasses.replace(
        settings, **{k: v for k, v in overrides.items() if v is not None}
    )
    log.debug("cli.settings", gomod=str(gomod), **dataclasses.asdict(settings))

    try:
        result = asyncio.run(
            _run(gomod, settings, include_indirect=include_indirect, keep_going=keep_going)
        )
    except UntaggedDepsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(render_json(result), nl=False)
    else:
        click.echo(render_text(result, gomod.name), nl=False)

    if result.has_updates or result.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
