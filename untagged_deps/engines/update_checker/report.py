"""Render a :class:`CheckResult` for humans or machines."""

from __future__ import annotations

import json

from untagged_deps.engines.update_checker.models import CheckResult
from untagged_deps.engines.update_checker.version import commit_time
from untagged_deps.exceptions import NoTimestampFoundError


def render_text(result: CheckResult, manifest_name: str = "go.mod") -> str:
    if not result.dependencies:
        return f"No pseudo-versioned dependencies found in {manifest_name}.\n"

    lines = [f"Pseudo-versioned dependencies in {manifest_name}:"]
    lines.extend(f"  {dep.module_path}" for dep in result.dependencies)
    lines.append("")

    if result.errors:
        lines.append("Errors:")
        lines.extend(f"  {err}" for err in result.errors)
        lines.append("")

    if result.updates:
        lines.append("Updates available:")
        lines.extend(f"  {u.module_path}: {u.current} -> {u.latest}" for u in result.updates)
    elif not result.errors:
        lines.append("No updates found for pseudo-versioned dependencies.")

    return "\n".join(lines) + "\n"


def render_json(result: CheckResult) -> str:
    payload = {
        "dependencies": [
            {"module": d.module_path, "version": d.version} for d in result.dependencies
        ],
        "updates": [
            {
                "module": u.module_path,
                "current": u.current,
                "latest": u.latest,
                "current_time": _iso_time(u.current),
                "latest_time": _iso_time(u.latest),
            }
            for u in result.updates
        ],
        "errors": result.errors,
    }
    return json.dumps(payload, indent=2) + "\n"


def _iso_time(version: str) -> str | None:
    # The branch tip may carry a release tag rather than a pseudo-version.
    try:
        return commit_time(version).isoformat()
    except NoTimestampFoundError:
        return None
