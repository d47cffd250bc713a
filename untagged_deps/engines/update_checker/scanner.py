"""Select the pseudo-versioned dependencies from a manifest."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from untagged_deps.engines.update_checker.models import Dependency, ManifestEntry
from untagged_deps.engines.update_checker.version import is_pseudo_version

log = structlog.get_logger("untagged_deps.engine")


def scan(entries: Iterable[ManifestEntry], include_indirect: bool = False) -> list[Dependency]:
    """Return the entries pinned to a commit, in manifest order.

    Indirect entries are dropped unless *include_indirect* is set.
    """
    deps: list[Dependency] = []
    for entry in entries:
        if not is_pseudo_version(entry.version):
            continue
        if entry.indirect and not include_indirect:
            log.debug("scanner.skip_indirect", module=entry.module_path)
            continue
        deps.append(Dependency(module_path=entry.module_path, version=entry.version))
    return deps
