"""Update checker engine — freshness of commit-pinned Go dependencies."""

from untagged_deps.engines.update_checker.branches import DEFAULT_BRANCHES, DefaultBranchResolver
from untagged_deps.engines.update_checker.checker import UpdateChecker, check_go_mod
from untagged_deps.engines.update_checker.manifest import load_manifest, parse_go_mod
from untagged_deps.engines.update_checker.models import (
    BranchLookup,
    CheckResult,
    Dependency,
    ManifestEntry,
    Update,
)
from untagged_deps.engines.update_checker.scanner import scan
from untagged_deps.engines.update_checker.version import (
    extract_timestamp,
    is_pseudo_version,
    newer_version,
)

__all__ = [
    "DEFAULT_BRANCHES",
    "BranchLookup",
    "CheckResult",
    "DefaultBranchResolver",
    "Dependency",
    "ManifestEntry",
    "Update",
    "UpdateChecker",
    "check_go_mod",
    "extract_timestamp",
    "is_pseudo_version",
    "load_manifest",
    "newer_version",
    "parse_go_mod",
    "scan",
]
