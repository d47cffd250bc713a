"""Version resolvers — go toolchain or module proxy."""

from untagged_deps.engines.update_checker.resolvers.base import (
    UNKNOWN_REVISION,
    ModuleInfo,
    VersionResolver,
)
from untagged_deps.engines.update_checker.resolvers.go_list import GoListResolver
from untagged_deps.engines.update_checker.resolvers.proxy import ProxyResolver, escape_path

__all__ = [
    "GoListResolver",
    "ModuleInfo",
    "ProxyResolver",
    "UNKNOWN_REVISION",
    "VersionResolver",
    "escape_path",
]
