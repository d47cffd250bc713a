"""Runtime settings read from the environment."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Literal

ResolverKind = Literal["go", "proxy"]

DEFAULT_PROXY_URL = "https://proxy.golang.org"

# GOPROXY entries are separated by "," (fall through on not-found) or "|"
# (fall through on any error).
_GOPROXY_SEP_RE = re.compile(r"[,|]")


@dataclass(frozen=True)
class Settings:
    resolver: ResolverKind = "go"
    proxy_url: str = DEFAULT_PROXY_URL
    timeout: float = 60.0
    concurrency: int = 1
    go_bin: str = "go"


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


def proxy_url_from_goproxy(value: str | None) -> str:
    """Pick the first HTTP(S) entry of a GOPROXY list.

    ``direct`` and ``off`` entries are skipped.  Falls back to the public
    proxy when the list has no usable URL.
    """
    if value:
        for entry in _GOPROXY_SEP_RE.split(value):
            entry = entry.strip()
            if entry.startswith(("https://", "http://")):
                return entry.rstrip("/")
    return DEFAULT_PROXY_URL


def load_settings() -> Settings:
    """Build :class:`Settings` from environment variables.

    Raises ``ValueError`` for malformed numeric values or an unknown
    resolver kind.
    """
    resolver = os.environ.get("UNTAGGED_DEPS_RESOLVER", "go").lower()
    if resolver not in ("go", "proxy"):
        raise ValueError(f"UNTAGGED_DEPS_RESOLVER must be 'go' or 'proxy', got {resolver!r}")

    timeout = _env_float("UNTAGGED_DEPS_TIMEOUT", 60.0)
    concurrency = _env_int("UNTAGGED_DEPS_CONCURRENCY", 1)
    if timeout <= 0:
        raise ValueError("UNTAGGED_DEPS_TIMEOUT must be positive")
    if concurrency < 1:
        raise ValueError("UNTAGGED_DEPS_CONCURRENCY must be at least 1")

    return Settings(
        resolver=resolver,  # type: ignore[arg-type]
        proxy_url=proxy_url_from_goproxy(os.environ.get("GOPROXY")),
        timeout=timeout,
        concurrency=concurrency,
        go_bin=os.environ.get("UNTAGGED_DEPS_GO_BIN", "go"),
    )
