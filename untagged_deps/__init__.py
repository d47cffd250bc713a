"""untagged-deps: find stale commit-pinned Go dependencies."""

__version__ = "0.1.0"
