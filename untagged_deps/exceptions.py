"""Custom exceptions for untagged-deps."""


class UntaggedDepsError(Exception):
    """Base exception for all untagged-deps errors."""


class NoTimestampFoundError(UntaggedDepsError):
    """Raised when a version string carries no 14-digit commit timestamp."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"no timestamp found in version {version!r}")


class ResolutionError(UntaggedDepsError):
    """Raised when a resolver fails for a reason other than a missing branch."""

    def __init__(self, module_path: str, branch: str, detail: str):
        self.module_path = module_path
        self.branch = branch
        self.detail = detail
        super().__init__(detail)


class NoDefaultBranchFoundError(UntaggedDepsError):
    """Raised when none of the candidate default branches exist."""

    def __init__(self, module_path: str, branches: tuple[str, ...]):
        self.module_path = module_path
        self.branches = branches
        super().__init__(f"neither {' nor '.join(branches)} branch found")


class DependencyCheckError(UntaggedDepsError):
    """Raised when checking a single dependency fails; aborts the whole run."""

    def __init__(self, module_path: str, cause: BaseException):
        self.module_path = module_path
        super().__init__(f"checking {module_path}: {cause}")


class ManifestParseError(UntaggedDepsError):
    """Raised when a go.mod file cannot be read or parsed."""
