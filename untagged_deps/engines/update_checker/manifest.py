"""Loader for Go go.mod files."""

from __future__ import annotations

from pathlib import Path

from untagged_deps.engines.update_checker.models import ManifestEntry
from untagged_deps.exceptions import ManifestParseError

# Directives that may open a parenthesised block.
_BLOCK_DIRECTIVES = frozenset({"require", "replace", "exclude", "retract", "tool", "ignore", "godebug"})


def _split_comment(line: str) -> tuple[str, str]:
    """Split a line into (code, comment) around the first ``//``."""
    idx = line.find("//")
    if idx == -1:
        return line.strip(), ""
    return line[:idx].strip(), line[idx + 2 :].strip()


def _is_indirect(comment: str) -> bool:
    # go mod tidy writes "// indirect", optionally followed by "; more text"
    return comment == "indirect" or comment.startswith("indirect;")


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"`":
        return token[1:-1]
    return token


def _require_entry(tokens: list[str], comment: str, where: str) -> ManifestEntry:
    if len(tokens) != 2:
        raise ManifestParseError(f"{where}: usage: require module/path v1.2.3")
    module_path, version = _unquote(tokens[0]), _unquote(tokens[1])
    if not module_path:
        raise ManifestParseError(f"{where}: empty module path")
    return ManifestEntry(module_path=module_path, version=version, indirect=_is_indirect(comment))


def parse_go_mod(content: str, filename: str = "go.mod") -> list[ManifestEntry]:
    """Extract every ``require`` entry from go.mod *content*, in file order.

    Both the single-line and the block form are understood.  Other
    directives (``replace``, ``exclude``, ...) are skipped.
    """
    entries: list[ManifestEntry] = []
    block: str | None = None

    for lineno, raw_line in enumerate(content.splitlines(), start=1):
        where = f"{filename}:{lineno}"
        code, comment = _split_comment(raw_line)
        if not code:
            continue

        if block is not None:
            if code == ")":
                block = None
                continue
            if block == "require":
                entries.append(_require_entry(code.split(), comment, where))
            continue

        tokens = code.split()
        directive = tokens[0]

        # "require ()" or "require()": empty block
        compact = "".join(tokens)
        if compact.endswith("()") and compact[:-2] in _BLOCK_DIRECTIVES:
            continue

        # "require (" or "require("
        if directive.endswith("(") and directive[:-1] in _BLOCK_DIRECTIVES and len(tokens) == 1:
            block = directive[:-1]
            continue
        if directive in _BLOCK_DIRECTIVES and tokens[1:] == ["("]:
            block = directive
            continue

        if directive == "require":
            entries.append(_require_entry(tokens[1:], comment, where))

    if block is not None:
        raise ManifestParseError(f"{filename}: unterminated {block} block")

    return entries


def load_manifest(path: Path) -> list[ManifestEntry]:
    """Read and parse the go.mod file at *path*."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestParseError(f"reading file: {exc}") from exc
    try:
        return parse_go_mod(content, path.name)
    except ManifestParseError as exc:
        raise ManifestParseError(f"parsing go.mod: {exc}") from exc
