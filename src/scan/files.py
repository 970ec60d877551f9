"""File scanning utilities for Go/TypeScript workspaces."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

SOURCE_SUFFIXES = (".go", ".ts", ".tsx")
_SKIPPED_DIRS = frozenset({"node_modules", "vendor", ".git"})


def _should_include_file(
    path: Path,
    directory: Path,
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    if any(part in _SKIPPED_DIRS for part in rel_path.parts[:-1]):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    suffixes: Iterable[str] = SOURCE_SUFFIXES,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find Go/TypeScript source files under a directory, respecting .gitignore.

    Args:
        directory: Workspace root to search
        suffixes: File suffixes to keep (default: ``.go``, ``.ts``, ``.tsx``)
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        nested_gitignore: Compose every nested ``.gitignore`` instead of the
            root one only

    Yields:
        Path objects sorted lexicographically by relative path.
    """
    wanted = tuple(suffixes)
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path
        for path in directory.rglob("*")
        if path.suffix in wanted
        and _should_include_file(path, directory, gitignore_matches, exclude_patterns)
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


def list_sibling_files(directory: Path, patterns: Iterable[str]) -> list[Path]:
    """List regular files directly inside ``directory`` matching any pattern.

    Subdirectories are never searched. Symlinks are skipped. Results are
    sorted by file name.
    """
    pattern_list = list(patterns)
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []

    siblings = [
        entry
        for entry in entries
        if entry.is_file()
        and not entry.is_symlink()
        and any(fnmatch(entry.name, pat) for pat in pattern_list)
    ]
    return sorted(siblings, key=lambda p: p.name)


__all__ = ["find_source_files", "list_sibling_files"]
