"""File discovery utilities for indexing a vault."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

import pathspec

from .errors import IndexingError
from .logging import logger


DEFAULT_IGNORE_FILENAME = ".export-ignore"
GITIGNORE_FILENAME = ".gitignore"

# (directory the patterns are relative to, compiled patterns)
IgnoreRule = Tuple[Path, pathspec.PathSpec]


@dataclass(frozen=True)
class WalkOptions:
    """
    Options controlling which files of a vault are indexed.

    Attributes:
        ignore_filename: Name of per-directory ignore files (gitignore syntax).
        ignore_hidden: Skip files and directories whose name starts with a dot.
        honor_gitignore: Also apply ``.gitignore`` files.
    """

    ignore_filename: str = DEFAULT_IGNORE_FILENAME
    ignore_hidden: bool = True
    honor_gitignore: bool = False


def iter_files(root: Path, options: Optional[WalkOptions] = None) -> Iterator[Path]:
    """
    Iterate over the files in a vault.

    Directories are visited in sorted order. An ignore file applies to the
    directory it lives in and everything below it.

    Args:
        root: Vault root directory.
        options: Walk options. If None, uses the defaults.

    Yields:
        Absolute paths of indexed files.

    Raises:
        IndexingError: If a directory or ignore file cannot be read.
    """
    if options is None:
        options = WalkOptions()

    root = root.resolve()
    visited_dirs: Set[Path] = set()

    def _walk(current: Path, rules: List[IgnoreRule]) -> Iterator[Path]:
        # Symlinked directories are followed once
        real = current.resolve()
        if real in visited_dirs:
            logger.debug("Skipping already visited directory %s", current)
            return
        visited_dirs.add(real)

        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            raise IndexingError(current, e) from e

        rules = rules + _load_ignore_rules(current, options)

        for entry in entries:
            if options.ignore_hidden and entry.name.startswith("."):
                continue
            is_dir = entry.is_dir()
            if _is_ignored(entry, is_dir, rules):
                continue
            if is_dir:
                yield from _walk(entry, rules)
            elif entry.is_file():
                yield entry

    yield from _walk(root, [])


def vault_contents(root: Path, options: Optional[WalkOptions] = None) -> List[Path]:
    """
    Index every file of a vault.

    Args:
        root: Vault root directory.
        options: Walk options. If None, uses the defaults.

    Returns:
        Absolute file paths in walk order.
    """
    files = list(iter_files(root, options))
    logger.debug("Indexed %d files under %s", len(files), root)
    return files


def _load_ignore_rules(directory: Path, options: WalkOptions) -> List[IgnoreRule]:
    """Load the ignore files present in a directory."""
    filenames = [options.ignore_filename]
    if options.honor_gitignore:
        filenames.append(GITIGNORE_FILENAME)

    rules: List[IgnoreRule] = []
    for filename in filenames:
        if not filename:
            continue
        ignore_file = directory / filename
        if not ignore_file.is_file():
            continue
        try:
            lines = ignore_file.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise IndexingError(ignore_file, e) from e
        rules.append((directory, pathspec.GitIgnoreSpec.from_lines(lines)))
    return rules


def _is_ignored(entry: Path, is_dir: bool, rules: List[IgnoreRule]) -> bool:
    """Check an entry against every ignore file above it."""
    for base, spec in rules:
        relative = get_relative_path(entry, base).as_posix()
        if is_dir:
            relative += "/"
        if spec.match_file(relative):
            return True
    return False


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Get the path relative to root, handling edge cases."""
    try:
        return file_path.relative_to(root)
    except ValueError:
        return file_path
