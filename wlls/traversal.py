"""Traversal engine that follows references outward from seed documents."""

from collections import deque
from pathlib import Path
from typing import Deque, Iterable, Set

from .errors import InvalidSeedError, UnreadableDocumentError, UnresolvedReferenceError
from .logging import logger
from .model import ReachableSet, VaultIndex
from .references import collect_references
from .resolver import is_within_vault, lookup_filename_in_vault


DEFAULT_DOCUMENT_EXTENSIONS = (".md",)


def is_document(path: Path, document_extensions: Iterable[str] = DEFAULT_DOCUMENT_EXTENSIONS) -> bool:
    """
    Check if a path is a document whose references can be followed.

    Args:
        path: The file path to check.
        document_extensions: Suffixes (with leading dot) that mark documents.

    Returns:
        True if the file suffix is a document extension.
    """
    return path.suffix in set(document_extensions)


def resolve_seed(note: Path, vault_root: Path, vault: VaultIndex) -> Path:
    """
    Validate a seed document and return its canonical path.

    Args:
        note: Seed path, absolute or relative to the vault root.
        vault_root: Canonical vault root directory.
        vault: The vault index.

    Returns:
        The canonical seed path.

    Raises:
        InvalidSeedError: If the note does not exist, lies outside the vault
            root, or was not indexed.
    """
    path = note if note.is_absolute() else vault_root / note
    try:
        canonical = path.resolve(strict=True)
    except OSError:
        raise InvalidSeedError(note, f"note path does not exist: {path}")

    if not is_within_vault(canonical, vault_root):
        raise InvalidSeedError(note, f"note is outside vault_root: {canonical}")
    if canonical not in vault:
        raise InvalidSeedError(note, f"note not found in vault scan: {canonical}")
    return canonical


def read_document(path: Path) -> str:
    """Read a document's content as UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableDocumentError(path, e) from e


def traverse(
    seeds: Iterable[Path],
    vault: VaultIndex,
    recursive: bool = False,
    skip_missing: bool = False,
    document_extensions: Iterable[str] = DEFAULT_DOCUMENT_EXTENSIONS,
) -> ReachableSet:
    """
    Collect every file referenced from the seed documents.

    Documents are processed breadth-first. Every resolved reference is part
    of the result; only document targets are scanned further, and only when
    ``recursive`` is set.

    Args:
        seeds: Canonical paths of the seed documents.
        vault: The vault index references are resolved against.
        recursive: Follow references of referenced documents.
        skip_missing: Log and skip unresolved references instead of failing.
        document_extensions: Suffixes of files that are scanned for references.

    Returns:
        ReachableSet containing the seeds and everything they reach.

    Raises:
        UnresolvedReferenceError: If a reference matches no vault file and
            ``skip_missing`` is not set.
        UnreadableDocumentError: If a document cannot be read.
    """
    document_extensions = tuple(document_extensions)
    reachable = ReachableSet()
    queue: Deque[Path] = deque()
    visited: Set[Path] = set()

    for seed in seeds:
        reachable.add(seed)
        queue.append(seed)

    while queue:
        note = queue.popleft()
        if note in visited:
            continue
        visited.add(note)

        logger.debug("Scanning %s", note)
        content = read_document(note)

        for target in collect_references(content):
            resolved = lookup_filename_in_vault(target, vault)
            if resolved is None:
                if not skip_missing:
                    raise UnresolvedReferenceError(target, note)
                logger.warning("skipping unresolved reference '%s' from %s", target, note)
                reachable.add_missing(note, target)
                continue

            try:
                resolved = resolved.resolve(strict=True)
            except OSError as e:
                raise UnreadableDocumentError(resolved, e, operation="canonicalize") from e
            reachable.add(resolved)

            if recursive and is_document(resolved, document_extensions):
                queue.append(resolved)

    return reachable
