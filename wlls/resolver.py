"""Path resolution utilities for mapping reference targets to vault files."""

from pathlib import Path, PurePath
from typing import Iterable, Optional

from .model import normalize_path


DOCUMENT_SUFFIX = ".md"


def lookup_filename_in_vault(
    filename: str,
    vault_contents: Iterable[Path],
) -> Optional[Path]:
    """
    Find the vault file a reference target points to.

    A vault path matches when it ends with the target, taking into account:
    1. Targets written without the ``.md`` extension.
    2. Case-insensitive matching.
    3. Unicode normalization form C on both sides.

    Matching is done on whole path components, so ``Plan`` does not match
    ``Project Plan.md``.

    Args:
        filename: The file target of a reference (e.g. ``Project Plan``).
        vault_contents: Vault paths in index order.

    Returns:
        The first matching vault path, or None if nothing matches.
    """
    target = normalize_path(filename)
    target_folded = target.casefold()

    for path in vault_contents:
        path_normalized = normalize_path(path)
        path_folded = path_normalized.casefold()

        if (
            _ends_with(path_normalized, target)
            or _ends_with(path_normalized, target + DOCUMENT_SUFFIX)
            or _ends_with(path_folded, target_folded)
            or _ends_with(path_folded, target_folded + DOCUMENT_SUFFIX)
        ):
            return path

    return None


def _ends_with(path: str, suffix: str) -> bool:
    """Check if ``path`` ends with the components of ``suffix``."""
    suffix_parts = PurePath(suffix).parts
    if not suffix_parts:
        return False
    path_parts = PurePath(path).parts
    if len(suffix_parts) > len(path_parts):
        return False
    return path_parts[-len(suffix_parts):] == suffix_parts


def is_within_vault(path: Path, root: Path) -> bool:
    """Check if a path is within the vault root."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False
