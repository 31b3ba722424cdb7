"""List the files a vault note references through wiki links."""

from .discovery import WalkOptions, iter_files, vault_contents
from .errors import (
    ConfigError,
    IndexingError,
    InvalidSeedError,
    RefParserStateError,
    UnreadableDocumentError,
    UnresolvedReferenceError,
    WllsError,
)
from .model import RawReference, ReachableSet, RefKind, VaultIndex, normalize_path
from .references import NoteReference, collect_references, extract_references
from .resolver import lookup_filename_in_vault
from .traversal import resolve_seed, traverse

__all__ = [
    "WalkOptions",
    "iter_files",
    "vault_contents",
    "ConfigError",
    "IndexingError",
    "InvalidSeedError",
    "RefParserStateError",
    "UnreadableDocumentError",
    "UnresolvedReferenceError",
    "WllsError",
    "RawReference",
    "ReachableSet",
    "RefKind",
    "VaultIndex",
    "NoteReference",
    "collect_references",
    "extract_references",
    "lookup_filename_in_vault",
    "normalize_path",
    "resolve_seed",
    "traverse",
]
