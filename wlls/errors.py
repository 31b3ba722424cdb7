"""Exceptions raised while indexing a vault and following its references."""

from pathlib import Path
from typing import Optional


class WllsError(Exception):
    """Base class for user-facing failures."""


class IndexingError(WllsError):
    """A path could not be enumerated while walking the vault."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Encountered an error while trying to walk '{path}': {cause}")


class InvalidSeedError(WllsError):
    """A seed document is missing, outside the vault, or not indexed."""

    def __init__(self, note: Path, reason: str):
        self.note = note
        self.reason = reason
        super().__init__(f"invalid input note: {note}: {reason}")


class UnreadableDocumentError(WllsError):
    """A document reached during traversal could not be read."""

    def __init__(self, path: Path, cause: Exception, operation: str = "read"):
        self.path = path
        self.cause = cause
        self.operation = operation
        super().__init__(f"failed to {operation} {path}: {cause}")


class UnresolvedReferenceError(WllsError):
    """A reference target matched no file in the vault."""

    def __init__(self, target: str, source: Path):
        self.target = target
        self.source = source
        super().__init__(f"could not resolve reference '{target}' from {source}")


class ConfigError(WllsError):
    """A configuration file could not be read or contains invalid settings."""

    def __init__(self, path: Optional[Path], reason: str):
        self.path = path
        self.reason = reason
        location = f"{path}: " if path is not None else ""
        super().__init__(f"invalid configuration: {location}{reason}")


class RefParserStateError(RuntimeError):
    """The reference state machine reached a state its transitions forbid."""
