"""Data model shared by the indexer, extractor, resolver and traversal."""

import unicodedata
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, Iterable, Iterator, List, Set, Tuple, Union


# Boundary tags that carry meaning for the reference extractor.
EMPHASIS = "emphasis"
STRONG = "strong"
STRIKETHROUGH = "strikethrough"
METADATA_BLOCK = "metadata_block"

# Literal markers used to re-serialize formatting inside a reference.
FORMATTING_MARKERS = {
    EMPHASIS: "*",
    STRONG: "**",
    STRIKETHROUGH: "~~",
}


def normalize_path(path: Union[str, PurePath]) -> str:
    """Return the NFC-normalized string form of a path."""
    return unicodedata.normalize("NFC", str(path))


class EventKind(Enum):
    """Kinds of structural events produced by the tokenizer."""

    TEXT = "text"
    START = "start"
    END = "end"
    OTHER = "other"


@dataclass(frozen=True)
class TokenEvent:
    """
    One structural unit of a tokenized document.

    Text runs carry their literal ``text``; start/end boundaries carry a
    ``tag`` (``emphasis``, ``strong``, ``strikethrough``, ``metadata_block``
    or the name of any other markdown construct).
    """

    kind: EventKind
    tag: str = ""
    text: str = ""

    @classmethod
    def text_run(cls, text: str) -> "TokenEvent":
        return cls(EventKind.TEXT, text=text)

    @classmethod
    def start(cls, tag: str) -> "TokenEvent":
        return cls(EventKind.START, tag=tag)

    @classmethod
    def end(cls, tag: str) -> "TokenEvent":
        return cls(EventKind.END, tag=tag)

    @classmethod
    def other(cls, tag: str = "") -> "TokenEvent":
        return cls(EventKind.OTHER, tag=tag)

    def is_text(self, text: str) -> bool:
        """Check if this event is a text run equal to ``text``."""
        return self.kind is EventKind.TEXT and self.text == text

    @property
    def is_boundary(self) -> bool:
        return self.kind in (EventKind.START, EventKind.END)

    @property
    def marker(self) -> str:
        """Literal formatting marker for emphasis/strong/strikethrough boundaries."""
        if not self.is_boundary:
            return ""
        return FORMATTING_MARKERS.get(self.tag, "")


class RefKind(Enum):
    """Whether a reference was written as a link (``[[``) or an embed (``![[``)."""

    LINK = "link"
    EMBED = "embed"


class RefParserState(Enum):
    """States of the reference extraction state machine."""

    NO_STATE = "no_state"
    EXPECT_SECOND_OPEN_BRACKET = "expect_second_open_bracket"
    EXPECT_REF_TEXT = "expect_ref_text"
    EXPECT_REF_TEXT_OR_CLOSE_BRACKET = "expect_ref_text_or_close_bracket"
    EXPECT_FINAL_CLOSE_BRACKET = "expect_final_close_bracket"
    RESETTING = "resetting"


@dataclass(frozen=True)
class RawReference:
    """Literal text found between ``[[``/``![[`` and ``]]``."""

    text: str
    kind: RefKind


class VaultIndex:
    """
    Ordered, read-only collection of the files found in a vault.

    Index order is preserved exactly as produced by the indexer, duplicates
    included, because path resolution returns the first match.
    """

    def __init__(self, paths: Iterable[Path]):
        self._paths: Tuple[Path, ...] = tuple(paths)
        self._normalized: Set[str] = {normalize_path(p) for p in self._paths}

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        """Check membership by NFC-normalized path identity."""
        if not isinstance(path, (str, Path)):
            return False
        return normalize_path(path) in self._normalized

    def __repr__(self) -> str:
        return f"VaultIndex(files={len(self._paths)})"


class ReachableSet:
    """
    The set of files reached from the seed documents.

    References that were skipped because they could not be resolved are
    tracked separately, keyed by the document that contained them.
    """

    def __init__(self):
        self._paths: Set[Path] = set()
        self._missing: Dict[Path, Set[str]] = {}  # source -> set of unresolved targets

    def add(self, path: Path) -> None:
        """Add a reached path."""
        self._paths.add(path)

    def add_missing(self, source: Path, target: str) -> None:
        """
        Record a reference that could not be resolved.

        Args:
            source: The document containing the reference.
            target: The unresolved file target.
        """
        if source not in self._missing:
            self._missing[source] = set()
        self._missing[source].add(target)

    def has_missing(self) -> bool:
        """Check if any reference was skipped."""
        return bool(self._missing)

    def iter_missing(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over skipped references as (source, target) tuples."""
        for source in sorted(self._missing):
            for target in sorted(self._missing[source]):
                yield source, target

    def sorted(self) -> List[Path]:
        """Return the reached paths in lexicographic order."""
        return sorted(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        missing_count = sum(len(m) for m in self._missing.values())
        return f"ReachableSet(paths={len(self._paths)}, missing={missing_count})"
