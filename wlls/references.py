"""
Wiki-style reference extraction.

References are recognized from the tokenizer's event stream rather than the
raw text, so brackets inside code spans, code blocks or front matter never
count. The extractor is a small state machine fed one event at a time:

    [ or ![  ->  [  ->  text / formatting ...  ->  ]  ->  ]

Emphasis, strong and strikethrough boundaries inside a reference are written
back as ``*``, ``**`` and ``~~`` so the reference text reads as it was typed.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .errors import RefParserStateError
from .model import (
    METADATA_BLOCK,
    EventKind,
    RawReference,
    RefKind,
    RefParserState,
    TokenEvent,
)
from .tokenizer import tokenize


# file#section|label, every part optional
NOTE_REFERENCE_PATTERN = re.compile(
    r"^(?P<file>[^#|]+)??(#(?P<section>.+?))??(\|(?P<label>.+?))??$"
)


@dataclass(frozen=True)
class NoteReference:
    """The parts of a raw reference: target file, heading/block section and label."""

    file: Optional[str] = None
    section: Optional[str] = None
    label: Optional[str] = None

    @classmethod
    def from_str(cls, text: str) -> "NoteReference":
        """
        Parse raw reference text such as ``Note#Heading|Alias``.

        A reference with no file part (``#Heading``) points into the current
        note and has ``file`` set to None.
        """
        match = NOTE_REFERENCE_PATTERN.match(text)
        if match is None:
            return cls()
        return cls(
            file=_strip_or_none(match.group("file")),
            section=_strip_or_none(match.group("section")),
            label=_strip_or_none(match.group("label")),
        )


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RefParser:
    """State machine recognizing ``[[...]]`` and ``![[...]]`` in token events."""

    def __init__(self):
        self.state = RefParserState.NO_STATE
        self.ref_kind: Optional[RefKind] = None
        self.ref_text = ""

    def transition(self, new_state: RefParserState) -> None:
        self.state = new_state

    def reset(self) -> None:
        self.state = RefParserState.NO_STATE
        self.ref_kind = None
        self.ref_text = ""

    def feed(self, event: TokenEvent) -> Optional[RawReference]:
        """
        Advance the state machine by one event.

        A pending reset is applied before the event is evaluated. An event
        that abandons a partial reference is evaluated again from
        ``NO_STATE``, so ``![`` or ``[`` can open the next one.

        Args:
            event: The next token event of the document.

        Returns:
            The completed reference when this event closes one, else None.
        """
        if self.state is RefParserState.RESETTING:
            self.reset()

        state = self.state

        if state is RefParserState.NO_STATE:
            self._open(event)

        elif state is RefParserState.EXPECT_SECOND_OPEN_BRACKET:
            if event.is_text("["):
                self.transition(RefParserState.EXPECT_REF_TEXT)
            else:
                self._abandon(event)

        elif state is RefParserState.EXPECT_REF_TEXT:
            if event.is_text("]"):
                # Empty reference
                self._abandon(event)
            elif self._append(event):
                self.transition(RefParserState.EXPECT_REF_TEXT_OR_CLOSE_BRACKET)
            else:
                self._abandon(event)

        elif state is RefParserState.EXPECT_REF_TEXT_OR_CLOSE_BRACKET:
            if event.is_text("]"):
                self.transition(RefParserState.EXPECT_FINAL_CLOSE_BRACKET)
            elif not self._append(event):
                self._abandon(event)

        elif state is RefParserState.EXPECT_FINAL_CLOSE_BRACKET:
            if event.is_text("]"):
                if self.ref_kind is None:
                    raise RefParserStateError(
                        "In EXPECT_FINAL_CLOSE_BRACKET but ref_kind is None"
                    )
                reference = RawReference(text=self.ref_text, kind=self.ref_kind)
                self.transition(RefParserState.RESETTING)
                return reference
            self._abandon(event)

        return None

    def _open(self, event: TokenEvent) -> None:
        if event.is_text("!["):
            self.ref_kind = RefKind.EMBED
            self.transition(RefParserState.EXPECT_SECOND_OPEN_BRACKET)
        elif event.is_text("["):
            self.ref_kind = RefKind.LINK
            self.transition(RefParserState.EXPECT_SECOND_OPEN_BRACKET)

    def _abandon(self, event: TokenEvent) -> None:
        """Drop the partial reference and let the event start a new one."""
        self.reset()
        self._open(event)

    def _append(self, event: TokenEvent) -> bool:
        """Append a text run or formatting marker to the reference text."""
        if event.kind is EventKind.TEXT:
            self.ref_text += event.text
            return True
        marker = event.marker
        if marker:
            self.ref_text += marker
            return True
        return False


def extract_references(events: Iterable[TokenEvent]) -> List[RawReference]:
    """
    Extract every reference from a document's token events.

    Metadata blocks are drained without being searched for references.

    Args:
        events: Token events of one document, in order.

    Returns:
        Raw references in document order.
    """
    parser = RefParser()
    references: List[RawReference] = []
    stream: Iterator[TokenEvent] = iter(events)

    for event in stream:
        if event.kind is EventKind.START and event.tag == METADATA_BLOCK:
            _drain_metadata_block(stream)
            continue

        reference = parser.feed(event)
        if reference is not None:
            references.append(reference)

    return references


def _drain_metadata_block(stream: Iterator[TokenEvent]) -> None:
    for event in stream:
        if event.kind is EventKind.TEXT:
            continue
        if event.kind is EventKind.END and event.tag == METADATA_BLOCK:
            return
        raise RefParserStateError(
            f"Unexpected event while processing frontmatter: {event!r}"
        )


def collect_references(content: str) -> List[str]:
    """
    Collect the file targets referenced by a markdown document.

    Args:
        content: Raw markdown text.

    Returns:
        File targets in document order; references without a file part
        (such as ``[[#Heading]]``) are left out.
    """
    targets: List[str] = []
    for reference in extract_references(tokenize(content)):
        note_ref = NoteReference.from_str(reference.text)
        if note_ref.file is not None:
            targets.append(note_ref.file)
    return targets
