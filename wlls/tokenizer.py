"""Markdown tokenizer producing the structural events the extractor consumes."""

import re
from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .model import EMPHASIS, METADATA_BLOCK, STRIKETHROUGH, STRONG, TokenEvent


# Inline token types that map onto formatting boundaries
BOUNDARY_TAGS = {
    "em": EMPHASIS,
    "strong": STRONG,
    "s": STRIKETHROUGH,
}

# markdown-it folds unmatched brackets into the surrounding text, so bracket
# delimiters are split back out into their own text runs.
BRACKET_PATTERN = re.compile(r"(!\[|\[|\])")


def build_parser() -> MarkdownIt:
    """
    Create the markdown parser.

    CommonMark plus tables, strikethrough, footnotes, task lists, dollar
    math and YAML front matter.
    """
    return (
        MarkdownIt("commonmark")
        .enable(["table", "strikethrough"])
        .use(front_matter_plugin)
        .use(footnote_plugin)
        .use(tasklists_plugin)
        .use(dollarmath_plugin)
    )


_PARSER = build_parser()


def tokenize(content: str) -> Iterator[TokenEvent]:
    """
    Tokenize a document into structural events.

    Args:
        content: Raw markdown text of one document.

    Yields:
        TokenEvent objects in document order.
    """
    yield from _block_events(_PARSER.parse(content))


def split_text(text: str) -> Iterator[str]:
    """Split a text run so ``![``, ``[`` and ``]`` become separate runs."""
    for part in BRACKET_PATTERN.split(text):
        if part:
            yield part


def _block_events(tokens: Iterable[Token]) -> Iterator[TokenEvent]:
    for token in tokens:
        if token.type == "front_matter":
            yield TokenEvent.start(METADATA_BLOCK)
            if token.content:
                yield TokenEvent.text_run(token.content)
            yield TokenEvent.end(METADATA_BLOCK)
        elif token.type == "inline":
            yield from _inline_events(token.children or [])
        else:
            yield _structural_event(token)


def _inline_events(tokens: Iterable[Token]) -> Iterator[TokenEvent]:
    for token in tokens:
        if token.type == "text":
            for part in split_text(token.content):
                yield TokenEvent.text_run(part)
        else:
            yield _structural_event(token)


def _structural_event(token: Token) -> TokenEvent:
    """Map an open/close/self-contained markdown-it token onto an event."""
    if token.nesting == 1:
        name = token.type.removesuffix("_open")
        return TokenEvent.start(BOUNDARY_TAGS.get(name, name))
    if token.nesting == -1:
        name = token.type.removesuffix("_close")
        return TokenEvent.end(BOUNDARY_TAGS.get(name, name))
    return TokenEvent.other(token.type)
