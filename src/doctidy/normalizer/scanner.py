"""Region scanner.

Partitions source text into documentation comments and everything else.
Comment openers inside string literals, character literals, text blocks,
line comments and ordinary block comments are not comment starts.

Two views are provided:
- scan_regions: exact, gap-free regions (concatenating them gives the input)
- extract_chunks: the layout used to rebuild the text once comments change,
  where every comment sits on a line of its own
"""

import logging
import re
from collections.abc import Iterator, Sequence

from doctidy.models.region import Chunk, Region, RegionKind
from doctidy.normalizer.classifiers import (
    LINE_BREAK,
    LexState,
    advance,
    leading_whitespace,
)
from doctidy.normalizer.errors import UnterminatedCommentError

logger = logging.getLogger(__name__)

DOC_OPENER = "/**"
BLOCK_OPENER = "/*"
CLOSER = "*/"
EMPTY_BLOCK_COMMENT = "/**/"

# A lone CR must not be followed by LF, or CRLF would count as two breaks
_BREAK = r"(?:\r\n|\r(?!\n)|\n)"
_DOUBLE_BREAK = re.compile(_BREAK + _BREAK)


# =============================================================================
# Regions
# =============================================================================


def _line_start(text: str, offset: int) -> int:
    return max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1


def _position(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based line and column of offset."""
    line = 1 + len(LINE_BREAK.findall(text, 0, offset))
    return line, offset - _line_start(text, offset) + 1


def find_doc_comments(text: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) offsets of each documentation comment in order.

    Raises:
        UnterminatedCommentError: If a documentation comment is never closed
    """
    state = LexState.CODE
    cursor = 0
    search = 0
    while True:
        candidate = text.find(BLOCK_OPENER, search)
        if candidate == -1:
            return

        state, cursor = advance(text, cursor, candidate, state)
        if cursor > candidate or state is not LexState.CODE:
            # Inside a literal or comment, or part of a token such as "*/*"
            search = max(cursor, candidate + 1)
            continue

        if not text.startswith(DOC_OPENER, candidate) or text.startswith(
            EMPTY_BLOCK_COMMENT, candidate
        ):
            # Ordinary block comment; the lexer consumes it on the next advance
            search = candidate + len(BLOCK_OPENER)
            continue

        close = text.find(CLOSER, candidate + len(DOC_OPENER))
        if close == -1:
            line, column = _position(text, candidate)
            raise UnterminatedCommentError(candidate, line, column)

        end = close + len(CLOSER)
        yield candidate, end
        cursor = search = end


def scan_regions(text: str) -> list[Region]:
    """Partition text into PLAIN and DOC_COMMENT regions.

    The regions cover the input exactly, in order, with no gaps or overlaps.
    Empty PLAIN regions are not emitted.

    Args:
        text: Full source text

    Returns:
        Ordered list of regions

    Raises:
        UnterminatedCommentError: If a documentation comment is never closed
    """
    regions: list[Region] = []
    plain_start = 0
    for start, end in find_doc_comments(text):
        if start > plain_start:
            regions.append(Region(RegionKind.PLAIN, plain_start, text[plain_start:start]))
        regions.append(Region(RegionKind.DOC_COMMENT, start, text[start:end]))
        plain_start = end

    if plain_start < len(text):
        regions.append(Region(RegionKind.PLAIN, plain_start, text[plain_start:]))

    logger.debug(
        "Scanned %d region(s), %d documentation comment(s)",
        len(regions),
        sum(1 for region in regions if region.is_comment),
    )
    return regions


def scan_lines(lines: Sequence[str], line_ending: str) -> list[Region]:
    """Scan a buffer of physical lines joined by line_ending.

    Region offsets refer to the joined text.
    """
    return scan_regions(line_ending.join(lines))


# =============================================================================
# Chunks
# =============================================================================


def split_blank_lines(text: str) -> list[str]:
    """Split text at each double line break, inserting an empty piece.

    Joining the result with the line ending reproduces text.
    """
    parts = _DOUBLE_BREAK.split(text)
    pieces = [parts[0]]
    for part in parts[1:]:
        pieces.extend(["", part])
    return pieces


def _plain_pieces(
    text: str,
    after_comment: bool,
    before_comment: bool,
    comment_indent: str,
) -> list[str]:
    """Lay out one PLAIN region next to its neighbouring comments.

    The line break ending a comment's line and the one starting the next
    comment's line are dropped (the join puts them back). Code sharing a
    line with a comment is split onto a line of its own: code before the
    comment keeps its line, code after moves below with the comment's
    indentation.
    """
    breaks = list(LINE_BREAK.finditer(text))

    if not breaks:
        if not (after_comment or before_comment):
            return [text]
        code = text.strip()
        if not code:
            return []
        return [comment_indent + code if after_comment else text.rstrip()]

    pieces: list[str] = []
    start, end = 0, len(text)
    head = ""

    if after_comment:
        tail = text[: breaks[0].start()].strip()
        if tail:
            pieces.append(comment_indent + tail)
        start = breaks[0].end()

    if before_comment:
        head = text[breaks[-1].end() :].rstrip()
        end = breaks[-1].start()

    if start <= end:
        pieces.extend(split_blank_lines(text[start:end]))

    if head.strip():
        pieces.append(head)
    return pieces


def extract_chunks(text: str) -> list[Chunk]:
    """Split text into output chunks joined by the file's line ending.

    Each documentation comment becomes one DOC_COMMENT chunk carrying the
    indentation of its physical line. The text between comments becomes
    PLAIN chunks; at most one line break is taken from each side adjacent to
    a comment, and a blank line becomes an empty chunk.

    Args:
        text: Full source text

    Returns:
        Ordered list of chunks

    Raises:
        UnterminatedCommentError: If a documentation comment is never closed
    """
    regions = scan_regions(text)
    chunks: list[Chunk] = []

    for index, region in enumerate(regions):
        if region.is_comment:
            indent = leading_whitespace(text[_line_start(text, region.start) : region.start])
            chunks.append(Chunk(RegionKind.DOC_COMMENT, indent + region.text))
            continue

        after_comment = index > 0
        before_comment = index + 1 < len(regions)
        comment_indent = ""
        if after_comment:
            previous = regions[index - 1]
            comment_indent = leading_whitespace(text[_line_start(text, previous.start) :])

        for piece in _plain_pieces(region.text, after_comment, before_comment, comment_indent):
            chunks.append(Chunk(RegionKind.PLAIN, piece))

    return chunks
