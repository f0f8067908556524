"""Source regions produced by the scanner."""

from dataclasses import dataclass
from enum import Enum


class RegionKind(Enum):
    """Classification of a span of source text."""

    PLAIN = "plain"
    DOC_COMMENT = "doc_comment"


@dataclass(frozen=True)
class Region:
    """A contiguous span of the scanned text.

    Attributes:
        kind: Whether the span is a documentation comment or anything else
        start: Offset of the first character in the scanned text
        text: The literal characters of the span
    """

    kind: RegionKind
    start: int
    text: str

    @property
    def end(self) -> int:
        """Offset one past the last character."""
        return self.start + len(self.text)

    @property
    def is_comment(self) -> bool:
        return self.kind is RegionKind.DOC_COMMENT


@dataclass(frozen=True)
class Chunk:
    """One unit of output layout.

    Chunks are joined with the file's line ending to rebuild the text.
    A comment chunk carries the leading whitespace of its physical line so
    the comment parser can recover its indentation.

    Attributes:
        kind: PLAIN or DOC_COMMENT
        text: Literal text (for comments, indentation plus the delimited comment)
    """

    kind: RegionKind
    text: str

    @property
    def is_comment(self) -> bool:
        return self.kind is RegionKind.DOC_COMMENT
