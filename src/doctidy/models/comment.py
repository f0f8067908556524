"""Documentation comment entities.

A comment is one of two variants:
- MultilineComment: delimiters on their own lines, a description block and tags
- SingleLineComment: delimiters share the line with a one-line description

Both are immutable. Rendering lives in doctidy.normalizer.comments.
"""

from dataclasses import dataclass, field
from enum import Enum

from doctidy.models.tag import Tag


class ElementKind(Enum):
    """Kind of declaration a comment documents."""

    TYPE = "type"
    ROUTINE = "routine"
    FIELD = "field"


@dataclass(frozen=True)
class MultilineComment:
    """A documentation comment rendered one element per line.

    Attributes:
        description: Normalized free text preceding the first tag
        tags: Tags in canonical order
        indent: Left margin in columns applied to every rendered line
        element_kind: Declaration kind the comment documents (if known)
    """

    description: str = ""
    tags: tuple[Tag, ...] = field(default_factory=tuple)
    indent: int = 0
    element_kind: ElementKind | None = None

    @property
    def is_empty(self) -> bool:
        """Return True if there is nothing left to render."""
        return not self.description.strip() and not self.tags


@dataclass(frozen=True)
class SingleLineComment:
    """A tagless documentation comment whose description fits on one line.

    Attributes:
        description: Normalized description text
        indent: Left margin in columns
        element_kind: Declaration kind the comment documents (if known)
    """

    description: str = ""
    indent: int = 0
    element_kind: ElementKind | None = None

    @property
    def tags(self) -> tuple[Tag, ...]:
        """Single-line comments never carry tags."""
        return ()

    @property
    def is_empty(self) -> bool:
        """Return True if there is nothing left to render."""
        return not self.description.strip()


Comment = MultilineComment | SingleLineComment
