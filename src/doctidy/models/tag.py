"""Block tag entity.

A Tag is produced by doctidy.normalizer.tags.normalize_tag, which applies the
normalization rules at construction time. Instances are immutable and owned
by exactly one comment.
"""

from dataclasses import dataclass

# Tags whose whole remainder is descriptive text (no argument token)
ARGUMENT_FREE_KINDS = frozenset(
    {
        "return",
        "deprecated",
        "author",
        "serial",
        "see",
        "serialData",
        "since",
        "version",
    }
)

# Legacy tag names and their canonical replacement
TAG_ALIASES = {
    "exception": "throws",
}

# Canonical ordering of tag kinds; unknown kinds sort after all of these
TAG_PRECEDENCE = {
    "author": 0,
    "version": 1,
    "param": 2,
    "return": 3,
    "throws": 4,
    "see": 5,
    "since": 6,
    "serial": 7,
    "serialField": 7,
    "serialData": 7,
    "deprecated": 8,
}

UNKNOWN_RANK = len(set(TAG_PRECEDENCE.values()))


@dataclass(frozen=True)
class Tag:
    """A single block tag such as ``@param name text``.

    Attributes:
        kind: Canonical tag name without the leading ``@``
        argument: Parameter name or exception type (argument-bearing kinds only)
        text: Normalized descriptive text; continuation lines are joined with ``\\n``
        spacing: Whitespace that separated argument and text in the source
    """

    kind: str
    argument: str | None = None
    text: str = ""
    spacing: str = " "

    @property
    def takes_argument(self) -> bool:
        """Return True for parameter-like kinds."""
        return self.kind not in ARGUMENT_FREE_KINDS

    @property
    def rank(self) -> int:
        """Precedence rank used for canonical ordering."""
        return TAG_PRECEDENCE.get(self.kind, UNKNOWN_RANK)

    @property
    def is_blank(self) -> bool:
        """Return True if the tag documents nothing and should be dropped.

        Only param, throws and return tags are ever blank. Param and throws
        need both an empty argument and empty text; return needs empty text.
        Custom tags are kept even when empty.
        """
        text_blank = not self.text.strip()
        if self.kind == "return":
            return text_blank
        if self.kind in ("param", "throws"):
            return text_blank and not (self.argument or "").strip()
        return False
