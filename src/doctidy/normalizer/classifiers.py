"""Text classifiers for documentation comment normalization.

Pure functions answering local questions about a piece of text:
- Indentation width and line-ending convention
- Whether text ends with a URL or a known abbreviation
- Whether a word is an acronym or a known proper noun
- The lexical state (code, string, comment) at a position
- Which kind of declaration a run of code starts with
"""

import re
from enum import Enum

from doctidy.models.comment import ElementKind

TAB_WIDTH = 4

URL_SCHEMES = ("http://", "https://", "ftp://", "ftps://", "file://", "mailto:")
URL_HOST_PREFIXES = ("www.", "ftp.")

# Abbreviations that keep their trailing period at the end of tag text
ABBREVIATIONS = frozenset(
    {
        # Company suffixes
        "Inc.", "Ltd.", "Corp.", "Co.", "LLC.", "LLP.", "LP.",
        # Name suffixes
        "Jr.", "Sr.", "Esq.",
        # Honorifics and titles
        "Dr.", "Mr.", "Mrs.", "Ms.", "Miss.", "Prof.",
        # Degrees
        "Ph.D.", "M.D.", "M.B.A.", "B.A.", "B.S.", "M.A.", "M.S.",
        # Addresses and institutions
        "Ave.", "St.", "Rd.", "Blvd.", "Dept.", "Univ.",
        # Latin and bibliographic
        "etc.", "e.g.", "i.e.", "cf.", "vs.", "vol.", "no.", "pp.",
    }
)

# Technical terms that stay capitalized even though they look like ordinary words
PROPER_NOUNS = frozenset({"Java"})

# Serialization members documented by name; never capitalized
SERIAL_FIELD_NAMES = frozenset({"serialVersionUID", "serialPersistentFields"})

LINE_BREAK = re.compile(r"\r\n|\r|\n")

_LEADING_ANNOTATIONS = re.compile(r"^(?:@(?!interface\b)[\w.]+(?:\([^)]*\))?\s*)+")
_TYPE_DECLARATION = re.compile(r"(?:^|\s)(?:class|interface|enum|record|@interface)\s+\w")


# =============================================================================
# Whitespace and line endings
# =============================================================================


def find_indent(text: str) -> int:
    """Count leading whitespace columns, with a tab counting as four.

    Args:
        text: Line to measure

    Returns:
        Indentation width in columns
    """
    indent = 0
    for char in text:
        if char == " ":
            indent += 1
        elif char == "\t":
            indent += TAB_WIDTH
        else:
            break
    return indent


def detect_line_ending(text: str) -> str:
    """Return the line ending convention used by text.

    CRLF wins if present anywhere, then CR, then LF (the default).
    """
    if "\r\n" in text:
        return "\r\n"
    if "\r" in text:
        return "\r"
    return "\n"


def leading_whitespace(text: str) -> str:
    """Return the literal whitespace prefix of text."""
    return text[: len(text) - len(text.lstrip(" \t"))]


# =============================================================================
# Word classification
# =============================================================================


def first_word(text: str) -> str:
    """Return the first whitespace-delimited word of text, or ''."""
    words = text.split(maxsplit=1)
    return words[0] if words else ""


def is_acronym(word: str) -> bool:
    """Check if a word is an acronym: three or more characters, none lower-case.

    Non-letters are allowed, so ``I/O`` and ``UTF-8`` count.
    """
    if len(word) < 3:
        return False
    return not any(char.islower() for char in word)


def is_known_proper_noun(word: str) -> bool:
    """Check the static allow-list of capitalized technical terms."""
    return word in PROPER_NOUNS


def is_serial_field_name(word: str) -> bool:
    return word in SERIAL_FIELD_NAMES


def ends_with_url(text: str | None) -> bool:
    """Check if the last token of text is a URL.

    A token is a URL when it contains an explicit scheme (http://, https://,
    ftp://, ftps://, file://, mailto:) or starts with ``www.`` or ``ftp.``.
    Bare domains such as ``example.com`` are not URLs.

    Args:
        text: Text to check (may be None)

    Returns:
        True if the final token looks like a URL
    """
    if not text or not text.strip():
        return False

    last_token = text.split()[-1]

    if any(scheme in last_token for scheme in URL_SCHEMES):
        return True

    return last_token.startswith(URL_HOST_PREFIXES)


def ends_with_abbreviation(text: str | None) -> bool:
    """Check if text ends with a known abbreviation.

    This is a plain suffix match, so ``Acme,Inc.`` matches ``Inc.``.
    """
    if not text or not text.strip():
        return False

    trimmed = text.rstrip()
    return any(trimmed.endswith(abbreviation) for abbreviation in ABBREVIATIONS)


# =============================================================================
# Lexical state
# =============================================================================


class LexState(Enum):
    """Lexical context of a position in source text."""

    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"
    CHAR = "char"
    TEXT_BLOCK = "text_block"


_CLOSING_QUOTE = {LexState.STRING: '"', LexState.CHAR: "'"}


def advance(
    text: str,
    start: int,
    stop: int,
    state: LexState = LexState.CODE,
) -> tuple[LexState, int]:
    """Run the lexical state machine over text[start:stop].

    Multi-character tokens (``//``, ``/*``, ``*/``, triple quotes and
    backslash escapes) are consumed whole, so the returned offset can pass
    ``stop`` when a token straddles it. String and character literals end at
    a line break if they are not closed on their own line.

    Args:
        text: Source text
        start: Offset to resume scanning from
        stop: Offset to scan up to
        state: State in effect at ``start``

    Returns:
        Tuple of (state at the returned offset, offset where scanning stopped)
    """
    i = start
    while i < stop:
        if state is LexState.CODE:
            if text.startswith('"""', i):
                state = LexState.TEXT_BLOCK
                i += 3
            elif text.startswith("//", i):
                state = LexState.LINE_COMMENT
                i += 2
            elif text.startswith("/*", i):
                state = LexState.BLOCK_COMMENT
                i += 2
            else:
                char = text[i]
                if char == '"':
                    state = LexState.STRING
                elif char == "'":
                    state = LexState.CHAR
                i += 1
        elif state is LexState.LINE_COMMENT:
            if text[i] in "\r\n":
                state = LexState.CODE
            i += 1
        elif state is LexState.BLOCK_COMMENT:
            if text.startswith("*/", i):
                state = LexState.CODE
                i += 2
            else:
                i += 1
        elif state is LexState.TEXT_BLOCK:
            if text[i] == "\\":
                i += 2
            elif text.startswith('"""', i):
                state = LexState.CODE
                i += 3
            else:
                i += 1
        else:
            char = text[i]
            if char == "\\":
                i += 2
                continue
            if char == _CLOSING_QUOTE[state] or char in "\r\n":
                state = LexState.CODE
            i += 1
    return state, i


def _line_state(text: str, pos: int) -> LexState:
    line_start = max(text.rfind("\n", 0, pos), text.rfind("\r", 0, pos)) + 1
    state, _ = advance(text, line_start, pos)
    return state


def in_string_literal(text: str, pos: int) -> bool:
    """Check if pos lies inside a quoted string or character literal.

    Only the physical line containing pos is examined; quotes are counted
    with backslash-escape awareness.
    """
    return _line_state(text, pos) in (LexState.STRING, LexState.CHAR, LexState.TEXT_BLOCK)


def in_line_comment(text: str, pos: int) -> bool:
    """Check if a line comment opener precedes pos on its physical line."""
    return _line_state(text, pos) is LexState.LINE_COMMENT


# =============================================================================
# Declaration classification
# =============================================================================


def classify_element(code: str) -> ElementKind | None:
    """Guess which kind of declaration code begins with.

    Looks at the first line that is not blank, a line comment, or made only
    of annotations. Best effort: returns None when nothing declarative follows.

    Args:
        code: Text following a documentation comment

    Returns:
        TYPE, ROUTINE, FIELD, or None
    """
    for raw_line in LINE_BREAK.split(code):
        line = _LEADING_ANNOTATIONS.sub("", raw_line.strip())
        if not line or line.startswith("//"):
            continue

        if _TYPE_DECLARATION.search(f" {line}"):
            return ElementKind.TYPE

        paren = line.find("(")
        equals = line.find("=")
        if paren != -1 and (equals == -1 or paren < equals):
            return ElementKind.ROUTINE

        if line == "}":
            return None
        return ElementKind.FIELD

    return None
