"""Block tag parsing, normalization and ordering.

normalize_tag is the only way the normalizer builds a Tag, so every Tag it
produces is canonical by construction. Rules, in order:

1. Legacy aliases are renamed (``@exception`` becomes ``@throws``)
2. Argument-free kinds take the whole remainder as text; other kinds take
   the next token as argument and keep the whitespace before the text
3. A leading ``- `` bullet is removed
4. ``@return`` drops a redundant leading "return"/"returns"
5. The first letter is lowercased unless the kind, the first word, or the
   shape of the first word says otherwise
6. A single trailing period is removed unless the text has several
   sentences, the tag is ``@deprecated``, or the text ends in an abbreviation
"""

import re
from collections.abc import Iterable, Sequence

from doctidy.models.tag import ARGUMENT_FREE_KINDS, TAG_ALIASES, Tag
from doctidy.normalizer.classifiers import (
    ends_with_abbreviation,
    first_word,
    is_acronym,
    is_known_proper_noun,
)
from doctidy.normalizer.names import ProperNameCheck, is_likely_proper_name

# Tags whose text is never lowercased: names, references, full sentences
CASE_EXEMPT_KINDS = frozenset({"author", "see", "deprecated"})

REDUNDANT_RETURN_PREFIXES = ("returns ", "return ")

_TAG_HEAD = re.compile(r"@(?P<kind>\S*)(?P<rest>.*)", re.DOTALL)
_ARGUMENT = re.compile(r"\s*(?P<argument>\S+)(?P<spacing>[ \t]*)(?P<text>.*)", re.DOTALL)


def canonical_kind(kind: str) -> str:
    """Map a legacy tag name to its canonical name."""
    return TAG_ALIASES.get(kind, kind)


def _strip_bullet(text: str) -> str:
    if text.startswith("- "):
        return text[2:].strip()
    return text


def _strip_redundant_return(text: str) -> str:
    for prefix in REDUNDANT_RETURN_PREFIXES:
        if len(text) > len(prefix) and text[: len(prefix)].lower() == prefix:
            return text[len(prefix) :]
    return text


def should_lowercase(kind: str, text: str, name_check: ProperNameCheck) -> bool:
    """Decide whether the first letter of tag text should be lowercased.

    Args:
        kind: Canonical tag kind
        text: Tag text (non-empty)
        name_check: Recognizer for people's names

    Returns:
        True only for a plain capitalized first word
    """
    if kind in CASE_EXEMPT_KINDS:
        return False

    if not text[0].isupper():
        return False

    word = first_word(text)
    if is_known_proper_noun(word) or name_check(word) or is_acronym(word):
        return False

    # A second capital inside the first word (camelCase, IOStream) is deliberate
    return not any(char.isupper() for char in word[1:])


def _strip_trailing_period(kind: str, text: str) -> str:
    if not text.endswith("."):
        return text
    if ". " in text or ".\n" in text:
        return text
    if kind == "deprecated" or ends_with_abbreviation(text):
        return text
    return text.strip()[:-1]


def normalize_tag(
    kind: str,
    argument: str | None = None,
    text: str = "",
    spacing: str = " ",
    name_check: ProperNameCheck | None = None,
) -> Tag:
    """Build a canonical Tag from its raw parts.

    Args:
        kind: Tag name as written, without ``@``
        argument: Argument token for argument-bearing kinds
        text: Descriptive text, continuation lines joined with ``\\n``
        spacing: Whitespace between argument and text in the source
        name_check: Recognizer for people's names (defaults to the bundled corpus)

    Returns:
        Normalized Tag
    """
    check = name_check or is_likely_proper_name
    kind = canonical_kind(kind)

    text = _strip_bullet(text)
    if kind == "return" and text:
        text = _strip_redundant_return(text)

    if text and should_lowercase(kind, text, check):
        text = text[0].lower() + text[1:]

    text = _strip_trailing_period(kind, text)

    return Tag(kind=kind, argument=argument or None, text=text, spacing=spacing or " ")


def parse_tag(
    head: str,
    continuation: Sequence[str] = (),
    name_check: ProperNameCheck | None = None,
) -> Tag:
    """Parse a raw tag line plus its continuation lines.

    Args:
        head: The tag line with the comment margin removed, e.g.
            ``@param  name  the name``
        continuation: Following lines belonging to the same tag, each with the
            comment marker removed but its own indentation kept
        name_check: Recognizer for people's names

    Returns:
        Normalized Tag
    """
    match = _TAG_HEAD.match(head.strip())
    if match is None:
        raise ValueError(f"Not a block tag: {head!r}")

    kind = canonical_kind(match.group("kind"))
    rest = match.group("rest")
    argument: str | None = None
    spacing = " "

    if kind in ARGUMENT_FREE_KINDS:
        text = rest.strip()
    else:
        arg_match = _ARGUMENT.match(rest)
        if arg_match is None:
            text = ""
        else:
            argument = arg_match.group("argument")
            text = arg_match.group("text").strip()
            if text and arg_match.group("spacing"):
                spacing = arg_match.group("spacing")

    lines = [line.rstrip() for line in continuation]
    while lines and not lines[-1].strip():
        lines.pop()
    if lines:
        text = "\n".join([text, *lines]) if text else "\n".join(lines).strip()

    return normalize_tag(kind, argument, text, spacing, name_check=name_check)


def tag_sort_key(indexed: tuple[int, Tag]) -> tuple[int, str, int]:
    """Sort key: rank, then throws argument (case-insensitive), then source order."""
    index, tag = indexed
    secondary = (tag.argument or "").casefold() if tag.kind == "throws" else ""
    return (tag.rank, secondary, index)


def sort_tags(tags: Iterable[Tag]) -> tuple[Tag, ...]:
    """Stable-sort tags into canonical order.

    Tags are grouped by precedence rank. Within the throws rank they are
    ordered by exception name ignoring case; every other group keeps the
    order it had in the source.
    """
    return tuple(tag for _, tag in sorted(enumerate(tags), key=tag_sort_key))


def prune_blank_tags(tags: Iterable[Tag]) -> list[Tag]:
    """Drop tags that document nothing."""
    return [tag for tag in tags if not tag.is_blank]
