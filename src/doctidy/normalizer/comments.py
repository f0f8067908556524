"""Documentation comment parsing and rendering.

parse_comment turns one delimited comment into a MultilineComment or a
SingleLineComment; render turns either back into canonical text. A comment
with neither description nor tags renders to the empty string, which callers
treat as "delete this comment".
"""

import logging
import re

from doctidy.models.comment import (
    Comment,
    ElementKind,
    MultilineComment,
    SingleLineComment,
)
from doctidy.models.tag import Tag
from doctidy.normalizer.classifiers import (
    detect_line_ending,
    ends_with_url,
    find_indent,
    first_word,
    is_serial_field_name,
)
from doctidy.normalizer.errors import CommentParseError
from doctidy.normalizer.names import ProperNameCheck
from doctidy.normalizer.tags import parse_tag, prune_blank_tags, sort_tags

logger = logging.getLogger(__name__)

OPENER = "/**"
CLOSER = "*/"

# A block tag starts at the beginning of the body or after whitespace;
# inline tags such as {@code x} do not count
_BLOCK_TAG_MARKER = re.compile(r"(?:^|\s)@\w")
_TAG_LINE = re.compile(r"^\s*\*?\s*@")
_MARGIN_TAG_LINE = re.compile(r"^\*\s*@")


# =============================================================================
# Description normalization
# =============================================================================


def normalize_description(text: str) -> str:
    """Capitalize the first letter and terminate the sentence.

    A period is appended when the text ends in a letter or digit and does
    not end with a URL. Serialization member names are left as written.
    """
    text = text.strip()
    if not text:
        return ""

    if not is_serial_field_name(first_word(text)):
        text = text[0].upper() + text[1:]

    if text[-1].isalnum() and not ends_with_url(text):
        text += "."
    return text


# =============================================================================
# Parsing
# =============================================================================


def find_margin_width(raw: str) -> int:
    """Find the smallest indentation after the line marker.

    Scans every line after the first, stopping at the first tag line and
    ignoring bare markers and the closing line.

    Args:
        raw: Comment text with ``\\n`` line breaks

    Returns:
        Margin width in columns, at least 1
    """
    widths = []
    for line in raw.split("\n")[1:]:
        stripped = line.strip()
        if _MARGIN_TAG_LINE.match(stripped):
            break
        if stripped.startswith("*") and not stripped.endswith(CLOSER) and stripped != "*":
            widths.append(find_indent(stripped[1:]))

    return max(min(widths, default=1), 1)


def _extract_body(stripped: str) -> str:
    if not stripped.startswith(OPENER) or not stripped.endswith(CLOSER) or len(stripped) < 4:
        raise CommentParseError(f"Malformed documentation comment: {_preview(stripped)}")
    if stripped == "/**/":
        return ""
    if len(stripped) >= 6 and stripped.endswith("**/"):
        return stripped[3:-3]
    return stripped[3:-2]


def _preview(text: str, limit: int = 40) -> str:
    first_line = text.split("\n", 1)[0]
    return repr(first_line if len(first_line) <= limit else first_line[:limit] + "...")


def _after_marker(line: str) -> str | None:
    """Return the text after a leading ``*`` marker, or None if there is none."""
    stripped = line.lstrip()
    if stripped.startswith("*"):
        return stripped[1:]
    return None


def _content(line: str, margin: int) -> str:
    """Strip the marker and up to ``margin`` spaces, keeping deeper indentation.

    Whitespace-only lines become empty; other lines keep their trailing text
    exactly as written.
    """
    after = _after_marker(line)
    if after is None:
        return line.strip()
    if not after.strip():
        return ""
    leading = len(after) - len(after.lstrip(" "))
    return after[min(margin, leading) :]


def _continuation(line: str) -> str:
    after = _after_marker(line)
    if after is None:
        return " " + line.strip()
    return after.rstrip()


def parse_comment(
    raw: str,
    element_kind: ElementKind | None = None,
    name_check: ProperNameCheck | None = None,
) -> Comment:
    """Parse one documentation comment.

    Leading whitespace before the opener sets the comment's indentation.

    Args:
        raw: Delimited comment text, optionally preceded by indentation
        element_kind: Kind of declaration the comment documents
        name_check: Recognizer for people's names (defaults to the bundled corpus)

    Returns:
        SingleLineComment for a one-line comment without block tags,
        MultilineComment otherwise

    Raises:
        CommentParseError: If the text is not delimited by ``/**`` and ``*/``
    """
    if not raw.strip():
        return SingleLineComment(element_kind=element_kind)

    line_ending = detect_line_ending(raw)
    raw = raw.replace(line_ending, "\n")

    indent = find_indent(raw)
    stripped = raw.strip()
    body = _extract_body(stripped)

    if "\n" not in body and not _BLOCK_TAG_MARKER.search(body):
        return SingleLineComment(
            description=normalize_description(body),
            indent=indent,
            element_kind=element_kind,
        )

    margin = find_margin_width(raw)
    lines = body.split("\n")

    description_lines: list[str] = []
    tags: list[Tag] = []
    i = 0
    while i < len(lines):
        content = _content(lines[i], margin) if i else lines[i].strip()
        if content.lstrip().startswith("@"):
            continuation = []
            while i + 1 < len(lines) and not _TAG_LINE.match(lines[i + 1]):
                i += 1
                continuation.append(_continuation(lines[i]))
            tags.append(parse_tag(content, continuation, name_check=name_check))
        elif not tags:
            description_lines.append(content)
        i += 1

    description = normalize_description("\n".join(description_lines))
    comment = MultilineComment(
        description=description,
        tags=sort_tags(prune_blank_tags(tags)),
        indent=indent,
        element_kind=element_kind,
    )
    logger.debug(
        "Parsed comment: %d description line(s), %d tag(s)",
        len(description.splitlines()),
        len(comment.tags),
    )
    return comment


# =============================================================================
# Rendering
# =============================================================================


def _marker_line(prefix: str, content: str) -> str:
    """Render one body line; blank content gets no trailing space."""
    return f"{prefix} *" + (f" {content}" if content.strip() else "")


def render_tag(tag: Tag, indent: str, aligned: bool) -> str:
    """Render a tag and its continuation lines.

    Args:
        tag: Tag to render
        indent: Comment indentation
        aligned: Use the tag's own spacing (several tags) instead of one space
    """
    line = f"{indent} * @{tag.kind}"
    if tag.argument:
        line += f" {tag.argument}"

    first, *rest = tag.text.split("\n")
    if first:
        line += (tag.spacing if aligned else " ") + first

    lines = [line]
    lines.extend(f"{indent} *{extra}" if extra.strip() else f"{indent} *" for extra in rest)
    return "\n".join(lines)


def render(comment: Comment) -> str:
    """Render a comment to canonical text with ``\\n`` line breaks.

    Returns:
        The comment text, or '' if the comment is empty
    """
    if comment.is_empty:
        return ""

    indent = " " * comment.indent

    if isinstance(comment, SingleLineComment):
        return f"{indent}/** {comment.description} */"

    lines = [f"{indent}/**"]
    if comment.description.strip():
        lines.extend(_marker_line(indent, line) for line in comment.description.split("\n"))
        if comment.tags:
            lines.append(f"{indent} *")

    aligned = len(comment.tags) > 1
    lines.extend(render_tag(tag, indent, aligned) for tag in comment.tags)
    lines.append(f"{indent} */")
    return "\n".join(lines)
