"""DocTidy normalizer - documentation comment recognition and rewriting.

Components, leaf first:
- classifiers: Pure text questions (indentation, URLs, abbreviations, lexical state)
- names: Proper-name recognition for capitalization decisions
- tags: Block tag normalization and canonical ordering
- comments: Comment parsing and rendering
- scanner: Partitioning source text into comment and plain regions
"""

from doctidy.normalizer.comments import find_margin_width, parse_comment, render
from doctidy.normalizer.errors import CommentParseError, UnterminatedCommentError
from doctidy.normalizer.names import NameRecognizer, ProperNameCheck, is_likely_proper_name
from doctidy.normalizer.scanner import extract_chunks, scan_lines, scan_regions
from doctidy.normalizer.tags import normalize_tag, parse_tag, sort_tags

__all__ = [
    "CommentParseError",
    "NameRecognizer",
    "ProperNameCheck",
    "UnterminatedCommentError",
    "extract_chunks",
    "find_margin_width",
    "is_likely_proper_name",
    "normalize_tag",
    "parse_comment",
    "parse_tag",
    "render",
    "scan_lines",
    "scan_regions",
    "sort_tags",
]
