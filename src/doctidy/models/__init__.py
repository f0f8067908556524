"""DocTidy data models.

This module exports the entities shared by the normalizer and the driver:
- Tag: One normalized block tag
- MultilineComment / SingleLineComment: The two comment variants
- Region / Chunk: Scanner output and output layout units
- RunResult / FileResult / FileError: Outcome of processing files
"""

from doctidy.models.comment import (
    Comment,
    ElementKind,
    MultilineComment,
    SingleLineComment,
)
from doctidy.models.region import Chunk, Region, RegionKind
from doctidy.models.result import FileError, FileResult, FileStatus, RunResult
from doctidy.models.tag import Tag

__all__ = [
    "Tag",
    "Comment",
    "ElementKind",
    "MultilineComment",
    "SingleLineComment",
    "Region",
    "RegionKind",
    "Chunk",
    "RunResult",
    "FileResult",
    "FileStatus",
    "FileError",
]
