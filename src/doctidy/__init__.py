"""DocTidy - Javadoc-style documentation comment normalizer.

DocTidy rewrites documentation comments in source files to a canonical
style: capitalized, punctuated descriptions, lowercase tag phrases,
canonical tag order, and consistent indentation. Everything outside
documentation comments is passed through unchanged.

Engine entry points:
- fix: Normalize every comment in a file's text
- parse_comment: Parse one comment into a structured value
- render: Render a structured comment back to canonical text
"""

__version__ = "0.1.0"
__author__ = "DocTidy Contributors"

from doctidy.normalizer.comments import parse_comment, render  # noqa: E402
from doctidy.pipeline import fix  # noqa: E402

__all__ = ["fix", "parse_comment", "render", "__version__"]
