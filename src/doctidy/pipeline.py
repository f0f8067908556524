"""Comment fixing pipeline.

fix() is the text-in, text-out engine: scan regions, normalize every
documentation comment, and reassemble the text with the input's line ending.
DocFixer wraps it for files and directory trees: encoding detection,
bounded-depth walking, dry runs, and per-file error collection.
"""

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from doctidy.config import DocTidyConfig
from doctidy.encoding import BOM_CHAR, detect_encoding, read_source, write_source
from doctidy.models.region import Chunk
from doctidy.models.result import FileError, FileResult, FileStatus, RunResult
from doctidy.normalizer.classifiers import LINE_BREAK, classify_element, detect_line_ending
from doctidy.normalizer.comments import parse_comment, render
from doctidy.normalizer.errors import CommentParseError
from doctidy.normalizer.names import NameRecognizer, ProperNameCheck, is_likely_proper_name
from doctidy.normalizer.scanner import extract_chunks

logger = logging.getLogger(__name__)


# =============================================================================
# Text engine
# =============================================================================


def _following_code(chunks: Sequence[Chunk], index: int) -> str:
    """Return the first non-blank plain chunk after a comment, or ''."""
    for chunk in chunks[index + 1 :]:
        if chunk.is_comment:
            break
        if chunk.text.strip():
            return chunk.text
    return ""


def fix(source: str, name_check: ProperNameCheck | None = None) -> str:
    """Normalize every documentation comment in source text.

    Comments that normalize to nothing are removed together with their line.
    Text without documentation comments is returned unchanged.

    Args:
        source: Full text of one source file
        name_check: Recognizer for people's names (defaults to the bundled corpus)

    Returns:
        Canonical text using the input's line ending convention

    Raises:
        CommentParseError: If a documentation comment is never closed
    """
    chunks = extract_chunks(source)
    if not any(chunk.is_comment for chunk in chunks):
        return source

    line_ending = detect_line_ending(source)
    pieces: list[str] = []
    removed = 0

    for index, chunk in enumerate(chunks):
        if not chunk.is_comment:
            pieces.append(chunk.text)
            continue

        element_kind = classify_element(_following_code(chunks, index))
        comment = parse_comment(chunk.text, element_kind=element_kind, name_check=name_check)
        rendered = render(comment)
        if rendered:
            pieces.append(rendered.replace("\n", line_ending))
        else:
            removed += 1

    if removed:
        logger.debug("Removed %d empty comment(s)", removed)
    return line_ending.join(pieces)


def changed_lines(original: str, fixed: str) -> list[str]:
    """List the lines that differ between two versions of a file.

    Lines are compared by position. For each differing position the original
    line comes first, then the fixed line; empty lines are omitted.
    """
    original_lines = LINE_BREAK.split(original)
    fixed_lines = LINE_BREAK.split(fixed)
    lines: list[str] = []

    for i in range(max(len(original_lines), len(fixed_lines))):
        old = original_lines[i] if i < len(original_lines) else ""
        new = fixed_lines[i] if i < len(fixed_lines) else ""
        if old == new:
            continue
        if old:
            lines.append(old)
        if new:
            lines.append(new)
    return lines


# =============================================================================
# File selection
# =============================================================================


def _is_excluded(rel_path: Path, patterns: Sequence[str]) -> bool:
    return any(rel_path.match(pattern) for pattern in patterns)


def iter_source_files(
    root: Path,
    extensions: Sequence[str],
    max_depth: int,
    exclude_patterns: Sequence[str] = (),
) -> Iterator[Path]:
    """Walk a directory tree and yield matching source files.

    Files directly inside root are at depth 1. Symbolic links (to files or
    directories) are skipped. Output is sorted for deterministic runs.

    Args:
        root: Directory to walk
        extensions: File suffixes to include
        max_depth: Deepest file depth to include
        exclude_patterns: Glob patterns matched against paths relative to root

    Yields:
        Paths of regular files to process
    """
    suffixes = tuple(extensions)

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)
        file_depth = len(rel_dir.parts) + 1

        dirnames[:] = sorted(
            name
            for name in dirnames
            if not (current / name).is_symlink()
            and not _is_excluded(rel_dir / name, exclude_patterns)
        )
        if file_depth >= max_depth:
            dirnames[:] = []
        if file_depth > max_depth:
            continue

        for name in sorted(filenames):
            file_path = current / name
            if not name.endswith(suffixes):
                continue
            if file_path.is_symlink() or not file_path.is_file():
                continue
            if _is_excluded(rel_dir / name, exclude_patterns):
                logger.debug("Excluded: %s", file_path)
                continue
            yield file_path


# =============================================================================
# File processing
# =============================================================================


class DocFixer:
    """Applies comment normalization to files and directory trees."""

    def __init__(
        self,
        config: DocTidyConfig | None = None,
        name_check: ProperNameCheck | None = None,
    ) -> None:
        """Initialize the fixer.

        Args:
            config: DocTidy configuration (uses defaults if None)
            name_check: Recognizer for people's names; by default the bundled
                corpus plus any configured proper nouns
        """
        self.config = config or DocTidyConfig()

        if name_check is None:
            extra = self.config.normalize.proper_nouns
            name_check = NameRecognizer(extra_names=extra) if extra else is_likely_proper_name
        self.name_check = name_check

    def fix_text(self, source: str) -> str:
        """Normalize the comments in one file's text."""
        return fix(source, name_check=self.name_check)

    def fix_file(
        self,
        path: Path,
        dry_run: bool = False,
        encoding: str | None = None,
    ) -> FileResult:
        """Normalize one file, rewriting it only if its text changed.

        Args:
            path: File to process
            dry_run: Compute changes without writing
            encoding: Codec override (else config, else auto-detect)

        Returns:
            FileResult describing the outcome

        Raises:
            CommentParseError: If the file has an unterminated comment
            UnicodeError: If the file cannot be decoded or encoded
            OSError: If the file cannot be read or written
        """
        codec = encoding or self.config.encoding.name or detect_encoding(path)
        original = read_source(path, codec)

        has_bom = original.startswith(BOM_CHAR)
        body = original[len(BOM_CHAR) :] if has_bom else original
        fixed = self.fix_text(body)

        if fixed == body:
            logger.debug("Unchanged: %s", path)
            return FileResult(path=path, status=FileStatus.UNCHANGED, encoding=codec)

        if dry_run:
            return FileResult(
                path=path,
                status=FileStatus.WOULD_FIX,
                encoding=codec,
                changed_lines=changed_lines(body, fixed),
            )

        write_source(path, BOM_CHAR + fixed if has_bom else fixed, codec)
        logger.debug("Fixed: %s (%s)", path, codec)
        return FileResult(path=path, status=FileStatus.FIXED, encoding=codec)

    def fix_path(
        self,
        path: Path,
        dry_run: bool = False,
        encoding: str | None = None,
    ) -> RunResult:
        """Normalize a file or every matching file below a directory.

        One failing file never stops the others; failures are collected in
        the result.

        Args:
            path: File or directory
            dry_run: Compute changes without writing
            encoding: Codec override for every file

        Returns:
            RunResult with one entry per visited file
        """
        result = RunResult()

        if path.is_dir():
            scan = self.config.scan
            files: Iterator[Path] | list[Path] = iter_source_files(
                path,
                extensions=scan.extensions,
                max_depth=scan.max_depth,
                exclude_patterns=scan.exclude,
            )
        elif path.is_file():
            files = [path]
        else:
            result.add_error(
                FileError(path=path, message="File or directory does not exist", kind="io")
            )
            return result

        for file_path in files:
            try:
                result.files.append(self.fix_file(file_path, dry_run=dry_run, encoding=encoding))
            except CommentParseError as e:
                self._record(result, file_path, str(e), "parse")
            except UnicodeError as e:
                self._record(result, file_path, str(e), "encoding")
            except OSError as e:
                self._record(result, file_path, str(e), "io")

        return result

    @staticmethod
    def _record(result: RunResult, path: Path, message: str, kind: str) -> None:
        logger.debug("Failed: %s [%s] %s", path, kind, message)
        result.add_error(FileError(path=path, message=message, kind=kind))
