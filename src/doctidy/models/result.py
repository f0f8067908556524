"""Processing result entities.

This module contains entities describing the outcome of a run:
- FileError: Per-file failure that did not abort the run
- FileResult: Outcome for one processed file
- RunResult: Aggregated outcome for a file or directory run
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class FileStatus(Enum):
    """Outcome of processing one file."""

    UNCHANGED = "unchanged"
    FIXED = "fixed"
    WOULD_FIX = "would_fix"  # dry run found changes
    FAILED = "failed"


@dataclass
class FileError:
    """Non-fatal error encountered while processing a file.

    Attributes:
        path: File that caused the error
        message: Error description
        kind: Error category (parse, encoding, io)
        recoverable: Whether the run continued after this error
    """

    path: Path
    message: str
    kind: str = "parse"
    recoverable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "path": str(self.path),
            "message": self.message,
            "kind": self.kind,
            "recoverable": self.recoverable,
        }


@dataclass
class FileResult:
    """Outcome for a single source file.

    Attributes:
        path: Processed file
        status: What happened to the file
        encoding: Character encoding used to read and write it
        changed_lines: Old/new line pairs (dry run only)
    """

    path: Path
    status: FileStatus
    encoding: str | None = None
    changed_lines: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status in (FileStatus.FIXED, FileStatus.WOULD_FIX)


@dataclass
class RunResult:
    """Aggregated outcome of fixing a file or a directory tree.

    Attributes:
        files: One entry per file visited, in visit order
        errors: Per-file failures
    """

    files: list[FileResult] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    @property
    def changed_files(self) -> list[FileResult]:
        """Files that were (or in a dry run would be) rewritten."""
        return [f for f in self.files if f.changed]

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        """Process exit code: 1 if any file failed, else 0."""
        return 0 if self.success else 1

    def add_error(self, error: FileError) -> None:
        """Record a failure and a FAILED file entry."""
        self.errors.append(error)
        self.files.append(FileResult(path=error.path, status=FileStatus.FAILED))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "files": len(self.files),
            "changed": [str(f.path) for f in self.changed_files],
            "errors": [e.to_dict() for e in self.errors],
        }
