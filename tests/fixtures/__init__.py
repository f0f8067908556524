"""Test fixtures for DocTidy.

This package provides Java sources for integration and end-to-end testing.

Layout:
- sources/: Files as a developer might write them
- expected/: The same files after fixing (only for files that change)
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

SOURCES_DIR = FIXTURES_DIR / "sources"
EXPECTED_DIR = FIXTURES_DIR / "expected"


def read_fixture(name: str, expected: bool = False) -> str:
    """Read a fixture file without translating line endings.

    Args:
        name: File name, e.g. "Account.java"
        expected: Read the fixed version instead of the source

    Returns:
        File contents

    Raises:
        ValueError: If the fixture doesn't exist
    """
    path = (EXPECTED_DIR if expected else SOURCES_DIR) / name
    if not path.exists():
        raise ValueError(f"Fixture not found: {name}")
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()
