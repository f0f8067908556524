"""Shared pytest fixtures for DocTidy tests.

Fixtures are organized by category:
- Path fixtures: Fixture directories and temporary source trees
- Normalizer fixtures: Name recognizers and sample comments
- Configuration fixtures: Config dictionaries for various scenarios
"""

import shutil
from pathlib import Path
from typing import Any

import pytest

from doctidy.normalizer.names import reset_recognizer
from tests.fixtures import SOURCES_DIR

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def java_tree(tmp_path: Path) -> Path:
    """Create a temporary source tree from the fixture sources.

    Layout::

        project/
            Account.java
            Plain.java
            notes.txt
            pkg/
                Account.java
                deep/
                    Account.java
    """
    root = tmp_path / "project"
    deep = root / "pkg" / "deep"
    deep.mkdir(parents=True)

    for name in ("Account.java", "Plain.java"):
        shutil.copy(SOURCES_DIR / name, root / name)
    shutil.copy(SOURCES_DIR / "Account.java", root / "pkg" / "Account.java")
    shutil.copy(SOURCES_DIR / "Account.java", deep / "Account.java")
    (root / "notes.txt").write_text("/** not java */\n")

    return root


@pytest.fixture
def write_java(tmp_path: Path):
    """Return a helper that writes a Java file with exact bytes."""

    def _write(name: str, text: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode(encoding))
        return path

    return _write


# =============================================================================
# Normalizer Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_recognizer():
    """Drop the shared name recognizer between tests."""
    reset_recognizer()
    yield
    reset_recognizer()


@pytest.fixture
def no_names():
    """A name check that recognizes nothing."""
    return lambda word: False


@pytest.fixture
def method_comment() -> str:
    """Return a typical indented method comment."""
    return (
        "    /**\n"
        "     * Constructs a complex number with the specified real and imaginary parts.\n"
        "     *\n"
        "     * @param real The real part.\n"
        "     * @param imaginary The imaginary part.\n"
        "     */"
    )


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid DocTidy configuration."""
    return {
        "scan": {
            "extensions": [".java"],
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete DocTidy configuration with all options."""
    return {
        "scan": {
            "extensions": [".java", "groovy"],
            "max_depth": 5,
            "exclude": ["generated/*", "*Test.java"],
        },
        "encoding": {
            "name": "latin-1",
        },
        "normalize": {
            "proper_nouns": ["Kubernetes", "Zed"],
        },
        "ci": {
            "json_output": True,
            "fail_on_change": True,
        },
    }
