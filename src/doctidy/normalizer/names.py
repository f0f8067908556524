"""Proper-name recognition.

The tag normalizer asks "is this capitalized word a person's name?" before
lowercasing it. The question is answered by any callable of type
ProperNameCheck; the default is a NameRecognizer over a bundled list of
common given names (doctidy/data/given_names.yaml).
"""

import logging
from collections.abc import Callable, Iterable
from importlib import resources

import yaml

logger = logging.getLogger(__name__)

ProperNameCheck = Callable[[str], bool]

NAMES_RESOURCE = "given_names.yaml"

# Trailing characters stripped before lookup ("Michael's", "Smith,")
_TRAILING = ".,;:!?)]}\"'"


def load_given_names() -> list[str]:
    """Load the bundled given-name corpus.

    Returns:
        List of names as they appear in the resource

    Raises:
        ValueError: If the resource is not a YAML list under ``names``
    """
    data_file = resources.files("doctidy") / "data" / NAMES_RESOURCE
    with data_file.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    names = data.get("names") if isinstance(data, dict) else None
    if not isinstance(names, list):
        raise ValueError(f"Invalid name corpus: {NAMES_RESOURCE} must define a 'names' list")
    return [str(name) for name in names]


class NameRecognizer:
    """Recognize capitalized words that are people's given names."""

    def __init__(
        self,
        names: Iterable[str] | None = None,
        extra_names: Iterable[str] | None = None,
    ) -> None:
        """Initialize the recognizer.

        Args:
            names: Base corpus (defaults to the bundled given names)
            extra_names: Additional names, e.g. project-specific proper nouns
        """
        base = list(names) if names is not None else load_given_names()
        self._names = frozenset(base) | frozenset(extra_names or ())
        logger.debug("Name recognizer loaded %d names", len(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_name(word)

    def __call__(self, word: str) -> bool:
        return self.is_name(word)

    def is_name(self, word: str) -> bool:
        """Check if word (ignoring possessive and punctuation suffixes) is a name."""
        candidate = word.rstrip(_TRAILING)
        if candidate.endswith(("'s", "’s")):
            candidate = candidate[:-2]
        if not candidate or not candidate[0].isupper():
            return False
        return candidate in self._names


_recognizer: NameRecognizer | None = None


def get_recognizer() -> NameRecognizer:
    """Get the shared recognizer over the bundled corpus.

    Returns:
        Global NameRecognizer instance
    """
    global _recognizer
    if _recognizer is None:
        _recognizer = NameRecognizer()
    return _recognizer


def reset_recognizer() -> None:
    """Reset the shared recognizer (primarily for testing)."""
    global _recognizer
    _recognizer = None


def is_likely_proper_name(word: str) -> bool:
    """Default ProperNameCheck backed by the bundled corpus."""
    return get_recognizer().is_name(word)
