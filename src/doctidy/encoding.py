"""Character encoding detection and text file I/O.

Detection order:
1. Byte-order mark (UTF-8, UTF-16LE, UTF-16BE)
2. Valid UTF-8 that contains a source keyword -> UTF-8
3. Any text containing a source keyword under ISO-8859-1 -> ISO-8859-1
4. UTF-8

Files are read and written with newline translation disabled so the
original line endings survive a round trip.
"""

import codecs
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 4096
DEFAULT_ENCODING = "utf-8"

BOM_CHAR = "\ufeff"

_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_SOURCE_KEYWORDS = re.compile(r"\b(?:package|import|class|interface|record|enum)\b")


def validate_encoding(name: str) -> str:
    """Return the canonical codec name for name.

    Raises:
        ValueError: If Python has no codec by that name
    """
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise ValueError(f"Invalid encoding: {name}") from e


def detect_encoding_from_bytes(data: bytes) -> str:
    """Detect the encoding of a leading sample of a source file.

    Args:
        data: Up to the first few kilobytes of the file

    Returns:
        Codec name suitable for open()
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding

    if not data:
        return DEFAULT_ENCODING

    # The sample may end inside a multi-byte sequence
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        sample = decoder.decode(data, final=False)
    except UnicodeDecodeError:
        sample = None

    if sample is not None and _SOURCE_KEYWORDS.search(sample):
        return "utf-8"

    if _SOURCE_KEYWORDS.search(data.decode("iso-8859-1")):
        return "iso-8859-1"

    return DEFAULT_ENCODING


def detect_encoding(path: Path) -> str:
    """Detect the encoding of a source file.

    Args:
        path: File to inspect

    Returns:
        Codec name suitable for open()

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, "rb") as f:
        data = f.read(SAMPLE_SIZE)
    encoding = detect_encoding_from_bytes(data)
    logger.debug("Detected encoding %s for %s", encoding, path)
    return encoding


def read_source(path: Path, encoding: str) -> str:
    """Read a whole file without translating line endings."""
    with open(path, encoding=encoding, newline="") as f:
        return f.read()


def write_source(path: Path, text: str, encoding: str) -> None:
    """Write a whole file without translating line endings."""
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
