"""DocTidy utility modules.

- logging: Logging with human/verbose/JSON modes
"""

from doctidy.utils.logging import configure_from_cli, get_logger, setup_logging

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
]
