"""Entry point for running DocTidy as a module.

Usage:
    python -m doctidy [command] [options]

Example:
    python -m doctidy fix src/main/java
    python -m doctidy fix --dry-run Foo.java
"""

from doctidy.cli import app

if __name__ == "__main__":
    app()
