"""DocTidy CLI interface.

Commands:
- fix: Normalize documentation comments in a file or directory
- init: Initialize DocTidy configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from doctidy import __version__
from doctidy.config import DocTidyConfig, create_default_config, load_config
from doctidy.utils.logging import configure_from_cli, get_logger

# Create Typer app
app = typer.Typer(
    name="doctidy",
    help="Normalize Javadoc-style documentation comments",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: DocTidyConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"doctidy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """DocTidy - Javadoc-style documentation comment normalizer.

    Rewrites documentation comments to a canonical style and leaves
    everything else untouched.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if _config.ci.json_output and not ci:
        configure_from_cli(verbose=verbose, quiet=quiet, ci=True)


def _display_path(path: Path) -> str:
    """Path relative to the working directory when possible."""
    try:
        return os.path.relpath(path.resolve(), Path.cwd())
    except ValueError:
        return str(path)


# =============================================================================
# fix command
# =============================================================================


@app.command()
def fix(
    path: Annotated[
        Path,
        typer.Argument(
            help="Source file or directory to fix",
        ),
    ],
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "--dryrun",
            help="Show changed lines without writing files",
        ),
    ] = False,
    encoding: Annotated[
        str | None,
        typer.Option(
            "--encoding",
            "-e",
            help="Character encoding for all files (default: auto-detect)",
        ),
    ] = None,
) -> None:
    """Normalize documentation comments in a file or directory.

    Directories are walked recursively (symbolic links are skipped) and
    every file with a configured extension is fixed in place. A file is
    written only when its text changes.

    Exit codes:
        0: All files processed
        1: A file failed, the path or encoding is invalid, or (with
           ci.fail_on_change) a dry run found changes
    """
    from doctidy.encoding import validate_encoding
    from doctidy.pipeline import DocFixer

    if not path.exists():
        _logger.error(f"File or directory does not exist: {path}")
        raise typer.Exit(1)

    if encoding is not None:
        try:
            encoding = validate_encoding(encoding)
        except ValueError as e:
            _logger.error(str(e))
            raise typer.Exit(1)

    config = _config or DocTidyConfig()
    fixer = DocFixer(config=config)
    result = fixer.fix_path(path, dry_run=dry_run, encoding=encoding)

    for file_result in result.changed_files:
        shown = _display_path(file_result.path)
        if dry_run:
            typer.echo(shown)
            for line in file_result.changed_lines:
                typer.echo(line)
        else:
            _logger.structured(
                logging.INFO,
                f"Fixed: {shown}",
                path=shown,
                encoding=file_result.encoding,
            )

    for error in result.errors:
        _logger.structured(
            logging.ERROR,
            f"Failed to fix: {error.path}, {error.message}",
            **error.to_dict(),
        )

    changed = len(result.changed_files)
    verb = "would change" if dry_run else "changed"
    _logger.structured(
        logging.INFO,
        f"{len(result.files)} file(s) checked, {changed} {verb}",
        **result.to_dict(),
    )

    if not result.success:
        raise typer.Exit(1)
    if dry_run and changed and config.ci.fail_on_change:
        raise typer.Exit(1)
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize DocTidy configuration.

    Creates .doctidy/config.yaml with the default settings.
    """
    config_dir = Path(".doctidy")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")

    typer.echo("DocTidy configuration initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
