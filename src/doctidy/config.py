"""DocTidy configuration system.

Configuration is YAML-based with minimal CLI overrides (--encoding, --dry-run, --ci).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.doctidy/config.yaml
3. ./doctidy.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from doctidy.encoding import validate_encoding

DEFAULT_EXTENSIONS = [".java"]
DEFAULT_MAX_DEPTH = 63

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class ScanConfig:
    """File selection configuration.

    Attributes:
        extensions: File suffixes to process
        max_depth: Maximum directory depth below the starting path
        exclude: Glob patterns (matched against relative paths and names) to skip
    """

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    max_depth: int = DEFAULT_MAX_DEPTH
    exclude: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate scan configuration."""
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0 (got {self.max_depth})")
        if not self.extensions:
            raise ValueError("At least one file extension is required")
        self.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in self.extensions]


@dataclass
class EncodingConfig:
    """Character encoding configuration.

    Attributes:
        name: Codec used for every file; None means auto-detect per file
    """

    name: str | None = None

    def __post_init__(self) -> None:
        """Validate the codec name."""
        if self.name is not None:
            validate_encoding(self.name)


@dataclass
class NormalizeConfig:
    """Comment normalization configuration.

    Attributes:
        proper_nouns: Extra words that are never lowercased at the start of tag text
    """

    proper_nouns: list[str] = field(default_factory=list)


@dataclass
class CIConfig:
    """CI/CD-specific configuration.

    Attributes:
        json_output: Use JSON log output
        fail_on_change: Exit with error in dry-run mode when any file would change
    """

    json_output: bool = False
    fail_on_change: bool = False


@dataclass
class DocTidyConfig:
    """Top-level DocTidy configuration.

    Attributes:
        scan: File selection
        encoding: Character encoding handling
        normalize: Normalization extras
        ci: CI/CD settings
    """

    scan: ScanConfig = field(default_factory=ScanConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SOURCE_ENCODING} -> value of SOURCE_ENCODING

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.doctidy/config.yaml
    2. ./doctidy.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".doctidy" / "config.yaml",
        start_path / "doctidy.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _as_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list (got {type(value).__name__})")
    return [str(item) for item in value]


def load_config_from_dict(data: dict[str, Any]) -> DocTidyConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        DocTidyConfig instance

    Raises:
        ValueError: If a value is invalid
    """
    data = substitute_env_vars(data)

    config = DocTidyConfig()

    if "scan" in data:
        scan_data = data["scan"] or {}
        config.scan = ScanConfig(
            extensions=_as_list(scan_data.get("extensions"), "scan.extensions")
            or list(DEFAULT_EXTENSIONS),
            max_depth=int(scan_data.get("max_depth", DEFAULT_MAX_DEPTH)),
            exclude=_as_list(scan_data.get("exclude"), "scan.exclude"),
        )

    if "encoding" in data:
        encoding_data = data["encoding"]
        # Accept both "encoding: latin-1" and "encoding: {name: latin-1}"
        if isinstance(encoding_data, dict):
            encoding_data = encoding_data.get("name")
        config.encoding = EncodingConfig(name=encoding_data or None)

    if "normalize" in data:
        normalize_data = data["normalize"] or {}
        config.normalize = NormalizeConfig(
            proper_nouns=_as_list(normalize_data.get("proper_nouns"), "normalize.proper_nouns"),
        )

    if "ci" in data:
        ci_data = data["ci"] or {}
        config.ci = CIConfig(
            json_output=ci_data.get("json_output", False),
            fail_on_change=ci_data.get("fail_on_change", False),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> DocTidyConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        DocTidyConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {found_path}")
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = DocTidyConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# DocTidy Configuration

# File selection
scan:
  extensions: [".java"]
  max_depth: 63
  exclude: []            # e.g. ["generated/*", "*Test.java"]

# Character encoding: leave empty to auto-detect per file
encoding:
  name:

# Comment normalization
normalize:
  proper_nouns: []       # Words never lowercased at the start of tag text

# CI/CD settings
ci:
  json_output: false
  fail_on_change: false  # With --dry-run, exit 1 if any file would change
'''
