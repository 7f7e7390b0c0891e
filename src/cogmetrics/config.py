"""Configuration loading and management for cogmetrics.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.cogmetrics.toml)
    3. Project config (./cogmetrics.toml)
    4. Explicit config file
    5. Environment variables (COGMETRICS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import CogMetricsError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COGMETRICS_"

VERBOSITY_CHOICES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis and the HTTP service.

    Attributes:
        File selection:
            source_extensions: File suffixes analyzed in archives and directories
            ignored_dirs: Directory names pruned from traversal
            ignored_dir_prefixes: Directory name prefixes pruned from traversal

        Limits:
            max_archive_mb: Largest accepted archive upload (MB)
            max_files: Maximum number of source files per archive

        Performance:
            workers: Parallel workers for batch analysis (None = sequential)

        Service:
            host: Bind address for ``cogmetrics serve``
            port: Bind port for ``cogmetrics serve``
            cors_origins: Allowed CORS origins

        Output:
            verbosity: Logging verbosity level
            log_file: Optional file that also receives log records
    """

    # File selection
    source_extensions: list[str] = field(
        default_factory=lambda: [".js", ".jsx", ".ts", ".tsx"]
    )
    ignored_dirs: list[str] = field(default_factory=lambda: ["node_modules", "dist", "build"])
    ignored_dir_prefixes: list[str] = field(default_factory=lambda: [".git"])

    # Limits
    max_archive_mb: float = 50.0
    max_files: int = 10000

    # Performance
    workers: Optional[int] = None

    # Service
    host: str = "127.0.0.1"
    port: int = 3001
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Output
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for ext in self.source_extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("source_extensions", ext, "must start with '.'")

        if self.max_archive_mb <= 0:
            raise InvalidConfigError("max_archive_mb", self.max_archive_mb, "must be positive")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")

        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

        if not 0 < self.port < 65536:
            raise InvalidConfigError("port", self.port, "must be between 1 and 65535")

        if self.verbosity not in VERBOSITY_CHOICES:
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")

    @property
    def max_archive_bytes(self) -> int:
        """Get max archive size in bytes."""
        return int(self.max_archive_mb * 1024 * 1024)

    def is_source_file(self, name: str) -> bool:
        """True if *name* ends in one of the configured source extensions."""
        return name.endswith(tuple(self.source_extensions))

    def is_ignored_dir(self, name: str) -> bool:
        """True if a directory called *name* is pruned from traversal."""
        if name in self.ignored_dirs:
            return True
        return name.startswith(tuple(self.ignored_dir_prefixes))


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep file/env values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        InvalidConfigError: An unknown key or a value that fails validation
        CogMetricsError: A config file is missing or not valid TOML
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".cogmetrics.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise CogMetricsError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "cogmetrics.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise CogMetricsError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise CogMetricsError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise CogMetricsError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    for key in merged:
        if key not in AnalysisConfig.__dataclass_fields__:
            raise InvalidConfigError(key, merged[key], "unknown configuration key")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Wrong value types from TOML, e.g. a string where a number is expected
        raise CogMetricsError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COGMETRICS_* environment variables.

    Scalar fields only; list fields (extensions, ignore sets, CORS origins)
    are configured through TOML.

    Returns:
        Dict of field_name -> parsed_value for any COGMETRICS_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the field type is not env-configurable

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Both a flat layout and a ``[cogmetrics]`` table are accepted.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("cogmetrics")
    if isinstance(section, dict):
        return section
    return data
