"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import AnalysisConfig, load_config
from ..exceptions import CogMetricsError
from ..logging_config import setup_logging

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    **overrides,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    return load_config(config_file=config, **overrides)


def configure(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    **overrides,
) -> AnalysisConfig:
    """Resolve configuration and install logging, exiting with status 1 on bad config."""
    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, **overrides)
    except CogMetricsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity, settings.log_file)
    return settings
