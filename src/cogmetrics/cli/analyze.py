"""``cogmetrics analyze`` — measure a file, a directory or a zip archive."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..archive import analyze_archive, analyze_bundle, decode_source, read_directory
from ..config import AnalysisConfig
from ..exceptions import CogMetricsError
from ..logging_config import get_logger
from ..metrics import ArchiveSummary, ComplexityStats, analyze_files, summarize
from ..scanning import TreeSitterParser
from ..server.serializers import serialize_result, serialize_summary
from . import app
from ._common import configure, console

logger = get_logger(__name__)


def run_analysis(path: Path, config: AnalysisConfig) -> ArchiveSummary:
    """Analyze *path* as a directory, a ``.zip`` archive or a single file."""
    parser = TreeSitterParser()
    if path.is_dir():
        return analyze_bundle(read_directory(path, config), config, parser)
    if path.suffix.lower() == ".zip":
        return analyze_archive(path.read_bytes(), config, parser)
    source = decode_source(path.read_bytes())
    return analyze_files([(path.name, source)], parser=parser)


def _complexity_style(score: int) -> str:
    if score >= 15:
        return "red"
    if score >= 8:
        return "yellow"
    return "green"


def _render_files(summary: ArchiveSummary) -> None:
    title = f"Files in {summary.root_folder}" if summary.root_folder else "Files"
    table = Table(title=title, show_lines=False, pad_edge=True)
    table.add_column("File", style="cyan", no_wrap=False)
    table.add_column("LOC", justify="right")
    table.add_column("NLOC", justify="right")
    table.add_column("Functions", justify="right")
    table.add_column("Max CC", justify="right")

    for result in summary.results:
        if result.metrics is None:
            table.add_row(result.file_name, "[red]error[/red]", "", "", "")
            continue
        m = result.metrics
        style = _complexity_style(m.max_complexity)
        table.add_row(
            result.file_name,
            str(m.total_lines),
            str(m.non_blank_lines),
            str(m.function_count),
            f"[{style}]{m.max_complexity}[/{style}]",
        )
    console.print(table)


def _render_hotspots(stats: ComplexityStats) -> None:
    if not stats.hotspots:
        return
    table = Table(title="Most complex functions", show_lines=False, pad_edge=True)
    table.add_column("Function", style="bold")
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("CC", justify="right")

    for spot in stats.hotspots:
        style = _complexity_style(spot.cognitive_complexity)
        table.add_row(
            spot.name,
            spot.file_name,
            str(spot.start_line) if spot.start_line is not None else "",
            f"[{style}]{spot.cognitive_complexity}[/{style}]",
        )
    console.print(table)


def _render_stats(stats: ComplexityStats) -> None:
    console.print(
        f"[bold]{stats.file_count}[/bold] file(s), "
        f"[bold]{stats.function_count}[/bold] function(s), "
        f"{stats.total_lines} LOC / {stats.non_blank_lines} NLOC"
    )
    if stats.function_count:
        console.print(
            f"Complexity  mean {stats.mean:.2f}  median {stats.median:.1f}  "
            f"p90 {stats.p90:.1f}  max {stats.max}"
        )
    if stats.failed_count:
        console.print(f"[yellow]{stats.failed_count} file(s) failed to parse[/yellow]")


def _render_failures(summary: ArchiveSummary) -> None:
    for result in summary.failed_files:
        console.print(f"[red]Error:[/red] {result.file_name}: {result.error}")


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        exists=True,
        resolve_path=True,
        help="Source file, directory or .zip archive to analyze",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    top: int = typer.Option(10, "--top", min=0, help="Number of most complex functions to list"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    workers: Optional[int] = typer.Option(None, "-w", "--workers", help="Parallel workers"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Measure cognitive complexity of a file, directory or zip archive."""
    settings = configure(config=config, workers=workers, verbose=verbose)

    try:
        summary = run_analysis(path, settings)

    except CogMetricsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    single_file = not path.is_dir() and path.suffix.lower() != ".zip"

    if json_output:
        if single_file:
            payload = serialize_result(summary.results[0])
        else:
            payload = serialize_summary(summary)
        typer.echo(json.dumps(payload, indent=2))
    else:
        stats = summarize(summary, top=top)
        _render_files(summary)
        _render_hotspots(stats)
        _render_stats(stats)
        _render_failures(summary)

    if single_file and summary.failed_files:
        raise typer.Exit(1)
