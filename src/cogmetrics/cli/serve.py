"""``cogmetrics serve`` — run the HTTP metrics service."""

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from ..server.app import create_app
from . import app
from ._common import configure, console


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind to"),
    port: Optional[int] = typer.Option(None, help="Port to listen on"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    workers: Optional[int] = typer.Option(None, "-w", "--workers", help="Parallel workers per archive"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Start the HTTP service for file, archive and inline code analysis."""
    settings = configure(config=config, workers=workers, verbose=verbose, host=host, port=port)

    url = f"http://{settings.host}:{settings.port}"
    console.print(f"[bold]cogmetrics[/bold] listening on [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level="info" if settings.verbosity == "verbose" else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
