"""Command line interface for folderquery."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from folderquery.config import AppConfig
from folderquery.engine.searcher import FolderSearcher
from folderquery.errors import LoadError, QueryFormatError
from folderquery.web.app import app as web_app


console = Console()
app = typer.Typer(help="folderquery - boolean search over record folders without an index")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_searcher(root: Path | None) -> FolderSearcher:
    config = AppConfig(corpus_root=root if root is not None else AppConfig().corpus_root)
    resolved_root = config.resolve_corpus_root(Path.cwd())
    if not resolved_root.is_dir():
        console.print(f"[yellow]Corpus root not found: {resolved_root}[/yellow]")
    config.corpus_root = resolved_root
    return FolderSearcher.from_config(config)


@app.command()
def search(
    query: str = typer.Argument(..., help="Boolean query, e.g. 'pi_order_id_str:2023* AND status:OPEN'"),
    root: Path = typer.Option(None, "--root", help="Corpus root folder"),
    start: int = typer.Option(0, help="Row offset of the first result"),
    rows: int = typer.Option(AppConfig().default_rows, help="Maximum number of matches"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a query and print the matched attributes."""
    _setup_logging(verbose)
    searcher = _build_searcher(root)

    try:
        results = searcher.search(query, start, rows)
    except QueryFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except LoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    fields = list(results)
    for name in fields:
        table.add_column(name)

    height = max(len(values) for values in results.values())
    for index in range(height):
        table.add_row(
            *(results[name][index] if index < len(results[name]) else "" for name in fields)
        )

    console.print(table)


@app.command()
def count(
    query: str = typer.Argument(..., help="Boolean query"),
    root: Path = typer.Option(None, "--root", help="Corpus root folder"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Count the items matching a query."""
    _setup_logging(verbose)
    searcher = _build_searcher(root)
    try:
        total = searcher.count(query)
    except QueryFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except LoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Matches: {total}")


@app.command()
def folders(
    query: str = typer.Argument(..., help="Boolean query carrying an *_id_str clause"),
    root: Path = typer.Option(None, "--root", help="Corpus root folder"),
) -> None:
    """List the candidate folders a query would scan."""
    searcher = _build_searcher(root)
    try:
        candidates = searcher.scanner.candidates(query)
    except QueryFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not candidates:
        console.print("[yellow]No candidate folders.[/yellow]")
        return
    for folder in candidates:
        marker = "" if searcher.scanner.has_marker(folder) else " [dim](no marker)[/dim]"
        console.print(f"{folder}{marker}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Path = typer.Option(None, "--root", help="Corpus root folder"),
) -> None:
    """Start the HTTP query service."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(corpus_root=root if root is not None else AppConfig().corpus_root)
    resolved_root = config.resolve_corpus_root(Path.cwd())
    if not resolved_root.is_dir():
        console.print("[yellow]Warning: corpus root not found, searches will return nothing.[/yellow]")

    web_app.state.config = AppConfig(corpus_root=resolved_root)
    web_app.state.searcher = None
    console.print(f"Starting query service on http://{host}:{port} (corpus: {resolved_root})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
