"""Command line interface for NewsFinder."""

import json
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ....config import settings, setup_logging
from ....core.domain import QueryRequest, SearchResponse
from ....core.domain.exceptions import MalformedDocumentError
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="newsfinder",
    help="NewsFinder - typo-tolerant news search over Elasticsearch",
    add_completion=False,
)

console = Console(legacy_windows=False)

DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

TIER_STYLES = {"primary": "green", "secondary": "yellow", "local": "magenta", "none": "red"}


def handle_cli_error(exc: Exception) -> None:
    """Print an error with its code; full JSON details when DEBUG=true."""
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, ensure_ascii=False),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    location = error_data.get("location", {})
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")
    if location:
        console.print(
            f"[dim]Location: {location.get('file', '?')}:{location.get('line', '?')} "
            f"in {location.get('method', '?')}[/]"
        )
    console.print("[dim]Set DEBUG=true for full details[/]")


def get_service():
    """Build the search service from settings."""
    from ....composition.container import get_search_service

    setup_logging(level=settings.log_level, json_format=settings.log_json)
    return get_search_service()


def render_response(response: SearchResponse) -> None:
    """Print a search response as a Rich table plus suggestions."""
    tier = response.tier.value
    header = f"[bold]{response.total}[/] results for [cyan]{response.query}[/]"
    if response.corrected_query:
        header += f" (searched as [bold yellow]{response.corrected_query}[/])"
    header += f" via [{TIER_STYLES.get(tier, 'white')}]{tier}[/] in {response.took_ms:.0f}ms"
    console.print(header)

    if response.degraded:
        console.print(f"[yellow]Degraded: failed tiers {', '.join(response.failed_tiers)}[/]")

    if response.results:
        table = Table(show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Title", style="bold")
        table.add_column("Source")
        table.add_column("Category")
        table.add_column("Score", justify="right")
        table.add_column("Tier")
        for position, result in enumerate(response.results, 1):
            table.add_row(
                str(position),
                result.title,
                result.source,
                result.category,
                f"{result.score:.3f}",
                f"[{TIER_STYLES.get(result.tier.value, 'white')}]{result.tier.value}[/]",
            )
        console.print(table)

    if response.suggestions.spelling:
        console.print(f"[dim]Did you mean:[/] {', '.join(response.suggestions.spelling)}")
    if response.suggestions.autocomplete:
        console.print(f"[dim]Related:[/] {', '.join(response.suggestions.autocomplete)}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search text (typos are tolerated)"),
    category: str = typer.Option("all", help="Category filter"),
    size: int = typer.Option(20, min=1, max=100, help="Maximum number of results"),
    spell_check: bool = typer.Option(True, help="Request backend spelling suggestions"),
) -> None:
    """Search news articles."""
    try:
        service = get_service()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    with console.status("[bold green]Searching...[/]"):
        response = service.search(
            QueryRequest(text=query, category=category, size=size, spell_check=spell_check)
        )
    render_response(response)


@app.command("create-index")
def create_index() -> None:
    """Create the news index with its analyzers and mappings."""
    try:
        created = get_service().ensure_index()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if created:
        console.print(f"[green]Created index {settings.news_index}[/]")
    else:
        console.print(f"[dim]Index {settings.news_index} already exists[/]")


@app.command()
def ingest(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of articles"),
) -> None:
    """Index every article in a JSON file."""
    from ....composition.container import read_articles

    try:
        service = get_service()
        records = read_articles(file)
        service.ensure_index()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    indexed = failed = malformed = 0
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]Indexing"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("index", total=len(records))
        for record in records:
            try:
                if service.index_article(record):
                    indexed += 1
                else:
                    failed += 1
            except MalformedDocumentError as exc:
                malformed += 1
                console.print(f"[yellow]Skipped [{exc.error_code}]:[/] {exc.message}")
            progress.advance(task)

    console.print(
        f"\n[green]Indexed {indexed}[/] / {len(records)} articles "
        f"([yellow]{malformed} malformed[/], [red]{failed} failed[/])"
    )
    if failed:
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("newsfinder.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
