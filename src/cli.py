"""CLI interface for the AI model leaderboard."""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from src.consts import (
    COMPOSITE_DIMENSION,
    DEFAULT_DATA_DIR,
    DEFAULT_DIMENSIONS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_SCHEDULE_INTERVAL_SECONDS,
)
from src.models.model_leaderboard import RankedModel, ScrapeStatus
from src.ranking import Leaderboard
from src.scheduler import ScraperScheduler, create_default_scheduler
from src.scrapers import create_lmsys_scraper, create_official_scraper, create_openllm_scraper
from src.storage import FileModelStore

app = typer.Typer(
    name="mlb",
    help="Model Leaderboard - Scrape benchmark results and rank AI models",
)

console = Console()

# Sample sources, available by name but not part of a default run.
REFERENCE_SCRAPERS = {
    "lmsys": create_lmsys_scraper,
    "openllm": create_openllm_scraper,
    "official": create_official_scraper,
}

DATA_DIR_OPTION = typer.Option(None, "--data-dir", help="Data directory (default: ./data)")


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _get_store(data_dir: Path | None) -> FileModelStore:
    return FileModelStore(data_dir or DEFAULT_DATA_DIR)


def _build_scheduler(store: FileModelStore, source: str | None = None) -> ScraperScheduler:
    scheduler = create_default_scheduler(store)
    if source in REFERENCE_SCRAPERS:
        scheduler.register(REFERENCE_SCRAPERS[source]())
    return scheduler


def _get_score_color(score: float) -> str:
    """Get color for score display."""
    if score >= 90:
        return "green"
    elif score >= 80:
        return "yellow"
    else:
        return "red"


def _format_score(score: float | None) -> str:
    if score is None:
        return "[dim]-[/dim]"
    color = _get_score_color(score)
    return f"[{color}]{score:.1f}[/{color}]"


def _status_style(status: ScrapeStatus) -> str:
    return {
        ScrapeStatus.SUCCESS: "green",
        ScrapeStatus.PARTIAL: "yellow",
        ScrapeStatus.ERROR: "red",
    }[status]


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


@app.command()
def seed(data_dir: Path = DATA_DIR_OPTION) -> None:
    """Create or update the default evaluation dimensions."""
    store = _get_store(data_dir)

    for dimension in DEFAULT_DIMENSIONS:
        store.upsert_dimension(
            name=dimension["name"],
            display_name=dimension["display_name"],
            description=dimension["description"],
        )

    console.print(f"[green]Seeded {len(DEFAULT_DIMENSIONS)} dimensions into {store.path}[/green]")


@app.command()
def sources() -> None:
    """List available scraper sources."""
    table = Table(title="Scraper Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Default run", justify="center")

    for scraper in create_default_scheduler(store=_get_store(None)).scrapers:
        table.add_row(scraper.name, scraper.source, "[green]yes[/green]")
    for name, factory in REFERENCE_SCRAPERS.items():
        table.add_row(name, factory().source, "[dim]no[/dim]")

    console.print(table)


@app.command()
def scrape(
    source: str = typer.Option(None, "--source", "-s", help="Scraper name (default: all)"),
    data_dir: Path = DATA_DIR_OPTION,
) -> None:
    """Run scrapers now and persist their results."""
    _configure_logging()

    store = _get_store(data_dir)
    if not store.list_dimensions():
        console.print("[yellow]No dimensions found. Run 'mlb seed' first.[/yellow]")
        raise typer.Exit(1)

    scheduler = _build_scheduler(store, source)
    results = asyncio.run(scheduler.run_now(source))

    if not results:
        console.print(f"[red]Error:[/red] Unknown source '{source}'. See 'mlb sources'.")
        raise typer.Exit(1)

    table = Table(title="Scrape Results")
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Errors", style="dim")

    for result in results:
        style = _status_style(result.status)
        table.add_row(
            result.source,
            f"[{style}]{result.status.value}[/{style}]",
            str(result.records_processed),
            _truncate("; ".join(result.errors)) if result.errors else "",
        )

    console.print(table)

    if all(r.status == ScrapeStatus.ERROR for r in results):
        raise typer.Exit(1)


@app.command()
def history(
    limit: int = typer.Option(DEFAULT_HISTORY_LIMIT, "--limit", "-l", help="Number of entries"),
    data_dir: Path = DATA_DIR_OPTION,
) -> None:
    """Show the most recent scrape logs."""
    logs = _get_store(data_dir).list_scrape_logs(limit=limit)

    if not logs:
        console.print("[yellow]No scrape runs recorded yet.[/yellow]")
        return

    table = Table(title=f"Last {len(logs)} Scrape Runs")
    table.add_column("Ended", style="dim")
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Error")

    for log in logs:
        style = _status_style(log.status)
        duration = (log.ended_at - log.started_at).total_seconds()
        table.add_row(
            log.ended_at.strftime("%Y-%m-%d %H:%M:%S"),
            log.source,
            f"[{style}]{log.status.value}[/{style}]",
            f"{duration:.1f}s",
            _truncate(log.error or ""),
        )

    console.print(table)


@app.command()
def rank(
    dimension: str = typer.Option(
        COMPOSITE_DIMENSION,
        "--dimension",
        "-d",
        help="Dimension name, or 'composite' for the weighted overall score",
    ),
    limit: int = typer.Option(None, "--limit", "-l", help="Number of results"),
    data_dir: Path = DATA_DIR_OPTION,
) -> None:
    """Show the leaderboard for one dimension or the composite score."""
    leaderboard = Leaderboard(_get_store(data_dir))
    ranked: list[RankedModel] = leaderboard.rank(dimension, limit=limit)

    if not ranked:
        console.print("[yellow]No models found. Run 'mlb scrape' first.[/yellow]")
        return

    dimensions = leaderboard.dimensions()
    title = "Overall" if dimension.lower() == COMPOSITE_DIMENSION else dimension
    table = Table(title=f"Leaderboard: {title}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Model", style="cyan")
    table.add_column("Vendor")
    table.add_column("Open", justify="center")
    table.add_column("Score", justify="right")
    for d in dimensions:
        table.add_column(d.display_name, justify="right")

    for entry in ranked:
        table.add_row(
            str(entry.rank),
            entry.name,
            entry.vendor,
            "✓" if entry.open_source else "",
            _format_score(entry.dimension_score),
            *(_format_score(entry.scores.get(d.name)) for d in dimensions),
        )

    console.print(table)

    last = leaderboard.last_updated()
    if last is not None:
        console.print(
            f"[dim]Last updated {last.ended_at.strftime('%Y-%m-%d %H:%M:%S %Z')} "
            f"from {last.source}[/dim]"
        )


@app.command()
def schedule(
    interval: float = typer.Option(
        DEFAULT_SCHEDULE_INTERVAL_SECONDS,
        "--interval",
        "-i",
        help="Seconds between runs",
    ),
    data_dir: Path = DATA_DIR_OPTION,
) -> None:
    """Run all default scrapers on a fixed interval until interrupted."""
    _configure_logging()

    if interval <= 0:
        console.print("[red]Error:[/red] --interval must be positive")
        raise typer.Exit(1)

    store = _get_store(data_dir)
    scheduler = create_default_scheduler(store)

    async def run_forever() -> None:
        trigger = scheduler.start(interval)
        console.print(
            f"[bold]Scheduling {len(scheduler.scrapers)} sources every {interval:g}s. "
            f"Press Ctrl+C to stop.[/bold]"
        )
        try:
            await trigger.wait()
        finally:
            scheduler.stop()

    try:
        asyncio.run(run_forever())
    except KeyboardInterrupt:
        console.print("\n[yellow]Scheduler stopped.[/yellow]")


if __name__ == "__main__":
    app()
