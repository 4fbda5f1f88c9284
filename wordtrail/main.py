"""
Command-line entry point for WordTrail
"""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from wordtrail import __version__
from wordtrail.analysis import AccuracyReport, CountRecord
from wordtrail.analysis.models import COUNT_FIELDS
from wordtrail.config import get_settings
from wordtrail.exceptions import ConfigurationError, PersistenceError
from wordtrail.sources import FileContentSource
from wordtrail.stats import DailyStats, StatsSummary
from wordtrail.tracker import WritingTracker
from wordtrail.utils import get_logger, setup_logging

app = typer.Typer(
    help="wordtrail: daily writing statistics for markdown notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

CATEGORY_LABELS = {
    "script_a": "CJK characters",
    "script_b": "Latin letters",
    "punctuation": "Punctuation",
    "digits": "Digits",
    "whitespace": "Whitespace",
    "words": "Words",
}


def _build_tracker() -> WritingTracker:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(2) from e

    setup_logging(settings)
    get_logger("main").debug("Starting WordTrail", version=__version__)
    return WritingTracker(settings=settings, content_source=FileContentSource())


T = TypeVar("T")


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro``, exiting with status 1 when stored statistics are unusable."""
    try:
        return asyncio.run(coro)
    except PersistenceError as e:
        typer.secho(f"Statistics unavailable: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.secho(f"Cannot read {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _counts_table(title: str, record: CountRecord | DailyStats, total: int) -> Table:
    table = Table(title=title)
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for name in COUNT_FIELDS:
        table.add_row(CATEGORY_LABELS[name], str(getattr(record, name)))
    table.add_row("[bold]Total[/bold]", f"[bold]{total}[/bold]")
    return table


def _comparison_table(report: AccuracyReport) -> Table:
    table = Table(title="Count comparison")
    table.add_column("Category")
    table.add_column("Tracked", justify="right")
    table.add_column("Naive (raw text)", justify="right")
    for name in COUNT_FIELDS:
        table.add_row(
            CATEGORY_LABELS[name],
            str(getattr(report.tracked, name)),
            str(getattr(report.naive, name)),
        )
    table.add_row("Total", str(report.tracked_total), str(report.naive_total))
    table.add_row("Simple word count", str(report.simple_word_count), "")
    table.add_row("Length", str(report.stripped_length), str(report.raw_length))
    return table


def _render_summary(summary: StatsSummary) -> None:
    streak = summary.streak
    console.print(
        f"Streak: [bold]{streak.current}[/bold] day(s), longest {streak.longest}"
    )
    today_total = summary.today.total if summary.today else 0
    console.print(
        f"Today: {today_total} / {summary.daily_goal} ({summary.goal_progress}%)"
    )
    console.print(
        f"Characters: {summary.characters_without_whitespace} without whitespace, "
        f"{summary.characters_with_whitespace} with whitespace"
    )

    if summary.category_shares:
        shares = Table(title="Today's share")
        shares.add_column("Category")
        shares.add_column("Share", justify="right")
        for name, share in summary.category_shares.items():
            shares.add_row(CATEGORY_LABELS[name], f"{share}%")
        console.print(shares)

    calendar = Table(title=f"Last {len(summary.calendar)} days")
    calendar.add_column("Date")
    calendar.add_column("Total", justify="right")
    calendar.add_column("Written")
    for day in summary.calendar:
        if day.total or day.completed:
            calendar.add_row(day.date, str(day.total), "yes" if day.completed else "")
    console.print(calendar)

    console.print(
        f"Active days: {summary.active_days}, total {summary.period_total}, "
        f"average {summary.average_per_active_day} per active day"
    )
    if summary.best_day:
        console.print(f"Best day: {summary.best_day.date} ({summary.best_day.total})")


@app.command()
def analyze(
    path: Annotated[Path, typer.Argument(help="Markdown file to analyse.")],
    compare: Annotated[
        bool, typer.Option("--compare", help="Also show naive counts over the raw text.")
    ] = False,
):
    """[bold]Analyse[/bold] a document without recording anything."""
    tracker = _build_tracker()
    raw_text = _read_file(path)

    record = tracker.analyze_text(raw_text)
    console.print(_counts_table(str(path), record, tracker.analyzer.total(record)))

    if compare:
        console.print(_comparison_table(tracker.compare_counts(raw_text)))


@app.command()
def record(
    path: Annotated[Path, typer.Argument(help="Markdown file to record for today.")],
):
    """[bold green]Record[/bold green] a document into today's statistics."""
    tracker = _build_tracker()

    async def run():
        try:
            return await tracker.process(str(path))
        finally:
            await tracker.close()

    outcome = _run(run())
    if not outcome.success:
        typer.secho(f"Not recorded: {outcome.reason}", fg="red", err=True)
        raise typer.Exit(1)

    stats = outcome.stats
    if stats is not None:
        console.print(_counts_table(f"{stats.date} ({path.name})", stats, stats.total))
        console.print(f"Changes today: {len(stats.char_changes)}")


@app.command()
def summary(
    days: Annotated[
        int, typer.Option("--days", min=1, max=365, help="Calendar days to show.")
    ] = 30,
):
    """Show the streak, today's progress and recent days."""
    tracker = _build_tracker()
    _render_summary(_run(tracker.summary(days=days)))


@app.command()
def reset(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Confirm deleting all statistics.")
    ] = False,
):
    """[bold red]Delete[/bold red] every day record and the streak."""
    if not yes:
        typer.secho("Refusing to reset without --yes.", fg="yellow")
        raise typer.Exit(2)

    tracker = _build_tracker()
    _run(tracker.reset_all())
    console.print("All statistics reset.")


@app.command()
def version():
    """Print the installed version."""
    console.print(__version__)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
