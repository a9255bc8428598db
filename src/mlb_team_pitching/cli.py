"""Command-line interface for team schedule and pitcher reports."""

import json
import logging
from datetime import date

import typer
from rich.console import Console
from rich.json import JSON
from rich.logging import RichHandler
from rich.table import Table

from .ingestion.client import ScheduleClient, ScheduleFetchError
from .ingestion.config import load_config
from .pipeline.season import SeasonPipeline, SeasonReport
from .transform.games import GameResult

app = typer.Typer(
    name="mlb-pitching",
    help="MLB team schedule results and starting pitcher season stats",
    add_completion=False,
)
console = Console()

_RESULT_STYLES = {
    GameResult.WIN: "green",
    GameResult.LOSS: "red",
    GameResult.TIE: "yellow",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _parse_date(value: str, option: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{option} must be YYYY-MM-DD, got {value!r}")


def _run_report(config_path: str, start: str, end: str, team_id: int, verbose: bool) -> SeasonReport:
    """Load config, run the pipeline, and exit 1 on any failure."""
    _setup_logging(verbose)

    try:
        config = load_config(config_path or None)
        if team_id:
            team = config.team.model_copy(update={"team_id": team_id})
            config = config.model_copy(update={"team": team})

        start_date = _parse_date(start, "--start")
        end_date = _parse_date(end, "--end")

        with ScheduleClient(config.source) as client:
            return SeasonPipeline(client, config).run(start_date, end_date)

    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except ScheduleFetchError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _games_table(report: SeasonReport) -> Table:
    table = Table(title=f"Games ({report.start_date} to {report.end_date})")
    table.add_column("Date", style="cyan")
    table.add_column("", justify="center")
    table.add_column("Opp", style="magenta")
    table.add_column("Result")
    table.add_column("Score", justify="center")
    table.add_column("Pitcher", style="yellow")
    table.add_column("IP", justify="right")
    table.add_column("K", justify="right")
    table.add_column("BB", justify="right")
    table.add_column("ER", justify="right")

    for row in report.rows:
        display = row.to_display()
        style = _RESULT_STYLES[row.result]
        table.add_row(
            display["date"],
            display["location"],
            display["opponent"],
            f"[{style}]{display['result']}[/{style}]",
            display["score"],
            display["pitcher"],
            str(display["innings_pitched"]),
            str(display["strikeouts"]),
            str(display["base_on_balls"]),
            str(display["earned_runs"]),
        )

    return table


def _pitchers_table(report: SeasonReport) -> Table:
    table = Table(title="Starting Pitchers")
    table.add_column("Pitcher", style="cyan")
    table.add_column("GS", justify="right")
    table.add_column("IP", justify="right")
    table.add_column("ER", justify="right")
    table.add_column("K", justify="right")
    table.add_column("BB", justify="right")
    table.add_column("ERA", justify="right", style="green")
    table.add_column("K/9", justify="right")
    table.add_column("BB/9", justify="right")
    table.add_column("WHIP", justify="right", style="green")

    for pitcher in report.pitchers:
        table.add_row(
            pitcher.name,
            str(pitcher.games_started),
            f"{pitcher.innings_pitched:.1f}",
            str(pitcher.earned_runs),
            str(pitcher.strikeouts),
            str(pitcher.walks),
            pitcher.era,
            pitcher.k9,
            pitcher.bb9,
            pitcher.whip,
        )

    return table


@app.command()
def games(
    config: str = typer.Option("", "--config", "-c", help="Path to configuration YAML"),
    start: str = typer.Option("", "--start", help="First schedule date (YYYY-MM-DD)"),
    end: str = typer.Option("", "--end", help="Last schedule date (YYYY-MM-DD)"),
    team_id: int = typer.Option(0, "--team-id", help="Override tracked team ID"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show completed games with the starting pitcher's line."""
    report = _run_report(config, start, end, team_id, verbose)
    console.print(_games_table(report))


@app.command()
def pitchers(
    config: str = typer.Option("", "--config", "-c", help="Path to configuration YAML"),
    start: str = typer.Option("", "--start", help="First schedule date (YYYY-MM-DD)"),
    end: str = typer.Option("", "--end", help="Last schedule date (YYYY-MM-DD)"),
    team_id: int = typer.Option(0, "--team-id", help="Override tracked team ID"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show cumulative starting pitcher stats."""
    report = _run_report(config, start, end, team_id, verbose)
    console.print(_pitchers_table(report))


@app.command()
def report(
    config: str = typer.Option("", "--config", "-c", help="Path to configuration YAML"),
    start: str = typer.Option("", "--start", help="First schedule date (YYYY-MM-DD)"),
    end: str = typer.Option("", "--end", help="Last schedule date (YYYY-MM-DD)"),
    team_id: int = typer.Option(0, "--team-id", help="Override tracked team ID"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show games and pitcher stats together."""
    season_report = _run_report(config, start, end, team_id, verbose)

    if as_json:
        console.print(JSON(json.dumps(season_report.to_dict())))
        return

    console.print(_games_table(season_report))
    console.print(_pitchers_table(season_report))
    console.print(
        f"\n[green]✓ {len(season_report.rows)} final games "
        f"({season_report.games_fetched} fetched), "
        f"{len(season_report.pitchers)} starting pitchers[/green]"
    )


def main():
    app()


if __name__ == "__main__":
    main()
