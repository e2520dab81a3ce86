from __future__ import annotations

import json

import typer

from bgg_review.core.config import settings
from bgg_review.core.logging import configure_logging
from bgg_review.review.errors import BadRequest, NotFound, UpstreamError
from bgg_review.review.service import compute_year_in_review, normalize_username
from bgg_review.review.summary import YearSummary

app = typer.Typer(no_args_is_help=True, help="BoardGameGeek year-in-review summaries.")

EXIT_BAD_REQUEST = 2
EXIT_NOT_FOUND = 3
EXIT_UPSTREAM = 4


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level (e.g. INFO, DEBUG)."),
    log_json: bool = typer.Option(settings.log_json, "--log-json/--no-log-json", help="Emit logs as JSON."),
) -> None:
    configure_logging(log_level, json_output=log_json)


def _hours(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60:02d}m"


def _render(summary: YearSummary, *, username: str, year: int) -> list[str]:
    lines = [
        f"{username} in {year}:",
        f"  plays={summary.total_played} unique_games={summary.unique_played} days_played={summary.days_played}",
        f"  time_played={_hours(summary.total_time_played)}",
    ]

    if summary.longest_play_session:
        s = summary.longest_play_session
        lines.append(f"  longest_session={s.name} ({s.length_minutes}m on {s.date})")
    if summary.month_most_played:
        m = summary.month_most_played
        lines.append(f"  busiest_month={m.month} ({m.play_count} plays)")
    if summary.days_most_played:
        days = ", ".join(d.date for d in summary.days_most_played)
        lines.append(f"  busiest_days={days} ({summary.days_most_played[0].plays} plays)")

    lines.append("Most played (by count):")
    for e in summary.most_played_by_count:
        lines.append(f"  {e.play_count:>4}x {e.name}")
    lines.append("Most played (by time):")
    for e in summary.most_played_by_time:
        lines.append(f"  {_hours(e.total_minutes):>8} {e.name}")

    if summary.categories:
        lines.append("Top categories: " + ", ".join(f"{t.name} ({t.game_count})" for t in summary.categories))
    if summary.mechanics:
        lines.append("Top mechanics: " + ", ".join(f"{t.name} ({t.game_count})" for t in summary.mechanics))
    return lines


@app.command("year-in-review")
def year_in_review_cmd(
    username: str = typer.Option(..., "--username", help="BoardGameGeek username."),
    year: int = typer.Option(..., "--year", help="Calendar year (e.g. 2023)."),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """Fetch a user's plays for one year and print their year in review."""

    try:
        summary = compute_year_in_review(username, year)
    except BadRequest as e:
        typer.echo(f"Bad request: {e}", err=True)
        raise typer.Exit(EXIT_BAD_REQUEST) from e
    except NotFound as e:
        typer.echo(f"Not found: {e}", err=True)
        raise typer.Exit(EXIT_NOT_FOUND) from e
    except UpstreamError as e:
        status = e.status if e.status is not None else "n/a"
        typer.echo(f"BoardGameGeek request failed (status={status}): {e}", err=True)
        raise typer.Exit(EXIT_UPSTREAM) from e

    if as_json:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
        return

    for line in _render(summary, username=normalize_username(username), year=year):
        typer.echo(line)
