"""
Boardgame Stats — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the collection export.
  4. Compute statistics (pure functions, no I/O).
  5. Render through ``reporting.formatters`` to stdout.

Install and run::

    pip install -e .
    boardgame-stats --help
    boardgame-stats validate-config
    boardgame-stats summary --year 2024
    boardgame-stats milestones --metric sessions
    boardgame-stats year-review --year 2024
    boardgame-stats cost --metric hours --year 2024
    boardgame-stats suggest --seed 7 --cost-club
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

from boardgame_stats.taxonomy.metric_taxonomy import CostClub, Metric

app = typer.Typer(
    name="boardgame-stats",
    help="Board game collection analytics — h-index, milestones, year in review.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from boardgame_stats.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from boardgame_stats.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _load_collection_or_exit(config, data_file: Optional[str]):
    """Load the collection export, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from boardgame_stats.ingestion.data_loader import load_collection

    path = Path(data_file) if data_file else Path(config.data.data_file)
    try:
        return load_collection(path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] JSON parse error in {path}: {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Data validation failed for {path}:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _setup(config_path: Optional[str], data_file: Optional[str]):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return config, _load_collection_or_exit(config, data_file)


_DATA_OPTION = typer.Option(None, "--data", "-d", help="Path to data.json (default: config.data.data_file).")
_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML config file.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Data file:        {config.data.data_file}")
    typer.echo(f"  Recent window:    {config.recommendations.recent_days} days")
    typer.echo(f"  Suggest seed:     {config.recommendations.seed}")
    typer.echo(f"  Cost club hints:  {config.recommendations.cost_club}")
    typer.echo(f"  Top games shown:  {config.report.top_games_limit}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}  (forces DEBUG logging)")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("summary")
def summary(
    data_file: Optional[str] = _DATA_OPTION,
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Restrict to one calendar year."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Collection and play totals with the three h-indices."""
    from boardgame_stats.reporting.formatters import format_summary
    from boardgame_stats.stats import collection as coll
    from boardgame_stats.stats import plays as play_stats
    from boardgame_stats.stats.h_index import h_index_for_metric
    from boardgame_stats.stats.metrics import known_plays
    from boardgame_stats.taxonomy.metric_taxonomy import METRIC_ORDER

    config, collection = _setup(config_path, data_file)
    games = collection.games
    plays = known_plays(games, collection.plays)

    typer.echo(
        format_summary(
            year=year,
            bgg_entries=coll.total_bgg_entries(games, year),
            games_owned=coll.total_games_owned(games, year),
            expansions=coll.total_expansions(games, year),
            total_plays=play_stats.total_plays(plays, year),
            days_played=play_stats.total_days_played(plays, year),
            games_played=play_stats.games_played_summary(games, plays, year),
            play_time=play_stats.total_play_time(plays, year),
            daily=play_stats.daily_session_stats(plays, year),
            h_indices={m: h_index_for_metric(games, plays, year, m) for m in METRIC_ORDER},
        )
    )


@app.command("milestones")
def milestones(
    data_file: Optional[str] = _DATA_OPTION,
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Restrict to one calendar year."),
    metric: Metric = typer.Option(Metric.PLAYS, "--metric", "-m", help="hours, sessions or plays."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Games per milestone band (fives, dimes, quarters, centuries)."""
    from boardgame_stats.reporting.formatters import format_milestones
    from boardgame_stats.reporting.snapshot import StatsSnapshotCache

    config, collection = _setup(config_path, data_file)
    cache = StatsSnapshotCache(collection)
    typer.echo(format_milestones(cache.get(year, metric)))


@app.command("year-review")
def year_review(
    year: int = typer.Option(..., "--year", "-y", help="Calendar year to review."),
    data_file: Optional[str] = _DATA_OPTION,
    metric: Metric = typer.Option(Metric.HOURS, "--metric", "-m", help="hours, sessions or plays."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Year-over-year h-index and milestone changes, calendar and achievements."""
    from boardgame_stats.reporting.formatters import format_year_review
    from boardgame_stats.reporting.snapshot import StatsSnapshotCache
    from boardgame_stats.stats import plays as play_stats
    from boardgame_stats.stats.achievements import logging_achievements
    from boardgame_stats.stats.activity import analyze_activity
    from boardgame_stats.stats.metrics import index_games, known_plays

    config, collection = _setup(config_path, data_file)
    games = collection.games
    plays = known_plays(games, collection.plays)

    if not any(p.year == year for p in plays):
        typer.echo(f"[WARN] No plays logged in {year}.", err=True)

    cache = StatsSnapshotCache(collection)
    typer.echo(
        format_year_review(
            snapshot=cache.get(year, metric),
            activity=analyze_activity(plays, year),
            achievements=logging_achievements(plays, year),
            top_games=play_stats.top_games_by_metric(
                games, plays, year, metric, config.report.top_games_limit
            ),
            new_to_me=play_stats.top_new_to_me_game(games, plays, year, metric),
            returning=play_stats.top_returning_game(games, plays, year, metric),
            longest_plays=play_stats.longest_single_plays(
                games, plays, year, config.report.longest_plays_limit
            ),
            games_by_id=index_games(games),
        )
    )


@app.command("cost")
def cost(
    data_file: Optional[str] = _DATA_OPTION,
    year: Optional[int] = typer.Option(None, "--year", "-y", help="As of the end of this year."),
    metric: Metric = typer.Option(Metric.HOURS, "--metric", "-m", help="hours, sessions or plays."),
    club: CostClub = typer.Option(
        CostClub.FIVE_DOLLAR, "--club", help="Club to list the closest candidates for."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Money spent, cost per hour / session / play, and cost-club standings."""
    from boardgame_stats.reporting.formatters import format_cost_report
    from boardgame_stats.stats import cost as cost_stats
    from boardgame_stats.stats.metrics import known_plays
    from boardgame_stats.taxonomy.metric_taxonomy import COST_CLUB_ORDER

    config, collection = _setup(config_path, data_file)
    games = collection.games
    plays = known_plays(games, collection.plays)

    increases = new_games = skipped = None
    if year is not None:
        increases = {c: cost_stats.value_club_increase(games, plays, year, metric, c) for c in COST_CLUB_ORDER}
        new_games = {c: cost_stats.new_value_club_games(games, plays, year, metric, c) for c in COST_CLUB_ORDER}
        skipped = {c: cost_stats.skipped_value_club_count(games, plays, year, metric, c) for c in COST_CLUB_ORDER}

    typer.echo(
        format_cost_report(
            year=year,
            metric=metric,
            totals=cost_stats.total_cost(games, year),
            per_metric=cost_stats.cost_per_metric_stats(games, plays, year, metric),
            clubs={c: cost_stats.value_club_games(games, plays, year, metric, c) for c in COST_CLUB_ORDER},
            target_club=club,
            approaching=cost_stats.games_approaching_cost_club(
                games, plays, year, metric, club, config.report.top_games_limit
            ),
            unplayed=cost_stats.unplayed_cost(games, plays, year),
            club_increases=increases,
            new_club_games=new_games,
            skipped_clubs=skipped,
        )
    )


@app.command("suggest")
def suggest(
    data_file: Optional[str] = _DATA_OPTION,
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for reproducible picks (default: config.recommendations.seed)."
    ),
    cost_club: Optional[bool] = typer.Option(
        None,
        "--cost-club/--no-cost-club",
        help="Also suggest games closest to the $5 cost club (default: config.recommendations.cost_club).",
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Suggest owned base games to play next."""
    from boardgame_stats.recommendations.engine import suggest_games
    from boardgame_stats.reporting.formatters import format_recommendations

    config, collection = _setup(config_path, data_file)
    rng = random.Random(seed if seed is not None else config.recommendations.seed)

    recs = suggest_games(
        collection.games,
        collection.plays,
        rng,
        recent_days=config.recommendations.recent_days,
        cost_club=cost_club if cost_club is not None else config.recommendations.cost_club,
    )
    typer.echo(format_recommendations(recs))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
