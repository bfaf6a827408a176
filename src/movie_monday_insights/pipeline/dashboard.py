from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from movie_monday_insights.config import AppConfig
from movie_monday_insights.features.activity import (
    monthly_activity,
    most_losses,
    most_successful_picker,
    most_wins,
    movie_outcomes,
    picker_stats,
    summarize_collection,
)
from movie_monday_insights.features.aggregates import (
    aggregate,
    stats_to_frame,
    to_chart_rows,
    top_losing,
)
from movie_monday_insights.io.write import write_summary, write_tables
from movie_monday_insights.models import AggregateStat, WeeklyRecord
from movie_monday_insights.paths import build_output_paths

LOGGER = logging.getLogger(__name__)


def _stat_row(stat: AggregateStat | None, metric: str = "total_count") -> dict[str, Any] | None:
    if stat is None:
        return None
    return {"name": stat.name, "value": getattr(stat, metric)}


def build_dashboard(records: Sequence[WeeklyRecord], config: AppConfig) -> dict[str, Any]:
    """Chart payloads for every analytics tab, as ``{"name", "value"}`` rows."""
    top_n = config.aggregates.top_n
    overview_n = config.aggregates.overview_top_n
    tables = aggregate(records)
    outcomes = movie_outcomes(records)
    months = monthly_activity(records)
    pickers = picker_stats(records)
    best_picker = most_successful_picker(pickers)
    losing_actors = top_losing(tables.actors)

    dashboard: dict[str, Any] = {
        "summary": summarize_collection(records),
        "overview": {
            "genres": to_chart_rows(tables.genres, limit=overview_n),
            "actors": to_chart_rows(tables.actors, limit=overview_n),
            "monthly_movies": [
                {"name": month.month, "value": month.movies}
                for month in months[-config.aggregates.trend_months :]
            ],
            "rejected_movies": [
                {"name": outcome.title, "value": outcome.losses}
                for outcome in most_losses(outcomes)[:overview_n]
            ],
        },
        "genres": {
            "distribution": to_chart_rows(tables.genres),
            "wins": to_chart_rows(tables.genres, metric="wins"),
        },
        "actors": {
            "top": to_chart_rows(tables.actors, limit=top_n),
            "winning": to_chart_rows(tables.actors, metric="wins", limit=top_n),
            "losing": to_chart_rows(tables.actors, metric="losses", limit=top_n),
            "most_seen": _stat_row(tables.actors[0] if tables.actors else None),
            "most_rejected": _stat_row(
                losing_actors[0] if losing_actors else None, metric="loss_count"
            ),
        },
        "directors": {
            "top": to_chart_rows(tables.directors, limit=top_n),
            "winning": to_chart_rows(tables.directors, metric="wins", limit=top_n),
        },
        "movies": {
            "most_wins": [
                {"name": outcome.title, "value": outcome.wins, "selections": outcome.selections}
                for outcome in most_wins(outcomes)[:top_n]
            ],
            "most_losses": [
                {"name": outcome.title, "value": outcome.losses, "selections": outcome.selections}
                for outcome in most_losses(outcomes)[:top_n]
            ],
        },
        "pickers": {
            "stats": [
                {"name": picker.name, "value": picker.wins, "selections": picker.selections}
                for picker in pickers
            ],
            "most_successful": (
                {
                    "name": best_picker.name,
                    "wins": best_picker.wins,
                    "selections": best_picker.selections,
                }
                if best_picker is not None
                else None
            ),
        },
        "trends": {
            "weeks_by_month": [{"name": month.month, "value": month.weeks} for month in months],
            "movies_by_month": [{"name": month.month, "value": month.movies} for month in months],
        },
        "food": {
            "cocktails": to_chart_rows(tables.cocktails, limit=top_n),
            "meals": to_chart_rows(tables.meals, limit=top_n),
            "desserts": to_chart_rows(tables.desserts, limit=top_n),
        },
    }
    LOGGER.info(
        "Built dashboard for %d weeks (%d genres, %d actors, %d directors)",
        len(records),
        len(tables.genres),
        len(tables.actors),
        len(tables.directors),
    )
    return dashboard


def export_dashboard(
    records: Sequence[WeeklyRecord],
    out_dir: Path,
    config: AppConfig,
) -> Path:
    """Write the dashboard JSON plus one frequency table per entity kind."""
    paths = build_output_paths(out_dir)
    frames = {kind: stats_to_frame(stats) for kind, stats in aggregate(records).as_dict().items()}
    write_tables(frames, paths.tables, fmt=config.outputs.tables_format)
    return write_summary(
        build_dashboard(records, config),
        paths.summary / config.outputs.summary_filename,
    )
