from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from movie_monday_insights.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from movie_monday_insights.io.read import load_records
from movie_monday_insights.logging import configure_logging
from movie_monday_insights.models import WeeklyRecord
from movie_monday_insights.pipeline.dashboard import build_dashboard, export_dashboard
from movie_monday_insights.pipeline.week import build_week_insights, export_week_insights
from movie_monday_insights.query.drilldown import EntityType, build_drilldown

LOGGER = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is not None:
        return load_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig()


def _load_records(records: Path | None, cfg: AppConfig) -> list[WeeklyRecord]:
    records_path = records or (Path(cfg.input.records_path) if cfg.input.records_path else None)
    if records_path is None:
        raise typer.BadParameter(
            "Missing --records. Pass a weekly-records JSON file or set input.records_path "
            "(or MOVIE_MONDAY_RECORDS) in config."
        )
    try:
        return load_records(records_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command()
def dashboard(
    records: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    out: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Write dashboard JSON and frequency tables under this directory.",
    ),
) -> None:
    """Build chart data for every analytics tab."""
    configure_logging()
    cfg = _load_app_config(config)
    weekly_records = _load_records(records, cfg)
    if out is not None:
        summary_path = export_dashboard(weekly_records, out_dir=out, config=cfg)
        typer.echo(f"Dashboard written to: {summary_path}")
        return
    _echo_json(build_dashboard(weekly_records, cfg))


@app.command()
def drilldown(
    entity_type: EntityType = typer.Option(..., help="actor, director, genre, cocktail or meal."),
    name: str = typer.Option(..., help="Entity name, matched case-insensitively."),
    outcome: str = typer.Option("all", help="all, winning or losing."),
    records: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
) -> None:
    """List the movies behind one chart entry."""
    configure_logging()
    cfg = _load_app_config(config)
    weekly_records = _load_records(records, cfg)
    try:
        result = build_drilldown(entity_type, name, weekly_records, outcome=outcome)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(result.title)
    for movie in result.movies:
        marker = " (winner)" if movie.is_winner else ""
        typer.echo(f"- {movie.title}{marker}")


@app.command()
def insights(
    week_id: str = typer.Option(..., help="Weekly record id."),
    records: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    max_facts: int | None = typer.Option(None, min=0),
    out: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Also write the week's insights JSON under this directory.",
    ),
) -> None:
    """Connections and ranked facts for one week."""
    configure_logging()
    cfg = _load_app_config(config)
    weekly_records = _load_records(records, cfg)
    try:
        result = build_week_insights(week_id, weekly_records, cfg, max_facts=max_facts)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if out is not None:
        LOGGER.info("Week insights written to %s", export_week_insights(result, out))
    _echo_json(result.to_dict())


if __name__ == "__main__":
    app()
