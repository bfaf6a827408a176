from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence

import pandas as pd

from movie_monday_insights.models import AggregateStat, WeeklyRecord
from movie_monday_insights.rates import rate_defined_mask, win_rate

ChartMetric = Literal["total", "wins", "losses"]

ENTITY_FRAME_COLUMNS = [
    "entity_type",
    "entity_key",
    "name",
    "record_index",
    "selection_index",
    "is_winner",
]
PERSON_ENTITY_TYPES = frozenset({"actor", "director"})
STAT_FRAME_COLUMNS = ["name", "entity_id", "total_count", "win_count", "loss_count", "win_rate"]
CHART_METRIC_ATTRIBUTES = {"total": "total_count", "wins": "win_count", "losses": "loss_count"}


@dataclass(frozen=True)
class FrequencyTables:
    genres: list[AggregateStat]
    directors: list[AggregateStat]
    actors: list[AggregateStat]
    cocktails: list[AggregateStat]
    meals: list[AggregateStat]
    desserts: list[AggregateStat]

    def as_dict(self) -> dict[str, list[AggregateStat]]:
        return {
            "genres": self.genres,
            "directors": self.directors,
            "actors": self.actors,
            "cocktails": self.cocktails,
            "meals": self.meals,
            "desserts": self.desserts,
        }


@dataclass(frozen=True)
class WinRateStat:
    name: str
    entity_id: str | None
    win_rate: float
    total_count: int
    win_count: int


def build_entity_frame(records: Sequence[WeeklyRecord]) -> pd.DataFrame:
    """One row per (entity, movie) for people and genres, per (item, week) for food and drink."""
    rows: list[dict[str, Any]] = []
    for record_index, record in enumerate(records):
        for selection_index, selection in enumerate(record.selections):
            entities: dict[tuple[str, str, str], None] = {}
            for genre in selection.genres:
                entities[("genre", genre, genre)] = None
            for actor in selection.cast:
                entities[("actor", actor.identity, actor.name)] = None
            for director in selection.directors:
                entities[("director", director.identity, director.name)] = None
            for entity_type, entity_key, name in entities:
                rows.append(
                    {
                        "entity_type": entity_type,
                        "entity_key": entity_key,
                        "name": name,
                        "record_index": record_index,
                        "selection_index": selection_index,
                        "is_winner": selection.is_winner,
                    }
                )

        has_winner = record.winner is not None
        for entity_type, items in (
            ("cocktail", record.cocktails),
            ("meal", record.meals),
            ("dessert", record.desserts),
        ):
            for item in dict.fromkeys(raw.strip() for raw in items if raw.strip()):
                rows.append(
                    {
                        "entity_type": entity_type,
                        "entity_key": item,
                        "name": item,
                        "record_index": record_index,
                        "selection_index": -1,
                        "is_winner": has_winner,
                    }
                )
    return pd.DataFrame(rows, columns=ENTITY_FRAME_COLUMNS)


def summarize_entities(frame: pd.DataFrame, entity_type: str) -> list[AggregateStat]:
    subset = frame[frame["entity_type"] == entity_type]
    if subset.empty:
        return []

    grouped = (
        subset.groupby(["entity_key", "name"], dropna=True, sort=False)
        .agg(
            total_count=("is_winner", "size"),
            win_count=("is_winner", lambda s: int(s.astype(bool).sum())),
        )
        .reset_index()
        .sort_values(
            ["total_count", "name", "entity_key"],
            ascending=[False, True, True],
            kind="mergesort",
        )
    )
    is_person = entity_type in PERSON_ENTITY_TYPES
    return [
        AggregateStat(
            name=str(row["name"]),
            total_count=int(row["total_count"]),
            win_count=int(row["win_count"]),
            entity_id=str(row["entity_key"]) if is_person else None,
        )
        for row in grouped.to_dict("records")
    ]


def aggregate(records: Sequence[WeeklyRecord]) -> FrequencyTables:
    frame = build_entity_frame(records)
    return FrequencyTables(
        genres=summarize_entities(frame, "genre"),
        directors=summarize_entities(frame, "director"),
        actors=summarize_entities(frame, "actor"),
        cocktails=summarize_entities(frame, "cocktail"),
        meals=summarize_entities(frame, "meal"),
        desserts=summarize_entities(frame, "dessert"),
    )


def stats_to_frame(stats: Sequence[AggregateStat]) -> pd.DataFrame:
    if not stats:
        return pd.DataFrame(columns=STAT_FRAME_COLUMNS)
    frame = pd.DataFrame(
        {
            "name": [stat.name for stat in stats],
            "entity_id": [stat.entity_id for stat in stats],
            "total_count": [stat.total_count for stat in stats],
            "win_count": [stat.win_count for stat in stats],
        }
    )
    frame["loss_count"] = frame["total_count"] - frame["win_count"]
    frame["win_rate"] = win_rate(wins=frame["win_count"], totals=frame["total_count"])
    return frame[STAT_FRAME_COLUMNS]


def _frame_to_stats(frame: pd.DataFrame) -> list[AggregateStat]:
    return [
        AggregateStat(
            name=str(row["name"]),
            total_count=int(row["total_count"]),
            win_count=int(row["win_count"]),
            entity_id=None if pd.isna(row["entity_id"]) else str(row["entity_id"]),
        )
        for row in frame.to_dict("records")
    ]


def _ranked_by(
    stats: Sequence[AggregateStat],
    column: str,
    limit: int | None,
) -> list[AggregateStat]:
    frame = stats_to_frame(stats)
    if frame.empty:
        return []
    frame = frame[frame[column] > 0]
    frame = frame.assign(_entity_id=frame["entity_id"].fillna("").astype(str)).sort_values(
        [column, "name", "_entity_id"],
        ascending=[False, True, True],
        kind="mergesort",
    )
    if limit is not None:
        frame = frame.head(limit)
    return _frame_to_stats(frame)


def top_winning(stats: Sequence[AggregateStat], limit: int | None = None) -> list[AggregateStat]:
    return _ranked_by(stats, "win_count", limit)


def top_losing(stats: Sequence[AggregateStat], limit: int | None = None) -> list[AggregateStat]:
    """Entities most often proposed without winning, by ``total_count - win_count``."""
    return _ranked_by(stats, "loss_count", limit)


def win_rates(stats: Sequence[AggregateStat]) -> list[WinRateStat]:
    frame = stats_to_frame(stats)
    if frame.empty:
        return []
    frame = frame[rate_defined_mask(frame["total_count"])]
    frame = frame.sort_values(
        ["win_rate", "total_count", "name"],
        ascending=[False, False, True],
        kind="mergesort",
    )
    return [
        WinRateStat(
            name=str(row["name"]),
            entity_id=None if pd.isna(row["entity_id"]) else str(row["entity_id"]),
            win_rate=float(row["win_rate"]),
            total_count=int(row["total_count"]),
            win_count=int(row["win_count"]),
        )
        for row in frame.to_dict("records")
    ]


def to_chart_rows(
    stats: Sequence[AggregateStat],
    metric: ChartMetric = "total",
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Format stats as ``{"name", "value"}`` rows for pie/bar charts."""
    if metric == "total":
        ranked = list(stats)
    elif metric == "wins":
        ranked = top_winning(stats)
    elif metric == "losses":
        ranked = top_losing(stats)
    else:
        raise ValueError(f"Unsupported chart metric: {metric!r}")

    value_attr = CHART_METRIC_ATTRIBUTES[metric]
    if limit is not None:
        ranked = ranked[:limit]
    return [{"name": stat.name, "value": getattr(stat, value_attr)} for stat in ranked]
