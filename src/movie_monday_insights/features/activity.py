from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import pandas as pd

from movie_monday_insights.features.aggregates import build_entity_frame
from movie_monday_insights.models import WeeklyRecord
from movie_monday_insights.rates import safe_ratio, win_rate

SELECTION_FRAME_COLUMNS = [
    "record_index",
    "record_id",
    "date",
    "picker_id",
    "picker_name",
    "movie_id",
    "title",
    "is_winner",
]


@dataclass(frozen=True)
class MovieOutcome:
    movie_id: str
    title: str
    selections: int
    wins: int

    @property
    def losses(self) -> int:
        return self.selections - self.wins


@dataclass(frozen=True)
class MonthlyActivity:
    month: str
    weeks: int
    movies: int
    winners: int


@dataclass(frozen=True)
class PickerStat:
    user_id: str
    name: str
    weeks: int
    selections: int
    wins: int

    @property
    def win_rate(self) -> float | None:
        return safe_ratio(self.wins, self.selections)


def build_selection_frame(records: Sequence[WeeklyRecord]) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for record_index, record in enumerate(records):
        for selection in record.selections:
            rows.append(
                {
                    "record_index": record_index,
                    "record_id": record.record_id,
                    "date": record.date,
                    "picker_id": record.picker.user_id if record.picker else None,
                    "picker_name": record.picker.username if record.picker else None,
                    "movie_id": selection.movie_id,
                    "title": selection.title,
                    "is_winner": selection.is_winner,
                }
            )
    return pd.DataFrame(rows, columns=SELECTION_FRAME_COLUMNS)


def movie_outcomes(records: Sequence[WeeklyRecord]) -> list[MovieOutcome]:
    """Selections and wins per movie id, most selected first."""
    frame = build_selection_frame(records)
    if frame.empty:
        return []
    grouped = (
        frame.groupby("movie_id", sort=False)
        .agg(
            title=("title", "first"),
            selections=("is_winner", "size"),
            wins=("is_winner", lambda s: int(s.astype(bool).sum())),
        )
        .reset_index()
        .sort_values(["selections", "title", "movie_id"], ascending=[False, True, True])
    )
    return [
        MovieOutcome(
            movie_id=str(row["movie_id"]),
            title=str(row["title"]),
            selections=int(row["selections"]),
            wins=int(row["wins"]),
        )
        for row in grouped.to_dict("records")
    ]


def most_wins(outcomes: Sequence[MovieOutcome]) -> list[MovieOutcome]:
    ranked = [outcome for outcome in outcomes if outcome.wins > 0]
    return sorted(ranked, key=lambda outcome: (-outcome.wins, outcome.title, outcome.movie_id))


def most_losses(outcomes: Sequence[MovieOutcome]) -> list[MovieOutcome]:
    ranked = [outcome for outcome in outcomes if outcome.losses > 0]
    return sorted(ranked, key=lambda outcome: (-outcome.losses, outcome.title, outcome.movie_id))


def monthly_activity(records: Sequence[WeeklyRecord]) -> list[MonthlyActivity]:
    rows = [
        {
            "month": record.date.strftime("%Y-%m"),
            "movies": len(record.selections),
            "winners": 1 if record.winner is not None else 0,
        }
        for record in records
        if record.date is not None
    ]
    if not rows:
        return []
    grouped = (
        pd.DataFrame(rows)
        .groupby("month")
        .agg(weeks=("movies", "size"), movies=("movies", "sum"), winners=("winners", "sum"))
        .reset_index()
        .sort_values("month")
    )
    return [
        MonthlyActivity(
            month=str(row["month"]),
            weeks=int(row["weeks"]),
            movies=int(row["movies"]),
            winners=int(row["winners"]),
        )
        for row in grouped.to_dict("records")
    ]


def picker_stats(records: Sequence[WeeklyRecord]) -> list[PickerStat]:
    """Weeks picked, movies proposed and winning proposals per picker, in first-seen order."""
    weeks: dict[str, int] = {}
    names: dict[str, str] = {}
    for record in records:
        if record.picker is None:
            continue
        weeks[record.picker.user_id] = weeks.get(record.picker.user_id, 0) + 1
        names.setdefault(record.picker.user_id, record.picker.username)
    if not weeks:
        return []

    frame = build_selection_frame(records).dropna(subset=["picker_id"])
    grouped = (
        frame.groupby("picker_id", sort=False)
        .agg(
            selections=("is_winner", "size"),
            wins=("is_winner", lambda s: int(s.astype(bool).sum())),
        )
        .to_dict("index")
    )
    return [
        PickerStat(
            user_id=user_id,
            name=names[user_id],
            weeks=week_count,
            selections=int(grouped.get(user_id, {}).get("selections", 0)),
            wins=int(grouped.get(user_id, {}).get("wins", 0)),
        )
        for user_id, week_count in weeks.items()
    ]


def most_successful_picker(stats: Sequence[PickerStat]) -> PickerStat | None:
    candidates = [stat for stat in stats if stat.selections > 0]
    if not candidates:
        return None
    rates = win_rate(
        wins=[stat.wins for stat in candidates],
        totals=[stat.selections for stat in candidates],
    )
    best_index = max(range(len(candidates)), key=lambda index: (rates[index], -index))
    return candidates[best_index]


def summarize_collection(records: Sequence[WeeklyRecord]) -> dict[str, int]:
    frame = build_entity_frame(records)
    summary = {"weeks": len(records), "movies": sum(len(r.selections) for r in records)}
    for entity_type, label in (
        ("genre", "genres"),
        ("actor", "actors"),
        ("director", "directors"),
        ("cocktail", "cocktails"),
        ("meal", "meals"),
        ("dessert", "desserts"),
    ):
        subset = frame[frame["entity_type"] == entity_type]
        summary[f"total_{label}"] = int(len(subset))
        summary[f"unique_{label}"] = int(subset["entity_key"].nunique())
    return summary
