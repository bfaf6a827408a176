from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from movie_monday_insights.models import WeeklyRecord
from movie_monday_insights.rates import safe_ratio


@dataclass(frozen=True)
class Appearance:
    record_id: str
    date: date | None
    movie_id: str
    title: str
    is_winner: bool
    record_index: int = 0


@dataclass(frozen=True)
class Serving:
    """One week a meal, cocktail or dessert was served."""

    record_id: str
    date: date | None
    record_index: int = 0



def precedes(
    entry_date: date | None,
    entry_index: int,
    current_date: date | None,
    current_index: int,
) -> bool:
    """Earlier date first; same or missing dates fall back to collection order."""
    if entry_date is not None and current_date is not None and entry_date != current_date:
        return entry_date < current_date
    return entry_index < current_index


@dataclass(frozen=True)
class EntityHistory:
    entity_id: str
    name: str
    appearances: tuple[Appearance, ...]

    @property
    def total(self) -> int:
        return len(self.appearances)

    @property
    def wins(self) -> int:
        return sum(1 for appearance in self.appearances if appearance.is_winner)

    @property
    def win_rate(self) -> float | None:
        return safe_ratio(self.wins, self.total)

    @property
    def first_appearance(self) -> date | None:
        dates = [appearance.date for appearance in self.appearances if appearance.date]
        return min(dates) if dates else None

    def excluding(self, record_id: str) -> tuple[Appearance, ...]:
        return tuple(a for a in self.appearances if a.record_id != record_id)


@dataclass(frozen=True)
class PickerHistory:
    user_id: str
    name: str
    weeks: int
    selections: int
    wins: int
    top_genres: tuple[tuple[str, int], ...]

    @property
    def win_rate(self) -> float | None:
        return safe_ratio(self.wins, self.selections)

    @property
    def favorite_genre(self) -> tuple[str, int] | None:
        return self.top_genres[0] if self.top_genres else None


@dataclass(frozen=True)
class HistoricalStats:
    movies: dict[str, EntityHistory]
    actors: dict[str, EntityHistory]
    directors: dict[str, EntityHistory]
    pickers: dict[str, PickerHistory]
    meals: dict[str, tuple[Serving, ...]]
    cocktails: dict[str, tuple[Serving, ...]]
    desserts: dict[str, tuple[Serving, ...]]
    record_positions: dict[str, int] = field(default_factory=dict)

    @property
    def items_by_kind(self) -> dict[str, dict[str, tuple[Serving, ...]]]:
        return {"meal": self.meals, "cocktail": self.cocktails, "dessert": self.desserts}

    def position(self, record: WeeklyRecord) -> int:
        """Index of ``record`` in the collection; records outside it sort last."""
        return self.record_positions.get(record.record_id, len(self.record_positions))

    def prior_appearances(
        self,
        history: EntityHistory,
        current: WeeklyRecord,
    ) -> list[Appearance]:
        index = self.position(current)
        return [
            appearance
            for appearance in history.excluding(current.record_id)
            if precedes(appearance.date, appearance.record_index, current.date, index)
        ]

    def prior_servings(self, kind: str, item: str, current: WeeklyRecord) -> list[Serving]:
        index = self.position(current)
        return [
            serving
            for serving in self.items_by_kind[kind].get(item, ())
            if serving.record_id != current.record_id
            and precedes(serving.date, serving.record_index, current.date, index)
        ]


class _HistoryBuilder:
    def __init__(self) -> None:
        self.names: dict[str, str] = {}
        self.appearances: dict[str, list[Appearance]] = {}

    def add(self, key: str, name: str, appearance: Appearance) -> None:
        self.names.setdefault(key, name)
        bucket = self.appearances.setdefault(key, [])
        if bucket and bucket[-1] is appearance:
            return
        bucket.append(appearance)

    def build(self) -> dict[str, EntityHistory]:
        return {
            key: EntityHistory(entity_id=key, name=self.names[key], appearances=tuple(items))
            for key, items in self.appearances.items()
        }


def _freeze(servings: dict[str, list[Serving]]) -> dict[str, tuple[Serving, ...]]:
    return {item: tuple(entries) for item, entries in servings.items()}


def _ranked_genres(counter: Counter[str]) -> tuple[tuple[str, int], ...]:
    return tuple(sorted(counter.items(), key=lambda item: (-item[1], item[0])))


def build_historical_stats(records: Sequence[WeeklyRecord]) -> HistoricalStats:
    """Cross-week bookkeeping for movies, people, pickers and food and drink."""
    movies, actors, directors = _HistoryBuilder(), _HistoryBuilder(), _HistoryBuilder()
    servings: dict[str, dict[str, list[Serving]]] = {"meal": {}, "cocktail": {}, "dessert": {}}
    positions: dict[str, int] = {}
    picker_names: dict[str, str] = {}
    picker_weeks: Counter[str] = Counter()
    picker_selections: Counter[str] = Counter()
    picker_wins: Counter[str] = Counter()
    picker_genres: dict[str, Counter[str]] = {}

    for record_index, record in enumerate(records):
        positions.setdefault(record.record_id, record_index)
        for selection in record.selections:
            appearance = Appearance(
                record_id=record.record_id,
                date=record.date,
                movie_id=selection.movie_id,
                title=selection.title,
                is_winner=selection.is_winner,
                record_index=record_index,
            )
            movies.add(selection.movie_id, selection.title, appearance)
            for actor in selection.cast:
                actors.add(actor.identity, actor.name, appearance)
            for director in selection.directors:
                directors.add(director.identity, director.name, appearance)

        serving = Serving(record_id=record.record_id, date=record.date, record_index=record_index)
        for kind, items in (
            ("meal", record.meals),
            ("cocktail", record.cocktails),
            ("dessert", record.desserts),
        ):
            for item in dict.fromkeys(items):
                servings[kind].setdefault(item, []).append(serving)

        if record.picker is not None:
            user_id = record.picker.user_id
            picker_names.setdefault(user_id, record.picker.username)
            picker_weeks[user_id] += 1
            picker_selections[user_id] += len(record.selections)
            picker_wins[user_id] += sum(1 for s in record.selections if s.is_winner)
            genres = picker_genres.setdefault(user_id, Counter())
            for selection in record.selections:
                genres.update(selection.genres)

    pickers = {
        user_id: PickerHistory(
            user_id=user_id,
            name=name,
            weeks=picker_weeks[user_id],
            selections=picker_selections[user_id],
            wins=picker_wins[user_id],
            top_genres=_ranked_genres(picker_genres.get(user_id, Counter())),
        )
        for user_id, name in picker_names.items()
    }
    return HistoricalStats(
        movies=movies.build(),
        actors=actors.build(),
        directors=directors.build(),
        pickers=pickers,
        meals=_freeze(servings["meal"]),
        cocktails=_freeze(servings["cocktail"]),
        desserts=_freeze(servings["dessert"]),
        record_positions=positions,
    )
