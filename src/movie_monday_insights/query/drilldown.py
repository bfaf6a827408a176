from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal, Sequence

from movie_monday_insights.models import MovieSelection, WeeklyRecord

Outcome = Literal["all", "winning", "losing"]

OUTCOME_WIN_FILTERS: dict[str, bool | None] = {"all": None, "winning": True, "losing": False}


class EntityType(str, Enum):
    actor = "actor"
    director = "director"
    genre = "genre"
    cocktail = "cocktail"
    meal = "meal"


@dataclass(frozen=True)
class DrillDown:
    title: str
    entity_type: EntityType
    entity_name: str
    movies: list[MovieSelection]


def _fold(value: str) -> str:
    return value.strip().casefold()


def coerce_entity_type(entity_type: EntityType | str) -> EntityType:
    try:
        return EntityType(entity_type)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in EntityType)
        raise ValueError(
            f"Unsupported entity type: {entity_type!r}. Expected one of: {allowed}."
        ) from exc


def _selection_matcher(entity_type: EntityType, target: str) -> Callable[[MovieSelection], bool]:
    if entity_type is EntityType.actor:
        return lambda selection: any(_fold(member.name) == target for member in selection.cast)
    if entity_type is EntityType.director:
        return lambda selection: any(
            _fold(member.name) == target for member in selection.directors
        )
    return lambda selection: any(_fold(genre) == target for genre in selection.genres)


def _week_items(entity_type: EntityType, record: WeeklyRecord) -> tuple[str, ...]:
    if entity_type is EntityType.cocktail:
        return record.cocktails
    return record.meals


def get_movies_by(
    entity_type: EntityType | str,
    entity_name: str,
    records: Sequence[WeeklyRecord],
    win_filter: bool | None = None,
) -> list[MovieSelection]:
    """Return selections matching a named entity, in record order then selection order.

    Cocktails and meals belong to the week, so every selection of a week that
    served the item matches. ``win_filter`` keeps only winners (``True``) or
    non-winners (``False``).
    """
    kind = coerce_entity_type(entity_type)
    target = _fold(entity_name)
    matches: list[MovieSelection] = []
    if not target:
        return matches

    week_scoped = kind in (EntityType.cocktail, EntityType.meal)
    matcher = _selection_matcher(kind, target)
    for record in records:
        if week_scoped:
            if not any(_fold(item) == target for item in _week_items(kind, record)):
                continue
            candidates = list(record.selections)
        else:
            candidates = [selection for selection in record.selections if matcher(selection)]
        for selection in candidates:
            if win_filter is None or selection.is_winner == win_filter:
                matches.append(selection)
    return matches


def drilldown_title(entity_type: EntityType, name: str, outcome: Outcome, found: bool) -> str:
    if not found:
        if outcome == "winning":
            return f"No winning movies found for {name}"
        if outcome == "losing":
            return f"No rejected movies found for {name}"
        return f"No movies found for {name}"

    prefix = {"all": "", "winning": "Winning ", "losing": "Rejected "}[outcome]
    if entity_type is EntityType.actor:
        return f"{prefix}Movies featuring {name}"
    if entity_type is EntityType.director:
        return f"{prefix}Movies directed by {name}"
    if entity_type is EntityType.genre:
        return f"{prefix}{name} Movies"
    verb = "serving" if entity_type is EntityType.cocktail else "eating"
    if outcome == "all":
        return f"Movies watched while {verb} {name}"
    return f"{prefix}Movies from weeks {verb} {name}"


def build_drilldown(
    entity_type: EntityType | str,
    entity_name: str,
    records: Sequence[WeeklyRecord],
    outcome: Outcome = "all",
) -> DrillDown:
    if outcome not in OUTCOME_WIN_FILTERS:
        raise ValueError(f"Unsupported drill-down outcome: {outcome!r}")
    kind = coerce_entity_type(entity_type)
    movies = get_movies_by(kind, entity_name, records, win_filter=OUTCOME_WIN_FILTERS[outcome])
    return DrillDown(
        title=drilldown_title(kind, entity_name.strip(), outcome, found=bool(movies)),
        entity_type=kind,
        entity_name=entity_name.strip(),
        movies=movies,
    )
