from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

WeekStatus = Literal["not_created", "pending", "in_progress", "completed"]

ALLOWED_WEEK_STATUSES = frozenset({"not_created", "pending", "in_progress", "completed"})
DIRECTOR_JOB = "Director"


@dataclass(frozen=True)
class Picker:
    user_id: str
    username: str


@dataclass(frozen=True)
class CastMember:
    actor_id: str | None
    name: str
    character: str = ""

    @property
    def identity(self) -> str:
        return self.actor_id or self.name


@dataclass(frozen=True)
class CrewMember:
    person_id: str | None
    name: str
    job: str = ""

    @property
    def identity(self) -> str:
        return self.person_id or self.name

    @property
    def is_director(self) -> bool:
        return self.job == DIRECTOR_JOB


@dataclass(frozen=True)
class MovieSelection:
    movie_id: str
    title: str
    is_winner: bool = False
    poster_path: str | None = None
    genres: tuple[str, ...] = ()
    release_year: int | None = None
    cast: tuple[CastMember, ...] = ()
    crew: tuple[CrewMember, ...] = ()

    @property
    def directors(self) -> tuple[CrewMember, ...]:
        return tuple(member for member in self.crew if member.is_director)

    @property
    def decade(self) -> int | None:
        if self.release_year is None:
            return None
        return (self.release_year // 10) * 10


@dataclass(frozen=True)
class EventDetails:
    meals: tuple[str, ...] = ()
    cocktails: tuple[str, ...] = ()
    desserts: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class WeeklyRecord:
    record_id: str
    date: date | None = None
    status: WeekStatus = "pending"
    picker: Picker | None = None
    selections: tuple[MovieSelection, ...] = ()
    event_details: EventDetails | None = None

    def __post_init__(self) -> None:
        if self.status not in ALLOWED_WEEK_STATUSES:
            raise ValueError(f"Unsupported week status: {self.status!r}.")
        winners = [selection for selection in self.selections if selection.is_winner]
        if len(winners) > 1:
            raise ValueError(
                f"Weekly record {self.record_id!r} has {len(winners)} winners; at most one allowed."
            )

    @property
    def winner(self) -> MovieSelection | None:
        for selection in self.selections:
            if selection.is_winner:
                return selection
        return None

    @property
    def meals(self) -> tuple[str, ...]:
        return self.event_details.meals if self.event_details else ()

    @property
    def cocktails(self) -> tuple[str, ...]:
        return self.event_details.cocktails if self.event_details else ()

    @property
    def desserts(self) -> tuple[str, ...]:
        return self.event_details.desserts if self.event_details else ()


@dataclass(frozen=True)
class AggregateStat:
    name: str
    total_count: int
    win_count: int
    entity_id: str | None = None

    @property
    def loss_count(self) -> int:
        return self.total_count - self.win_count

    @property
    def win_rate(self) -> float | None:
        if self.total_count <= 0:
            return None
        return self.win_count / self.total_count


@dataclass(frozen=True)
class Fact:
    text: str
    icon_hint: str
    priority: int
    rule: str = field(default="", compare=False)
