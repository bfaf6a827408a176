from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from movie_monday_insights.models import MovieSelection

ConnectionKind = Literal["actors", "directors", "genres", "decades"]

MIN_CONNECTED_MOVIES = 2


@dataclass(frozen=True)
class ConnectedMovie:
    id: str
    title: str
    is_winner: bool
    release_year: int | None = None


@dataclass(frozen=True)
class Connection:
    entity: str
    movies: tuple[ConnectedMovie, ...]
    entity_id: str | None = None


@dataclass(frozen=True)
class Connections:
    actors: list[Connection] = field(default_factory=list)
    directors: list[Connection] = field(default_factory=list)
    genres: list[Connection] = field(default_factory=list)
    decades: list[Connection] = field(default_factory=list)

    def strongest(self, kind: ConnectionKind) -> Connection | None:
        """Connection with the most movies; the first seen wins ties."""
        best: Connection | None = None
        for connection in getattr(self, kind):
            if best is None or len(connection.movies) > len(best.movies):
                best = connection
        return best

    def is_empty(self) -> bool:
        return not (self.actors or self.directors or self.genres or self.decades)


class _Collector:
    def __init__(self) -> None:
        self._labels: dict[str, tuple[str, str | None]] = {}
        self._movies: dict[str, list[ConnectedMovie]] = {}

    def add(self, key: str, label: str, entity_id: str | None, movie: ConnectedMovie) -> None:
        if key not in self._labels:
            self._labels[key] = (label, entity_id)
            self._movies[key] = []
        movies = self._movies[key]
        if movies and movies[-1] is movie:
            return
        movies.append(movie)

    def shared(self) -> list[Connection]:
        return [
            Connection(entity=label, entity_id=entity_id, movies=tuple(self._movies[key]))
            for key, (label, entity_id) in self._labels.items()
            if len(self._movies[key]) >= MIN_CONNECTED_MOVIES
        ]


def decade_label(release_year: int) -> str:
    return f"{(release_year // 10) * 10}s"


def find_connections(selections: Sequence[MovieSelection]) -> Connections:
    """Actors, directors, genres and decades shared by two or more of one week's selections."""
    if len(selections) < MIN_CONNECTED_MOVIES:
        return Connections()

    actors, directors, genres, decades = _Collector(), _Collector(), _Collector(), _Collector()
    for selection in selections:
        movie = ConnectedMovie(
            id=selection.movie_id,
            title=selection.title,
            is_winner=selection.is_winner,
            release_year=selection.release_year,
        )
        for actor in selection.cast:
            actors.add(actor.identity, actor.name, actor.actor_id, movie)
        for director in selection.directors:
            directors.add(director.identity, director.name, director.person_id, movie)
        for genre in selection.genres:
            genres.add(genre, genre, None, movie)
        if selection.release_year is not None:
            label = decade_label(selection.release_year)
            decades.add(label, label, None, movie)

    return Connections(
        actors=actors.shared(),
        directors=directors.shared(),
        genres=genres.shared(),
        decades=decades.shared(),
    )
