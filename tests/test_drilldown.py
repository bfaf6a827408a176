from __future__ import annotations

import pytest

from movie_monday_insights.models import (
    CastMember,
    CrewMember,
    EventDetails,
    MovieSelection,
    WeeklyRecord,
)
from movie_monday_insights.query.drilldown import EntityType, build_drilldown, get_movies_by


def _records() -> list[WeeklyRecord]:
    jane = CastMember(actor_id="11", name="Jane Doe")
    return [
        WeeklyRecord(
            record_id="w1",
            selections=(
                MovieSelection(movie_id="1", title="First Light", is_winner=True, cast=(jane,)),
                MovieSelection(movie_id="2", title="Second Wind", cast=(jane,), genres=("Drama",)),
            ),
            event_details=EventDetails(cocktails=("Negroni",), meals=("Tacos",)),
        ),
        WeeklyRecord(
            record_id="w2",
            selections=(
                MovieSelection(
                    movie_id="3",
                    title="Third Act",
                    genres=("drama",),
                    crew=(CrewMember(person_id="5", name="Ava Lee", job="Director"),),
                ),
                MovieSelection(
                    movie_id="4",
                    title="Fourth Wall",
                    is_winner=True,
                    cast=(jane,),
                    crew=(CrewMember(person_id="6", name="Sam Roe", job="Writer"),),
                ),
            ),
            event_details=EventDetails(cocktails=("negroni ",)),
        ),
    ]


def test_get_movies_by_actor_with_win_filter_returns_only_winners() -> None:
    movies = get_movies_by("actor", "Jane Doe", _records(), True)

    assert [movie.title for movie in movies] == ["First Light", "Fourth Wall"]
    assert all(movie.is_winner for movie in movies)
    assert all(any(member.name == "Jane Doe" for member in movie.cast) for movie in movies)


def test_get_movies_by_matches_case_insensitively_in_record_order() -> None:
    assert [movie.movie_id for movie in get_movies_by("genre", "DRAMA", _records())] == ["2", "3"]
    assert [movie.movie_id for movie in get_movies_by("actor", "jane doe", _records(), False)] == [
        "2"
    ]


def test_get_movies_by_director_ignores_other_crew_jobs() -> None:
    assert [movie.movie_id for movie in get_movies_by("director", "Ava Lee", _records())] == ["3"]
    assert get_movies_by(EntityType.director, "Sam Roe", _records()) == []


def test_get_movies_by_food_returns_every_selection_of_matching_weeks() -> None:
    movies = get_movies_by("cocktail", "Negroni", _records())
    assert [movie.movie_id for movie in movies] == ["1", "2", "3", "4"]

    meal_winners = get_movies_by(EntityType.meal, "tacos", _records(), True)
    assert [movie.movie_id for movie in meal_winners] == ["1"]


def test_get_movies_by_rejects_unknown_entity_type() -> None:
    with pytest.raises(ValueError, match="Unsupported entity type"):
        get_movies_by("studio", "A24", _records())


def test_get_movies_by_blank_name_returns_empty_list() -> None:
    assert get_movies_by("actor", "   ", _records()) == []


def test_build_drilldown_titles_describe_the_filter() -> None:
    records = _records()

    assert build_drilldown("actor", "Jane Doe", records, "winning").title == (
        "Winning Movies featuring Jane Doe"
    )
    assert build_drilldown("director", "Ava Lee", records).title == "Movies directed by Ava Lee"
    assert build_drilldown("genre", "Drama", records, "losing").title == "Rejected Drama Movies"
    assert build_drilldown("cocktail", "Negroni", records).title == (
        "Movies watched while serving Negroni"
    )
    empty = build_drilldown("director", "Ava Lee", records, "winning")
    assert empty.movies == []
    assert empty.title == "No winning movies found for Ava Lee"


def test_build_drilldown_rejects_unknown_outcome() -> None:
    with pytest.raises(ValueError, match="Unsupported drill-down outcome"):
        build_drilldown("actor", "Jane Doe", _records(), "tied")  # type: ignore[arg-type]
