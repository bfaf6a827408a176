from __future__ import annotations

from datetime import date

from movie_monday_insights.features.activity import (
    monthly_activity,
    most_losses,
    most_successful_picker,
    most_wins,
    movie_outcomes,
    picker_stats,
    summarize_collection,
)
from movie_monday_insights.models import (
    CastMember,
    EventDetails,
    MovieSelection,
    Picker,
    WeeklyRecord,
)


def _records() -> list[WeeklyRecord]:
    alex = Picker(user_id="u1", username="alex")
    bea = Picker(user_id="u2", username="bea")
    return [
        WeeklyRecord(
            record_id="w1",
            date=date(2024, 1, 8),
            status="completed",
            picker=alex,
            selections=(
                MovieSelection(
                    movie_id="42",
                    title="Heat",
                    is_winner=True,
                    genres=("Crime",),
                    cast=(CastMember(actor_id="1", name="Al Pacino"),),
                ),
                MovieSelection(movie_id="7", title="Ronin", genres=("Action", "Crime")),
            ),
            event_details=EventDetails(meals=("Tacos",), cocktails=("Negroni",)),
        ),
        WeeklyRecord(
            record_id="w2",
            date=date(2024, 1, 22),
            status="completed",
            picker=bea,
            selections=(
                MovieSelection(movie_id="7", title="Ronin", genres=("Action",)),
                MovieSelection(movie_id="9", title="Alien", is_winner=True, genres=("Horror",)),
            ),
            event_details=EventDetails(meals=("Tacos",)),
        ),
        WeeklyRecord(
            record_id="w3",
            date=date(2024, 2, 5),
            picker=alex,
            selections=(
                MovieSelection(movie_id="42", title="Heat", genres=("Crime",)),
                MovieSelection(movie_id="7", title="Ronin", is_winner=True),
            ),
        ),
        WeeklyRecord(record_id="w4", status="not_created"),
    ]


def test_movie_outcomes_count_selections_and_wins_per_movie() -> None:
    outcomes = {outcome.movie_id: outcome for outcome in movie_outcomes(_records())}

    assert (outcomes["7"].selections, outcomes["7"].wins, outcomes["7"].losses) == (3, 1, 2)
    assert (outcomes["42"].selections, outcomes["42"].wins) == (2, 1)
    assert (outcomes["9"].selections, outcomes["9"].wins) == (1, 1)


def test_most_wins_and_losses_rank_movies() -> None:
    outcomes = movie_outcomes(_records())

    assert [outcome.title for outcome in most_wins(outcomes)] == ["Alien", "Heat", "Ronin"]
    assert [outcome.title for outcome in most_losses(outcomes)] == ["Ronin", "Heat"]


def test_monthly_activity_groups_dated_weeks_by_month() -> None:
    months = monthly_activity(_records())

    assert [(month.month, month.weeks, month.movies, month.winners) for month in months] == [
        ("2024-01", 2, 4, 2),
        ("2024-02", 1, 2, 1),
    ]


def test_picker_stats_track_weeks_selections_and_wins() -> None:
    stats = picker_stats(_records())

    assert [(stat.name, stat.weeks, stat.selections, stat.wins) for stat in stats] == [
        ("alex", 2, 4, 2),
        ("bea", 1, 2, 1),
    ]
    best = most_successful_picker(stats)
    assert best is not None and best.name == "alex"
    assert most_successful_picker([]) is None


def test_summarize_collection_reports_totals_and_uniques() -> None:
    summary = summarize_collection(_records())

    assert summary["weeks"] == 4
    assert summary["movies"] == 6
    assert summary["total_genres"] == 6
    assert summary["unique_genres"] == 3
    assert summary["unique_actors"] == 1
    assert summary["total_meals"] == 2
    assert summary["unique_meals"] == 1
    assert summary["unique_cocktails"] == 1
    assert summary["total_desserts"] == 0
