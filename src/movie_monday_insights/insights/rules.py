from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from movie_monday_insights.config import FactsConfig
from movie_monday_insights.insights.connections import Connections
from movie_monday_insights.insights.history import EntityHistory, HistoricalStats
from movie_monday_insights.models import Fact, WeeklyRecord
from movie_monday_insights.rates import format_percent

# Relative order: full-week connections > partial connections > repeats and
# records > regulars.
PRIORITY_ALL_SHARE_GENRE = 10
PRIORITY_SOME_SHARE_GENRE = 7
PRIORITY_ALL_SHARE_DECADE = 9
PRIORITY_SOME_SHARE_DECADE = 6
PRIORITY_ACTOR_IN_ALL = 10
PRIORITY_ACTOR_IN_SOME = 8
PRIORITY_SHARED_DIRECTOR = 9
PRIORITY_FINALLY_WON = 10
PRIORITY_WINNER_RECORD = 9
PRIORITY_REPEAT_ITEM = {"meal": 8, "cocktail": 7, "dessert": 6}
PRIORITY_CURSED_ACTOR = 9
PRIORITY_FAVORITE_ACTOR = 8
PRIORITY_REGULAR_ACTOR = 7
PRIORITY_DIRECTOR_WITH_WINS = 8
PRIORITY_DIRECTOR_WITHOUT_WINS = 7
PRIORITY_PICKER_RECORD = 8
PRIORITY_PICKER_GENRE = 7

ITEM_ICONS = {"meal": "utensils", "cocktail": "wine", "dessert": "cake"}
ITEM_PHRASES = {
    "meal": "has been on the menu at",
    "cocktail": "has been poured at",
    "dessert": "has been served for dessert at",
}


@dataclass(frozen=True)
class FactContext:
    current: WeeklyRecord
    history: HistoricalStats
    connections: Connections
    config: FactsConfig


FactRule = Callable[[FactContext], list[Fact]]


def genre_theme_rule(context: FactContext) -> list[Fact]:
    connection = context.connections.strongest("genres")
    if connection is None:
        return []
    shared = len(connection.movies)
    if shared == len(context.current.selections):
        return [
            Fact(
                text=(
                    f"This week has a {connection.entity} theme: "
                    f"all {shared} movies share the genre!"
                ),
                icon_hint="genre",
                priority=PRIORITY_ALL_SHARE_GENRE,
                rule="genre_theme",
            )
        ]
    return [
        Fact(
            text=f"{shared} movies this week share the {connection.entity} genre",
            icon_hint="link",
            priority=PRIORITY_SOME_SHARE_GENRE,
            rule="genre_theme",
        )
    ]


def decade_theme_rule(context: FactContext) -> list[Fact]:
    connection = context.connections.strongest("decades")
    if connection is None:
        return []
    shared = len(connection.movies)
    if shared == len(context.current.selections):
        return [
            Fact(
                text=f"All movies this week are from the {connection.entity}!",
                icon_hint="calendar",
                priority=PRIORITY_ALL_SHARE_DECADE,
                rule="decade_theme",
            )
        ]
    return [
        Fact(
            text=f"{shared} movies this week are from the {connection.entity}",
            icon_hint="calendar",
            priority=PRIORITY_SOME_SHARE_DECADE,
            rule="decade_theme",
        )
    ]


def shared_actor_rule(context: FactContext) -> list[Fact]:
    connection = context.connections.strongest("actors")
    if connection is None:
        return []
    shared = len(connection.movies)
    if shared == len(context.current.selections):
        return [
            Fact(
                text=f"Actor {connection.entity} appears in all {shared} movies this week!",
                icon_hint="users",
                priority=PRIORITY_ACTOR_IN_ALL,
                rule="shared_actor",
            )
        ]
    return [
        Fact(
            text=f"Actor {connection.entity} appears in {shared} of this week's selections",
            icon_hint="users",
            priority=PRIORITY_ACTOR_IN_SOME,
            rule="shared_actor",
        )
    ]


def shared_director_rule(context: FactContext) -> list[Fact]:
    connection = context.connections.strongest("directors")
    if connection is None:
        return []
    shared = len(connection.movies)
    scope = f"all {shared}" if shared == len(context.current.selections) else str(shared)
    return [
        Fact(
            text=f"Director {connection.entity} directed {scope} of this week's movies",
            icon_hint="film",
            priority=PRIORITY_SHARED_DIRECTOR,
            rule="shared_director",
        )
    ]


def _winner_history(context: FactContext) -> EntityHistory | None:
    winner = context.current.winner
    if winner is None:
        return None
    return context.history.movies.get(winner.movie_id)


def finally_won_rule(context: FactContext) -> list[Fact]:
    movie = _winner_history(context)
    if movie is None:
        return []
    prior = context.history.prior_appearances(movie, context.current)
    if not prior or any(appearance.is_winner for appearance in prior):
        return []
    return [
        Fact(
            text=(
                f"{context.current.winner.title} has appeared in {len(prior) + 1} "
                "Movie Mondays and finally won!"
            ),
            icon_hint="trophy",
            priority=PRIORITY_FINALLY_WON,
            rule="finally_won",
        )
    ]


def winner_record_rule(context: FactContext) -> list[Fact]:
    movie = _winner_history(context)
    if movie is None or movie.total <= 1:
        return []
    return [
        Fact(
            text=(
                f"{context.current.winner.title} has won {movie.wins} out of {movie.total} "
                f"Movie Mondays it appeared in ({format_percent(movie.win_rate)})"
            ),
            icon_hint="trophy",
            priority=PRIORITY_WINNER_RECORD,
            rule="winner_record",
        )
    ]


def repeat_items_rule(context: FactContext) -> list[Fact]:
    facts: list[Fact] = []
    served = {
        "meal": context.current.meals,
        "cocktail": context.current.cocktails,
        "dessert": context.current.desserts,
    }
    for kind, items in served.items():
        for item in dict.fromkeys(items):
            prior = len(context.history.prior_servings(kind, item, context.current))
            if prior > context.config.repeat_item_prior_weeks_over:
                facts.append(
                    Fact(
                        text=f"{item} {ITEM_PHRASES[kind]} {prior + 1} Movie Mondays",
                        icon_hint=ITEM_ICONS[kind],
                        priority=PRIORITY_REPEAT_ITEM[kind],
                        rule="repeat_item",
                    )
                )
    return facts


def _week_actor_histories(context: FactContext) -> list[EntityHistory]:
    seen: dict[str, EntityHistory] = {}
    for selection in context.current.selections:
        for actor in selection.cast:
            history = context.history.actors.get(actor.identity)
            if history is not None and actor.identity not in seen:
                seen[actor.identity] = history
    return list(seen.values())


def _week_director_histories(context: FactContext) -> list[EntityHistory]:
    seen: dict[str, EntityHistory] = {}
    for selection in context.current.selections:
        for director in selection.directors:
            history = context.history.directors.get(director.identity)
            if history is not None and director.identity not in seen:
                seen[director.identity] = history
    return list(seen.values())


def cursed_actor_rule(context: FactContext) -> list[Fact]:
    return [
        Fact(
            text=f"{actor.name} has appeared in {actor.total} selections but hasn't won yet!",
            icon_hint="users",
            priority=PRIORITY_CURSED_ACTOR,
            rule="cursed_actor",
        )
        for actor in _week_actor_histories(context)
        if actor.total > context.config.cursed_appearances_over and actor.wins == 0
    ]


def favorite_actor_rule(context: FactContext) -> list[Fact]:
    config = context.config
    return [
        Fact(
            text=(
                f"{actor.name} is a Movie Monday favorite, winning {actor.wins} of "
                f"{actor.total} appearances ({format_percent(actor.win_rate)})"
            ),
            icon_hint="star",
            priority=PRIORITY_FAVORITE_ACTOR,
            rule="favorite_actor",
        )
        for actor in _week_actor_histories(context)
        if actor.total >= config.favorite_min_appearances
        and (actor.win_rate or 0.0) > config.favorite_win_rate_over
    ]


def regular_actor_rule(context: FactContext) -> list[Fact]:
    return [
        Fact(
            text=f"{actor.name} is a Movie Monday regular with {actor.total} appearances",
            icon_hint="users",
            priority=PRIORITY_REGULAR_ACTOR,
            rule="regular_actor",
        )
        for actor in _week_actor_histories(context)
        if actor.total > context.config.regular_appearances_over
    ]


def director_history_rule(context: FactContext) -> list[Fact]:
    facts: list[Fact] = []
    for director in _week_director_histories(context):
        if director.total <= context.config.director_appearances_over:
            continue
        if director.wins > 0:
            facts.append(
                Fact(
                    text=(
                        f"Director {director.name} has had {director.total} films featured in "
                        f"Movie Mondays, winning {director.wins} "
                        f"({format_percent(director.win_rate)})"
                    ),
                    icon_hint="film",
                    priority=PRIORITY_DIRECTOR_WITH_WINS,
                    rule="director_history",
                )
            )
        else:
            facts.append(
                Fact(
                    text=(
                        f"Director {director.name} has had {director.total} films featured in "
                        "Movie Mondays without a win yet"
                    ),
                    icon_hint="film",
                    priority=PRIORITY_DIRECTOR_WITHOUT_WINS,
                    rule="director_history",
                )
            )
    return facts


def picker_rule(context: FactContext) -> list[Fact]:
    picker = context.current.picker
    if picker is None:
        return []
    stats = context.history.pickers.get(picker.user_id)
    if stats is None or stats.weeks <= context.config.picker_weeks_over:
        return []

    facts = [
        Fact(
            text=(
                f"{stats.name} has picked {stats.weeks} Movie Mondays; {stats.wins} of their "
                f"{stats.selections} selections won ({format_percent(stats.win_rate)})"
            ),
            icon_hint="user",
            priority=PRIORITY_PICKER_RECORD,
            rule="picker",
        )
    ]
    favorite = stats.favorite_genre
    if favorite is not None and favorite[1] >= context.config.dominant_genre_min_count:
        genre, count = favorite
        facts.append(
            Fact(
                text=f"{stats.name} picks {genre} more than any other genre ({count} selections)",
                icon_hint="genre",
                priority=PRIORITY_PICKER_GENRE,
                rule="picker",
            )
        )
    return facts


DEFAULT_FACT_RULES: tuple[FactRule, ...] = (
    shared_actor_rule,
    shared_director_rule,
    genre_theme_rule,
    decade_theme_rule,
    finally_won_rule,
    winner_record_rule,
    cursed_actor_rule,
    favorite_actor_rule,
    regular_actor_rule,
    director_history_rule,
    repeat_items_rule,
    picker_rule,
)
