from __future__ import annotations

import logging
from typing import Sequence

from movie_monday_insights.config import FactsConfig
from movie_monday_insights.insights.connections import find_connections
from movie_monday_insights.insights.history import HistoricalStats
from movie_monday_insights.insights.rules import DEFAULT_FACT_RULES, FactContext, FactRule
from movie_monday_insights.models import Fact, WeeklyRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_FACTS = 4


def rank_facts(facts: Sequence[Fact], max_facts: int = DEFAULT_MAX_FACTS) -> list[Fact]:
    """Highest priority first; equal priorities keep generation order."""
    if max_facts < 0:
        raise ValueError(f"max_facts must be >= 0, got {max_facts}.")
    return sorted(facts, key=lambda fact: -fact.priority)[:max_facts]


def evaluate_rules(
    context: FactContext,
    rules: Sequence[FactRule] = DEFAULT_FACT_RULES,
) -> list[Fact]:
    facts: list[Fact] = []
    for rule in rules:
        fired = rule(context)
        if fired:
            LOGGER.debug("Fact rule %s fired %d fact(s)", rule.__name__, len(fired))
        facts.extend(fired)
    return facts


def generate_facts(
    current: WeeklyRecord,
    history: HistoricalStats,
    max_facts: int = DEFAULT_MAX_FACTS,
    *,
    config: FactsConfig | None = None,
    rules: Sequence[FactRule] = DEFAULT_FACT_RULES,
) -> list[Fact]:
    """Evaluate every fact rule for ``current`` and keep the top ``max_facts`` by priority."""
    context = FactContext(
        current=current,
        history=history,
        connections=find_connections(current.selections),
        config=config or FactsConfig(),
    )
    return rank_facts(evaluate_rules(context, rules), max_facts)
