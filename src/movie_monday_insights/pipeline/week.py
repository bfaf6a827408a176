from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Sequence

from movie_monday_insights.config import AppConfig
from movie_monday_insights.insights.connections import Connections, find_connections
from movie_monday_insights.insights.facts import generate_facts
from movie_monday_insights.insights.history import build_historical_stats
from movie_monday_insights.io.write import write_summary
from movie_monday_insights.models import Fact, WeeklyRecord
from movie_monday_insights.paths import build_output_paths

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeekInsights:
    record_id: str
    connections: Connections
    facts: list[Fact]

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "connections": asdict(self.connections),
            "facts": [
                {"text": fact.text, "icon_hint": fact.icon_hint, "priority": fact.priority}
                for fact in self.facts
            ],
        }


def find_record(records: Sequence[WeeklyRecord], record_id: str) -> WeeklyRecord:
    for record in records:
        if record.record_id == str(record_id):
            return record
    raise ValueError(f"Weekly record not found: {record_id!r}")


def build_week_insights(
    record_id: str,
    records: Sequence[WeeklyRecord],
    config: AppConfig,
    *,
    max_facts: int | None = None,
) -> WeekInsights:
    current = find_record(records, record_id)
    history = build_historical_stats(records)
    facts = generate_facts(
        current,
        history,
        config.facts.max_facts if max_facts is None else max_facts,
        config=config.facts,
    )
    LOGGER.info("Generated %d fact(s) for week %s", len(facts), current.record_id)
    return WeekInsights(
        record_id=current.record_id,
        connections=find_connections(current.selections),
        facts=facts,
    )


def export_week_insights(insights: WeekInsights, out_dir: Path) -> Path:
    return write_summary(insights.to_dict(), build_output_paths(out_dir).week(insights.record_id))
