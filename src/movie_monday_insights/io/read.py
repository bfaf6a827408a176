from __future__ import annotations

import json
import logging
from pathlib import Path

from movie_monday_insights.io.schema import parse_weekly_records
from movie_monday_insights.models import WeeklyRecord

LOGGER = logging.getLogger(__name__)


def load_records(path: Path) -> list[WeeklyRecord]:
    """Load weekly records from a JSON export of the backend's weekly-record listing."""
    # utf-8-sig strips BOM-prefixed exports.
    with path.open("r", encoding="utf-8-sig") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Records file is not valid JSON: {path}") from exc

    records = parse_weekly_records(payload)
    LOGGER.info("Loaded %d weekly records from %s", len(records), path)
    return records
