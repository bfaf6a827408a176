from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping

import pandas as pd

from movie_monday_insights.models import (
    CastMember,
    CrewMember,
    EventDetails,
    MovieSelection,
    Picker,
    WeeklyRecord,
)
from movie_monday_insights.preprocess.lists import normalize_list_field

LOGGER = logging.getLogger(__name__)

STATUS_ALIASES = {
    "not_created": "not_created",
    "not-created": "not_created",
    "pending": "pending",
    "in_progress": "in_progress",
    "in-progress": "in_progress",
    "completed": "completed",
}


def _first_present(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _optional_id(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_year(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip()[:4])
    except ValueError:
        LOGGER.debug("Ignoring unparseable release year: %r", value)
        return None


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(str(value), errors="coerce", utc=True)
    if pd.isna(parsed):
        LOGGER.debug("Ignoring unparseable week date: %r", value)
        return None
    return parsed.date()


def _require_mapping(value: Any, *, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"weekly record field '{field_name}' must be an object")
    return value


def _iter_mappings(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def parse_cast(payload: Any) -> tuple[CastMember, ...]:
    members: list[CastMember] = []
    for item in _iter_mappings(payload):
        name = _optional_text(item.get("name"))
        if not name:
            continue
        members.append(
            CastMember(
                actor_id=_optional_id(_first_present(item, "actorId", "actor_id", "id")),
                name=name,
                character=_optional_text(item.get("character")),
            )
        )
    return tuple(members)


def parse_crew(payload: Any) -> tuple[CrewMember, ...]:
    members: list[CrewMember] = []
    for item in _iter_mappings(payload):
        name = _optional_text(item.get("name"))
        if not name:
            continue
        members.append(
            CrewMember(
                person_id=_optional_id(_first_present(item, "personId", "person_id", "id")),
                name=name,
                job=_optional_text(item.get("job")),
            )
        )
    return tuple(members)


def parse_movie_selection(payload: Mapping[str, Any]) -> MovieSelection:
    movie_id = _optional_id(_first_present(payload, "tmdbMovieId", "tmdb_movie_id", "movieId"))
    title = _optional_text(payload.get("title"))
    if movie_id is None:
        movie_id = _optional_id(payload.get("id")) or title
    return MovieSelection(
        movie_id=movie_id,
        title=title,
        is_winner=bool(_first_present(payload, "isWinner", "is_winner")),
        poster_path=_optional_id(_first_present(payload, "posterPath", "poster_path")),
        genres=tuple(normalize_list_field(payload.get("genres"))),
        release_year=_optional_year(_first_present(payload, "releaseYear", "release_year")),
        cast=parse_cast(payload.get("cast")),
        crew=parse_crew(payload.get("crew")),
    )


def parse_event_details(payload: Any) -> EventDetails | None:
    if not isinstance(payload, Mapping):
        return None
    return EventDetails(
        meals=tuple(normalize_list_field(payload.get("meals"))),
        cocktails=tuple(normalize_list_field(payload.get("cocktails"))),
        desserts=tuple(normalize_list_field(payload.get("desserts"))),
        notes=_optional_text(payload.get("notes")),
    )


def parse_picker(payload: Mapping[str, Any]) -> Picker | None:
    picker = payload.get("picker")
    if isinstance(picker, Mapping):
        user_id = _optional_id(picker.get("id")) or _optional_id(payload.get("pickerUserId"))
        username = _optional_text(picker.get("username"))
        if user_id or username:
            return Picker(user_id=user_id or username, username=username or user_id or "")
    user_id = _optional_id(payload.get("pickerUserId"))
    if user_id:
        return Picker(user_id=user_id, username=user_id)
    return None


def parse_status(value: Any) -> str:
    text = "" if value is None else str(value).strip().lower()
    if not text:
        return "pending"
    status = STATUS_ALIASES.get(text)
    if status is None:
        raise ValueError(f"Unsupported week status: {value!r}.")
    return status


def parse_weekly_record(payload: Any) -> WeeklyRecord:
    """Convert one backend weekly-record object into a ``WeeklyRecord``."""
    record = _require_mapping(payload, field_name="record")
    record_id = _optional_id(record.get("id"))
    if record_id is None:
        raise ValueError("weekly record field 'id' must be present")

    selections = tuple(
        parse_movie_selection(item)
        for item in _iter_mappings(_first_present(record, "movieSelections", "movie_selections"))
    )
    return WeeklyRecord(
        record_id=record_id,
        date=_parse_date(record.get("date")),
        status=parse_status(record.get("status")),
        picker=parse_picker(record),
        selections=selections,
        event_details=parse_event_details(_first_present(record, "eventDetails", "event_details")),
    )


def parse_weekly_records(payload: Any) -> list[WeeklyRecord]:
    if not isinstance(payload, (list, tuple)):
        raise ValueError("weekly records payload must be a JSON array")
    return [parse_weekly_record(item) for item in payload]
