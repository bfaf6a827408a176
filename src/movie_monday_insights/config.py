from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field


class InputConfig(BaseModel):
    records_path: str | None = None


class AggregatesConfig(BaseModel):
    top_n: int = Field(default=15, ge=1)
    overview_top_n: int = Field(default=5, ge=1)
    trend_months: int = Field(default=6, ge=1)


class FactsConfig(BaseModel):
    max_facts: int = Field(default=4, ge=0)
    cursed_appearances_over: int = Field(default=3, ge=0)
    favorite_win_rate_over: float = Field(default=0.5, ge=0.0, lt=1.0)
    favorite_min_appearances: int = Field(default=1, ge=1)
    regular_appearances_over: int = Field(default=5, ge=0)
    director_appearances_over: int = Field(default=1, ge=0)
    repeat_item_prior_weeks_over: int = Field(default=1, ge=0)
    picker_weeks_over: int = Field(default=1, ge=0)
    dominant_genre_min_count: int = Field(default=2, ge=1)


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"
    summary_filename: str = "dashboard.json"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: InputConfig = Field(default_factory=InputConfig)
    aggregates: AggregatesConfig = Field(default_factory=AggregatesConfig)
    facts: FactsConfig = Field(default_factory=FactsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.records_path = _resolve_optional_path(
        config.input.records_path or os.getenv("MOVIE_MONDAY_RECORDS"),
        base_dir,
    )
    return config
