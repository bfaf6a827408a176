from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from movie_monday_insights.io.write import write_summary, write_table, write_tables


def test_write_tables_names_files_by_kind(tmp_path: Path) -> None:
    frames = {
        "genres": pd.DataFrame({"name": ["Drama"], "total_count": [3]}),
        "meals": pd.DataFrame({"name": ["Tacos"], "total_count": [2]}),
    }

    written = write_tables(frames, tmp_path / "tables", fmt="parquet")

    assert written == {
        "genres": tmp_path / "tables" / "genres.parquet",
        "meals": tmp_path / "tables" / "meals.parquet",
    }
    assert pd.read_parquet(written["meals"])["name"].tolist() == ["Tacos"]


def test_write_table_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unsupported table format"):
        write_table(pd.DataFrame(), tmp_path / "genres.xlsx", fmt="xlsx")  # type: ignore[arg-type]
    assert not (tmp_path / "genres.xlsx").exists()


def test_write_summary_serializes_dates(tmp_path: Path) -> None:
    path = write_summary({"first_week": date(2024, 1, 8)}, tmp_path / "summary" / "out.json")

    assert json.loads(path.read_text(encoding="utf-8")) == {"first_week": "2024-01-08"}
