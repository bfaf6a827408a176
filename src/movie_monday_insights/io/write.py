from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal, Mapping

import pandas as pd

LOGGER = logging.getLogger(__name__)

TableFormat = Literal["csv", "parquet"]
TABLE_FORMATS: tuple[str, ...] = ("csv", "parquet")


def write_table(df: pd.DataFrame, path: Path, fmt: TableFormat = "csv") -> Path:
    if fmt not in TABLE_FORMATS:
        raise ValueError(f"Unsupported table format: {fmt}")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)
    return path


def write_tables(
    tables: Mapping[str, pd.DataFrame],
    directory: Path,
    fmt: TableFormat = "csv",
) -> dict[str, Path]:
    """Write each frame to ``directory/<name>.<fmt>``; returns the written paths by name."""
    written = {
        name: write_table(df, directory / f"{name}.{fmt}", fmt=fmt) for name, df in tables.items()
    }
    LOGGER.info("Wrote %d %s table(s) to %s", len(written), fmt, directory)
    return written


def write_summary(data: Mapping[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    # Dates and other non-JSON scalars are written as their string form.
    path.write_text(json.dumps(data, indent=2, sort_keys=True, default=str), encoding="utf-8")
    return path
