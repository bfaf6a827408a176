from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    """Export layout: frequency tables, the dashboard summary, and per-week insights."""

    root: Path
    tables: Path
    summary: Path
    weeks: Path

    def week(self, record_id: str) -> Path:
        return self.weeks / f"week_{record_id}.json"


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(
        root=out_dir,
        tables=out_dir / "tables",
        summary=out_dir / "summary",
        weeks=out_dir / "weeks",
    )
    for directory in (paths.tables, paths.summary, paths.weeks):
        directory.mkdir(parents=True, exist_ok=True)
    return paths
