from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from processes.lottery.types import DraftResult, Team

EXPORT_COLUMNS = ["Pick", "Team Name", "Type", "Percentage"]


def _format_pct(value: float | None) -> str:
    if value is None or value == 0:
        return ""
    f = float(value)
    return str(int(f)) if f.is_integer() else str(f)


def build_export_df(result: DraftResult) -> pd.DataFrame:
    """One row per pick in draft order.

    Percentage is blank for teams without one (playoff teams, typically).
    """
    rows: list[dict[str, Any]] = []
    for pick, team in enumerate(result.order, start=1):
        rows.append(
            {
                "Pick": pick,
                "Team Name": team.name,
                "Type": "Lottery" if team.is_lottery else "Playoff",
                "Percentage": _format_pct(team.percentage),
            }
        )
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def write_results_csv(df: pd.DataFrame, out_csv: Path) -> Path:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, columns=EXPORT_COLUMNS, index=False)
    return out_csv


def format_results_text(result: DraftResult) -> str:
    lines: list[str] = []
    for pick, team in enumerate(result.order, start=1):
        pct = _format_pct(team.percentage)
        suffix = f" ({pct}% chance)" if pct else ""
        lines.append(f"Pick #{pick}: {team.name}{suffix}")
    return "\n".join(lines)


def default_export_name(timestamp: str | None = None) -> str:
    day = (
        datetime.fromisoformat(timestamp).date().isoformat()
        if timestamp
        else datetime.now().date().isoformat()
    )
    return f"draft-lottery-{day}.csv"


def load_result_json(path: Path) -> DraftResult:
    data = json.loads(path.read_text(encoding="utf-8"))
    if "order" not in data:
        raise ValueError(f"Result file {path} missing 'order'")
    return DraftResult(
        order=tuple(Team.from_dict(t) for t in data["order"]),
        timestamp=str(data.get("timestamp", "")),
        seed=data.get("seed"),
    )
