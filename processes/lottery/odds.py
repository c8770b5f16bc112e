from __future__ import annotations

from typing import Any

import pandas as pd

from .engine import Randomizer, generate_draft_order
from .types import DraftConfig


def simulate_pick_distribution(
    config: DraftConfig, trials: int = 10_000, seed: int = 0
) -> pd.DataFrame:
    """Run the lottery ``trials`` times and tabulate where each team landed.

    Parameters
    ----------
    config: DraftConfig
        Should already have passed validation.
    trials: int
        Number of independent draws. Trial ``i`` is seeded with ``seed + i``.
    seed: int
        Base seed.

    Returns
    -------
    DataFrame indexed by lottery team name (input order) with one column per
    lottery pick (1..lottery_teams); values are empirical probabilities and
    each row sums to 1.
    """
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")

    rows: list[dict[str, Any]] = []
    for i in range(int(trials)):
        order = generate_draft_order(config, Randomizer(seed + i))
        for pick, team in enumerate(order[: config.lottery_teams], start=1):
            rows.append({"team": team.name, "pick": pick})
    draws = pd.DataFrame(rows)

    names = [t.name for t in config.lottery_pool]
    picks = list(range(1, config.lottery_teams + 1))
    table = (
        pd.crosstab(draws["team"], draws["pick"])
        .reindex(index=names, columns=picks, fill_value=0)
        .astype(float)
        / float(trials)
    )
    table.index.name = "team"
    table.columns.name = "pick"
    return table


def format_distribution(table: pd.DataFrame) -> str:
    """Percent table for terminal output."""
    pct = (table * 100.0).round(1)
    pct.columns = [f"#{c}" for c in pct.columns]
    return pct.to_string()
