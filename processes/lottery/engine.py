from __future__ import annotations

import json
import logging
import random
from collections.abc import Sequence
from datetime import UTC, datetime

from validators import validate_draft_config

from .types import (
    DraftConfig,
    DraftConfigError,
    DraftResult,
    ErrorCodes,
    GenerationError,
    Team,
)

logger = logging.getLogger("processes.lottery")


class Randomizer:
    """RNG with optional seed for reproducibility.

    One instance per draw; nothing is shared between concurrent draws.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)

    def uniform(self, upper: float) -> float:
        """Draw from [0, upper)."""
        return self.rng.random() * upper


def weighted_random_select(pool: Sequence[Team], rng: Randomizer) -> Team:
    """Pick one team from ``pool`` with probability proportional to its percentage.

    Teams with a missing or zero percentage are never candidates. Ties go to
    the earliest team in pool order whose running sum covers the draw.
    """
    lottery = [t for t in pool if t.is_lottery]
    if not lottery:
        raise GenerationError(
            ErrorCodes.EMPTY_POOL,
            "No lottery teams with percentages found",
            {"pool": [t.name for t in pool]},
        )

    candidates = [t for t in lottery if t.weight > 0]
    total_weight = sum(t.weight for t in candidates)
    if total_weight <= 0:
        raise GenerationError(
            ErrorCodes.ZERO_WEIGHT,
            "Total percentage weight is 0",
            {"pool": [t.name for t in lottery]},
        )

    x = rng.uniform(total_weight)
    cumulative = 0.0
    for team in candidates:
        cumulative += team.weight
        if x <= cumulative:
            return team
    # float rounding can leave x a hair above the final running sum
    return candidates[-1]


def generate_draft_order(
    config: DraftConfig, rng: Randomizer | None = None
) -> list[Team]:
    """Draw the lottery teams without replacement, then append playoff teams.

    The config is not re-validated. Weights are recomputed over the remaining
    pool on every pick, so later odds compound.
    """
    rng = rng or Randomizer()
    remaining = config.lottery_pool
    playoff = config.playoff_teams

    picks: list[Team] = []
    for pick_no in range(1, config.lottery_teams + 1):
        if not remaining:
            raise GenerationError(
                ErrorCodes.POOL_EXHAUSTED,
                f"Lottery pool exhausted after {len(picks)} of "
                f"{config.lottery_teams} picks",
                {"picks": [t.name for t in picks]},
            )
        team = weighted_random_select(remaining, rng)
        picks.append(team)
        remaining.remove(team)
        logger.debug(
            json.dumps(
                {
                    "event": "lottery_pick",
                    "pick": pick_no,
                    "team_id": team.id,
                    "team": team.name,
                    "remaining": len(remaining),
                }
            )
        )

    return [*picks, *playoff]


def run_draft(
    config: DraftConfig, *, seed: int | None = None, validate: bool = True
) -> DraftResult:
    """Validate (optionally), draw and timestamp one lottery run."""
    if validate:
        result = validate_draft_config(config)
        if not result.is_valid:
            raise DraftConfigError(result.errors)

    order = generate_draft_order(config, Randomizer(seed))
    ts = datetime.now(UTC).isoformat()
    logger.info(
        json.dumps(
            {
                "event": "lottery_drawn",
                "seed": seed,
                "total_teams": config.total_teams,
                "lottery_teams": config.lottery_teams,
                "first_pick": order[0].name if order else None,
            }
        )
    )
    return DraftResult(order=tuple(order), timestamp=ts, seed=seed)
