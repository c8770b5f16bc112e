"""Core draft lottery configuration rules."""

from __future__ import annotations

from processes.lottery.types import DraftConfig

from .types import (
    MAX_TOTAL_PERCENTAGE,
    MIN_LOTTERY_TEAMS,
    MIN_TOTAL_TEAMS,
    InvalidReason,
    ValidationResult,
)


def format_number(value: float) -> str:
    """Render 75.0 as "75" and 12.5 as "12.5"."""
    f = float(value)
    if f.is_integer():
        return str(int(f))
    return repr(round(f, 6))


def validate_draft_config(config: DraftConfig) -> ValidationResult:
    """Validate a draft configuration against every rule.

    Pure function with no I/O dependencies. Every rule is checked, so the
    caller receives the complete list of problems in one pass.

    Args:
        config: DraftConfig built by the caller

    Returns:
        ValidationResult with is_valid, human-readable errors and the
        matching InvalidReason codes (same order)
    """
    errors: list[str] = []
    reasons: list[InvalidReason] = []

    def fail(reason: InvalidReason, message: str) -> None:
        reasons.append(reason)
        errors.append(message)

    if config.total_teams < MIN_TOTAL_TEAMS:
        fail(InvalidReason.TOO_FEW_TEAMS, "Must have at least 2 teams")

    if config.lottery_teams < MIN_LOTTERY_TEAMS:
        fail(InvalidReason.NO_LOTTERY_TEAMS, "Must have at least 1 lottery team")

    if config.lottery_teams >= config.total_teams:
        fail(
            InvalidReason.LOTTERY_NOT_LESS_THAN_TOTAL,
            "Lottery teams must be less than total teams",
        )

    lottery = config.lottery_pool
    playoff = config.playoff_teams

    if len(lottery) != config.lottery_teams:
        fail(
            InvalidReason.LOTTERY_COUNT_MISMATCH,
            f"Expected {config.lottery_teams} lottery teams, found {len(lottery)}",
        )

    expected_playoff = config.total_teams - config.lottery_teams
    if len(playoff) != expected_playoff:
        fail(
            InvalidReason.PLAYOFF_COUNT_MISMATCH,
            f"Expected {expected_playoff} playoff teams, found {len(playoff)}",
        )

    # All collisions collapse into a single error
    names = [t.name.casefold() for t in config.teams]
    if len(set(names)) != len(names):
        fail(InvalidReason.DUPLICATE_TEAM_NAME, "Team names must be unique")

    total_pct = sum(float(t.percentage or 0) for t in lottery)
    if total_pct > MAX_TOTAL_PERCENTAGE:
        fail(
            InvalidReason.PERCENTAGE_OVER_100,
            f"Total lottery percentage ({format_number(total_pct)}%) cannot exceed 100%",
        )

    return ValidationResult(is_valid=not errors, errors=errors, reasons=reasons)


def validate_draft_config_simple(config: DraftConfig) -> bool:
    """Simple boolean validation."""
    return validate_draft_config(config).is_valid
