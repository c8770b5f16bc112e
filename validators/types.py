"""Types for draft configuration validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvalidReason(Enum):
    """Enumerated error codes for draft config validation failures."""

    TOO_FEW_TEAMS = "too_few_teams"
    NO_LOTTERY_TEAMS = "no_lottery_teams"
    LOTTERY_NOT_LESS_THAN_TOTAL = "lottery_not_less_than_total"
    LOTTERY_COUNT_MISMATCH = "lottery_count_mismatch"
    PLAYOFF_COUNT_MISMATCH = "playoff_count_mismatch"
    DUPLICATE_TEAM_NAME = "duplicate_team_name"
    PERCENTAGE_OVER_100 = "percentage_over_100"


@dataclass
class ValidationResult:
    """Result of config validation: messages for people, reasons for code."""

    is_valid: bool
    errors: list[str] = None  # type: ignore[assignment]
    reasons: list[InvalidReason] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.errors is None:
            self.errors = []
        if self.reasons is None:
            self.reasons = []


MAX_TOTAL_PERCENTAGE = 100.0
MIN_TOTAL_TEAMS = 2
MIN_LOTTERY_TEAMS = 1
