from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCodes(str, Enum):
    EMPTY_POOL = "EMPTY_POOL"
    ZERO_WEIGHT = "ZERO_WEIGHT"
    POOL_EXHAUSTED = "POOL_EXHAUSTED"


class GenerationError(Exception):
    def __init__(
        self,
        code: ErrorCodes,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class DraftConfigError(ValueError):
    """Raised when a config fails validation; carries every error found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Invalid draft config: " + "; ".join(errors))
        self.errors = list(errors)


class DraftStep(str, Enum):
    SETUP = "setup"
    ANIMATING = "animating"
    RESULTS = "results"


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return default


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    percentage: float | None = None  # only meaningful for lottery teams
    is_lottery: bool = False

    @property
    def weight(self) -> float:
        return max(0.0, float(self.percentage or 0.0))

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "name": self.name, "isLottery": self.is_lottery}
        if self.percentage is not None:
            d["percentage"] = self.percentage
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Team:
        pct = d.get("percentage")
        return cls(
            id=int(d["id"]),
            name=str(d["name"]),
            percentage=None if pct is None else float(pct),
            is_lottery=bool(_pick(d, "isLottery", "is_lottery", default=False)),
        )


@dataclass(frozen=True)
class DraftConfig:
    total_teams: int
    lottery_teams: int
    teams: tuple[Team, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the config stays immutable.
        object.__setattr__(self, "teams", tuple(self.teams))

    @property
    def lottery_pool(self) -> list[Team]:
        return [t for t in self.teams if t.is_lottery]

    @property
    def playoff_teams(self) -> list[Team]:
        return [t for t in self.teams if not t.is_lottery]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTeams": self.total_teams,
            "lotteryTeams": self.lottery_teams,
            "teams": [t.to_dict() for t in self.teams],
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> DraftConfig:
        return cls(
            total_teams=int(_pick(d, "totalTeams", "total_teams", default=0)),
            lottery_teams=int(_pick(d, "lotteryTeams", "lottery_teams", default=0)),
            teams=tuple(Team.from_dict(t) for t in d.get("teams") or []),
        )


@dataclass(frozen=True)
class DraftResult:
    order: tuple[Team, ...]
    timestamp: str
    seed: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "order", tuple(self.order))

    def lottery_picks(self, config: DraftConfig) -> list[Team]:
        return list(self.order[: config.lottery_teams])

    def playoff_picks(self, config: DraftConfig) -> list[Team]:
        return list(self.order[config.lottery_teams :])

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": [t.to_dict() for t in self.order],
            "timestamp": self.timestamp,
            "seed": self.seed,
        }
