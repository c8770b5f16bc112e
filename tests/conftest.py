from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for package imports like `pipeline.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from processes.lottery.types import DraftConfig, Team  # noqa: E402


@pytest.fixture
def four_team_config() -> DraftConfig:
    """Two lottery teams at 75/25 followed by two playoff teams."""
    return DraftConfig(
        total_teams=4,
        lottery_teams=2,
        teams=[
            Team(id=1, name="A", percentage=75, is_lottery=True),
            Team(id=2, name="B", percentage=25, is_lottery=True),
            Team(id=3, name="C"),
            Team(id=4, name="D"),
        ],
    )


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"
