"""Tests for draft config validation rules."""

from processes.lottery.types import DraftConfig, Team
from validators import InvalidReason, ValidationResult, validate_draft_config
from validators.draft_rules import format_number, validate_draft_config_simple


def sample_teams() -> list[Team]:
    """Build a valid 6-team league: 3 lottery, 3 playoff."""
    return [
        Team(id=1, name="Team A", percentage=50, is_lottery=True),
        Team(id=2, name="Team B", percentage=30, is_lottery=True),
        Team(id=3, name="Team C", percentage=20, is_lottery=True),
        Team(id=4, name="Team D"),
        Team(id=5, name="Team E"),
        Team(id=6, name="Team F"),
    ]


def valid_config() -> DraftConfig:
    return DraftConfig(total_teams=6, lottery_teams=3, teams=sample_teams())


class TestValidConfig:
    """Test cases for valid configs."""

    def test_valid_config_passes(self):
        result = validate_draft_config(valid_config())

        assert result.is_valid
        assert result.errors == []
        assert result.reasons == []

    def test_percentages_may_sum_below_100(self):
        teams = sample_teams()
        teams[0] = Team(id=1, name="Team A", percentage=10, is_lottery=True)
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=teams)

        assert validate_draft_config_simple(config)

    def test_percentages_exactly_100_pass(self):
        assert validate_draft_config(valid_config()).is_valid


class TestTeamCounts:
    """Test cases for total and lottery team count rules."""

    def test_single_team_fails_minimum(self):
        config = DraftConfig(
            total_teams=1,
            lottery_teams=1,
            teams=[Team(id=1, name="Solo", percentage=100, is_lottery=True)],
        )

        result = validate_draft_config(config)

        assert not result.is_valid
        assert "Must have at least 2 teams" in result.errors
        assert InvalidReason.TOO_FEW_TEAMS in result.reasons
        # 1 >= 1 also breaks the lottery < total rule
        assert "Lottery teams must be less than total teams" in result.errors

    def test_zero_lottery_teams_fails(self):
        config = DraftConfig(
            total_teams=2,
            lottery_teams=0,
            teams=[Team(id=1, name="X"), Team(id=2, name="Y")],
        )

        result = validate_draft_config(config)

        assert not result.is_valid
        assert result.errors == ["Must have at least 1 lottery team"]

    def test_all_lottery_teams_fails(self):
        teams = [Team(id=i, name=f"T{i}", percentage=25, is_lottery=True) for i in range(1, 5)]
        config = DraftConfig(total_teams=4, lottery_teams=4, teams=teams)

        result = validate_draft_config(config)

        assert not result.is_valid
        assert InvalidReason.LOTTERY_NOT_LESS_THAN_TOTAL in result.reasons
        assert "Lottery teams must be less than total teams" in result.errors

    def test_lottery_count_mismatch_reports_counts(self):
        config = DraftConfig(total_teams=6, lottery_teams=2, teams=sample_teams())

        result = validate_draft_config(config)

        assert not result.is_valid
        assert "Expected 2 lottery teams, found 3" in result.errors
        assert "Expected 4 playoff teams, found 3" in result.errors
        assert InvalidReason.LOTTERY_COUNT_MISMATCH in result.reasons
        assert InvalidReason.PLAYOFF_COUNT_MISMATCH in result.reasons

    def test_missing_playoff_team_fails(self):
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=sample_teams()[:5])

        result = validate_draft_config(config)

        assert result.errors == ["Expected 3 playoff teams, found 2"]


class TestTeamNames:
    """Test cases for name uniqueness."""

    def test_case_insensitive_duplicate_fails(self):
        config = DraftConfig(
            total_teams=2,
            lottery_teams=1,
            teams=[
                Team(id=1, name="Team A", percentage=50, is_lottery=True),
                Team(id=2, name="team a"),
            ],
        )

        result = validate_draft_config(config)

        assert not result.is_valid
        assert result.errors == ["Team names must be unique"]
        assert result.reasons == [InvalidReason.DUPLICATE_TEAM_NAME]

    def test_many_duplicates_collapse_to_one_error(self):
        teams = sample_teams()
        teams[1] = Team(id=2, name="TEAM A", percentage=30, is_lottery=True)
        teams[4] = Team(id=5, name="team d")
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=teams)

        result = validate_draft_config(config)

        assert result.errors.count("Team names must be unique") == 1


class TestPercentages:
    """Test cases for the lottery percentage total."""

    def test_total_over_100_fails(self):
        teams = sample_teams()
        teams[0] = Team(id=1, name="Team A", percentage=60, is_lottery=True)
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=teams)

        result = validate_draft_config(config)

        assert not result.is_valid
        assert result.errors == ["Total lottery percentage (110%) cannot exceed 100%"]

    def test_missing_percentages_count_as_zero(self):
        teams = sample_teams()
        teams[2] = Team(id=3, name="Team C", is_lottery=True)
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=teams)

        assert validate_draft_config(config).is_valid

    def test_playoff_percentages_ignored(self):
        teams = sample_teams()
        teams[3] = Team(id=4, name="Team D", percentage=99)
        config = DraftConfig(total_teams=6, lottery_teams=3, teams=teams)

        assert validate_draft_config(config).is_valid

    def test_total_uses_raw_percentages(self):
        config = DraftConfig(
            total_teams=3,
            lottery_teams=2,
            teams=[
                Team(id=1, name="Team A", percentage=150, is_lottery=True),
                Team(id=2, name="Team B", percentage=-60, is_lottery=True),
                Team(id=3, name="Team C"),
            ],
        )

        result = validate_draft_config(config)

        # 150 + -60 = 90, not 150 with the negative clamped away
        assert InvalidReason.PERCENTAGE_OVER_100 not in result.reasons
        assert result.is_valid

    def test_negative_percentage_still_counts_toward_total(self):
        config = DraftConfig(
            total_teams=3,
            lottery_teams=2,
            teams=[
                Team(id=1, name="Team A", percentage=130, is_lottery=True),
                Team(id=2, name="Team B", percentage=-10, is_lottery=True),
                Team(id=3, name="Team C"),
            ],
        )

        result = validate_draft_config(config)

        assert result.errors == ["Total lottery percentage (120%) cannot exceed 100%"]

    def test_fractional_total_formatting(self):
        assert format_number(100.5) == "100.5"
        assert format_number(110.0) == "110"


class TestMultipleErrors:
    """All broken rules are reported together, in rule order."""

    def test_multiple_errors_reported(self):
        config = DraftConfig(
            total_teams=3,
            lottery_teams=2,
            teams=[
                Team(id=1, name="Team A", percentage=80, is_lottery=True),
                Team(id=2, name="team a", percentage=40, is_lottery=True),
                Team(id=3, name="Team C", is_lottery=True),
            ],
        )

        result = validate_draft_config(config)

        assert not result.is_valid
        assert result.errors == [
            "Expected 2 lottery teams, found 3",
            "Expected 1 playoff teams, found 0",
            "Team names must be unique",
            "Total lottery percentage (120%) cannot exceed 100%",
        ]
        assert len(result.reasons) == len(result.errors)


class TestValidationResult:
    """Test cases for ValidationResult structure and purity."""

    def test_result_structure(self):
        result = validate_draft_config(valid_config())

        assert isinstance(result, ValidationResult)
        assert result.is_valid is True
        assert isinstance(result.errors, list)
        assert isinstance(result.reasons, list)

    def test_validate_is_idempotent(self):
        config = DraftConfig(
            total_teams=1,
            lottery_teams=1,
            teams=[Team(id=1, name="Solo", percentage=150, is_lottery=True)],
        )

        first = validate_draft_config(config)
        second = validate_draft_config(config)

        assert first == second
