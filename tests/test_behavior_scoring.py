"""
Behavior Scoring Tests
======================

Unit tests for the recency-weighted behavior score.

Author: PMIS Team
Version: 1.0.0
"""

import pytest

from shared.schemas.behavior import BehaviorType, IncidentSeverity
from pmis.scoring.behavior import (
    BehaviorIncident,
    NEUTRAL_SCORE,
    compute_behavior_score,
    incident_weight,
    recency_factor,
    tally_incidents,
)


def incident(behavior_type: str, severity: str) -> BehaviorIncident:
    return BehaviorIncident(behavior_type=behavior_type, severity=severity)


class TestIncidentWeights:
    """Tests for the signed weight table."""

    @pytest.mark.parametrize("severity,expected", [
        ("low", 2), ("medium", 4), ("high", 6), ("critical", 8),
    ])
    def test_positive_weights(self, severity, expected):
        assert incident_weight("positive", severity) == expected
        assert incident_weight("negative", severity) == -expected

    def test_neutral_weighs_nothing(self):
        for severity in IncidentSeverity:
            assert incident_weight(BehaviorType.NEUTRAL, severity) == 0

    def test_accepts_enum_members(self):
        assert incident_weight(BehaviorType.POSITIVE, IncidentSeverity.HIGH) == 6

    def test_unknown_combination_weighs_zero(self):
        assert incident_weight("heroic", "low") == 0
        assert incident_weight("positive", "extreme") == 0

    def test_recency_factor_bounds(self):
        """Newest keeps full weight; weights decay linearly toward the oldest."""
        assert recency_factor(0, 4) == 1.0
        assert recency_factor(2, 4) == 0.75
        assert recency_factor(3, 4) == pytest.approx(0.625)


class TestComputeBehaviorScore:
    """Tests for compute_behavior_score."""

    def test_empty_returns_neutral(self):
        assert compute_behavior_score([]) == NEUTRAL_SCORE == 50

    def test_single_incident_full_weight(self):
        assert compute_behavior_score([incident("positive", "critical")]) == 58
        assert compute_behavior_score([incident("negative", "medium")]) == 46

    def test_neutral_incidents_leave_score_unchanged(self):
        incidents = [incident("neutral", s.value) for s in IncidentSeverity]
        assert compute_behavior_score(incidents) == 50

    def test_floor_at_zero(self):
        incidents = [incident("negative", "critical") for _ in range(100)]
        assert compute_behavior_score(incidents) == 0

    def test_ceiling_at_hundred(self):
        incidents = [incident("positive", "critical") for _ in range(100)]
        assert compute_behavior_score(incidents) == 100

    def test_recent_incident_counts_more(self):
        """The same two incidents score differently depending on order."""
        recent_good = [incident("positive", "high"), incident("negative", "high")]
        recent_bad = [incident("negative", "high"), incident("positive", "high")]

        # 50 + 6*1.0 - 6*0.75 = 51.5 -> 52 ; 50 - 6 + 4.5 = 48.5 -> 49
        assert compute_behavior_score(recent_good) == 52
        assert compute_behavior_score(recent_bad) == 49
        assert compute_behavior_score(recent_good) > compute_behavior_score(recent_bad)

    def test_half_rounds_up(self):
        # 50 + 2*1.0 + 2*0.75 = 53.5
        incidents = [incident("positive", "low"), incident("positive", "low")]
        assert compute_behavior_score(incidents) == 54

    def test_result_is_always_in_range(self):
        mixed = [
            incident(t.value, s.value)
            for t in BehaviorType
            for s in IncidentSeverity
        ] * 5
        score = compute_behavior_score(mixed)
        assert isinstance(score, int)
        assert 0 <= score <= 100


class TestTallyIncidents:
    """Tests for incident counting."""

    def test_counts_by_type_and_severity(self):
        tally = tally_incidents([
            incident("positive", "low"),
            incident("negative", "critical"),
            incident("negative", "low"),
        ])

        assert tally.total == 3
        assert tally.by_type == {"positive": 1, "negative": 2, "neutral": 0}
        assert tally.by_severity == {"low": 2, "medium": 0, "high": 0, "critical": 1}

    def test_empty(self):
        tally = tally_incidents([])
        assert tally.total == 0
        assert sum(tally.by_type.values()) == 0
