"""
Rating Summary Tests
====================

Unit tests for overall rating derivation and the trend engine.

Author: PMIS Team
Version: 1.0.0
"""

from itertools import product

import pytest

from shared.schemas.ratings import Trend
from pmis.scoring.ratings import (
    RatingRecord,
    classify_trend,
    compute_overall_rating,
    compute_rating_summary,
    out_of_range_categories,
    rolling_overall_rating,
)


def uniform(value: int) -> RatingRecord:
    return RatingRecord.from_categories(value, value, value, value)


class TestOverallRating:
    """Tests for the derived overall rating."""

    def test_mean_of_categories(self):
        assert compute_overall_rating(4, 3, 5, 4) == 4.0
        assert compute_overall_rating(1, 2, 2, 2) == 1.75

    def test_rounded_to_two_decimals(self):
        assert compute_overall_rating(5, 4, 4, 4) == 4.25
        assert compute_overall_rating(3, 3, 3, 4) == 3.25

    @pytest.mark.parametrize("categories", list(product(range(1, 6), repeat=4)))
    def test_record_overall_matches_categories(self, categories):
        record = RatingRecord.from_categories(*categories)

        assert record.overall_rating == round(sum(categories) / 4, 2)
        assert 1 <= record.overall_rating <= 5
        assert record.overall_rating * 4 == sum(categories)

    def test_out_of_range_categories(self):
        assert out_of_range_categories({"cooperation": 0, "respect": 6, "discipline": 3}) == [
            "cooperation",
            "respect",
        ]
        assert out_of_range_categories({"cooperation": None, "work_ethic": 5}) == []


class TestTrendClassification:

    @pytest.mark.parametrize("diff,expected", [
        (0.31, Trend.IMPROVING),
        (0.3, Trend.NEUTRAL),
        (0.0, Trend.NEUTRAL),
        (-0.3, Trend.NEUTRAL),
        (-0.31, Trend.DECLINING),
    ])
    def test_threshold(self, diff, expected):
        assert classify_trend(diff) == expected


class TestComputeRatingSummary:
    """Tests for compute_rating_summary (ratings newest first)."""

    def test_empty_is_neutral_with_zero_averages(self):
        summary = compute_rating_summary([])

        assert summary.trend == Trend.NEUTRAL
        assert summary.total_ratings == 0
        assert summary.average_overall == 0
        assert summary.trend_percentage == 0
        assert summary.highest == 0
        assert summary.lowest == 0
        assert all(v == 0 for v in summary.category_averages.values())

    def test_declining(self):
        """Oldest [5,5,5,5] then newest [1,1,1,1]."""
        summary = compute_rating_summary([uniform(1), uniform(5)])

        assert summary.trend == Trend.DECLINING
        assert summary.trend_percentage == -80.0
        assert summary.highest == 5.0
        assert summary.lowest == 1.0
        assert summary.average_overall == 3.0

    def test_improving(self):
        summary = compute_rating_summary([uniform(5), uniform(1)])

        assert summary.trend == Trend.IMPROVING
        assert summary.trend_percentage == 80.0

    def test_single_rating_is_always_neutral(self):
        """Both windows hold the same record, so there is no trend signal."""
        for value in range(1, 6):
            summary = compute_rating_summary([uniform(value)])
            assert summary.trend == Trend.NEUTRAL
            assert summary.trend_percentage == 0.0

    def test_two_ratings_compare_newest_with_oldest(self):
        summary = compute_rating_summary([uniform(3), uniform(2)])

        assert summary.trend == Trend.IMPROVING
        assert summary.trend_percentage == 20.0

    def test_windows_use_a_third_of_the_ratings(self):
        # n=6 -> window of 2: recent [4, 4] vs older [2, 2]
        ratings = [uniform(v) for v in (4, 4, 3, 3, 2, 2)]
        summary = compute_rating_summary(ratings)

        assert summary.trend == Trend.IMPROVING
        assert summary.trend_percentage == 40.0
        assert summary.average_overall == 3.0

    def test_small_change_is_neutral(self):
        ratings = [
            RatingRecord.from_categories(4, 4, 4, 3),
            RatingRecord.from_categories(4, 4, 4, 4),
        ]
        summary = compute_rating_summary(ratings)

        assert summary.trend == Trend.NEUTRAL
        assert summary.trend_percentage == -5.0

    def test_category_averages(self):
        ratings = [
            RatingRecord.from_categories(5, 4, 3, 2),
            RatingRecord.from_categories(4, 4, 4, 4),
            RatingRecord.from_categories(3, 3, 3, 3),
        ]
        summary = compute_rating_summary(ratings)

        assert summary.category_averages == {
            "cooperation": 4.0,
            "discipline": 3.67,
            "respect": 3.33,
            "work_ethic": 3.0,
        }

    def test_to_dict_keys(self):
        data = compute_rating_summary([uniform(4)]).to_dict()
        assert set(data) == {
            "total_ratings",
            "average_overall",
            "category_averages",
            "trend",
            "trend_percentage",
            "highest",
            "lowest",
        }


class TestRollingOverallRating:

    def test_mean_of_window(self):
        assert rolling_overall_rating([uniform(5), uniform(4), uniform(2)]) == 3.67

    def test_empty_is_zero(self):
        assert rolling_overall_rating([]) == 0
