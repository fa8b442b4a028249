"""
Configuration and Application Factory Tests
===========================================

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from pmis.config import Settings
from pmis.api.auth import create_access_token, verify_token
from pmis.db.base import UTCDateTime, months_ago
from pmis.exceptions import NotFoundError


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.api_port == 5000
        assert settings.behavior_score_window == 50
        assert settings.prisoner_rating_window == 10
        assert settings.summary_default_months == 6
        assert settings.database_url.startswith("sqlite+aiosqlite")

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PMIS_API_PORT", "8080")
        monkeypatch.setenv("PMIS_REFERENCE_LOOKUP_LATENCY_SECONDS", "0")

        settings = Settings(_env_file=None)

        assert settings.api_port == 8080
        assert settings.reference_lookup_latency_seconds == 0.0

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_allowed_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestTokens:

    def test_round_trip(self, test_settings):
        token = create_access_token("warden-7", test_settings, role="warden", email="w@prison.test")
        payload = verify_token(token, test_settings)

        assert payload["sub"] == "warden-7"
        assert payload["role"] == "warden"
        assert payload["email"] == "w@prison.test"

    def test_expired_token_rejected(self, test_settings):
        token = create_access_token("staff-1", test_settings, expires_minutes=-1)

        with pytest.raises(HTTPException) as exc_info:
            verify_token(token, test_settings)
        assert exc_info.value.status_code == 401

    def test_wrong_secret_rejected(self, test_settings):
        other = Settings(_env_file=None, jwt_secret="another-secret-key-that-is-long-enough")
        token = create_access_token("staff-1", other)

        with pytest.raises(HTTPException):
            verify_token(token, test_settings)


class TestMonthsAgo:

    def test_same_day(self):
        now = datetime(2024, 8, 15, 12, tzinfo=timezone.utc)
        assert months_ago(6, now) == datetime(2024, 2, 15, 12, tzinfo=timezone.utc)

    def test_clamps_to_month_end(self):
        now = datetime(2024, 5, 31, tzinfo=timezone.utc)
        assert months_ago(3, now) == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_crosses_year(self):
        now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        assert months_ago(3, now) == datetime(2023, 10, 10, tzinfo=timezone.utc)


class TestUTCDateTime:

    def test_offset_is_converted_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        value = datetime(2026, 10, 1, 10, 0, tzinfo=ist)

        stored = UTCDateTime().process_bind_param(value, None)

        assert stored == datetime(2026, 10, 1, 4, 30, tzinfo=timezone.utc)
        assert stored.utcoffset() == timedelta(0)

    def test_naive_values_are_taken_as_utc(self):
        column = UTCDateTime()

        assert column.process_bind_param(datetime(2026, 10, 1, 6), None) == datetime(
            2026, 10, 1, 6, tzinfo=timezone.utc
        )
        assert column.process_result_value(datetime(2026, 10, 1, 6), None).tzinfo == timezone.utc

    def test_none_passes_through(self):
        assert UTCDateTime().process_bind_param(None, None) is None
        assert UTCDateTime().process_result_value(None, None) is None


class TestExceptions:

    def test_not_found_message(self):
        error = NotFoundError("Rating", "r-1")
        assert str(error) == "Rating not found: r-1"
        assert error.kind == "Rating"
