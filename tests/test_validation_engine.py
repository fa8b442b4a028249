"""
Government Discrepancy Engine Tests
===================================

Unit tests for field-by-field identity comparison.

Author: PMIS Team
Version: 1.0.0
"""

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from shared.schemas.validation import DiscrepancySeverity
from pmis.validation.engine import (
    IdentityRecord,
    address_overlap,
    addresses_match,
    calendar_date,
    compare_identity,
    name_discrepancy_severity,
    normalize_name,
)
from pmis.validation.registry import SAMPLE_RECORDS


@pytest.fixture
def reference():
    """Registry record for John Michael Doe."""
    return SAMPLE_RECORDS["123456789012"]


def submitted(**overrides) -> IdentityRecord:
    fields = {
        "name": "John Michael Doe",
        "date_of_birth": date(1990, 5, 15),
        "gender": "male",
        "address": None,
    }
    fields.update(overrides)
    return IdentityRecord(**fields)


class TestNormalization:

    def test_normalize_name(self):
        assert normalize_name("  John   MICHAEL  Doe ") == "john michael doe"
        assert normalize_name("Mary-Jane O'Brien") == "maryjane obrien"

    def test_punctuation_between_spaces_survives_as_double_space(self):
        assert normalize_name("John - Doe") == "john  doe"
        assert normalize_name("John - Doe") != normalize_name("John Doe")

    def test_calendar_date_drops_time(self):
        assert calendar_date(date(1990, 5, 15)) == "1990-05-15"
        assert calendar_date(datetime(1990, 5, 15, 23, 59, tzinfo=timezone.utc)) == "1990-05-15"
        assert calendar_date("1990-05-15T00:00:00Z") == "1990-05-15"
        assert calendar_date(None) is None


class TestNameSeverity:

    def test_first_and_last_match_is_minor(self):
        assert name_discrepancy_severity("John M Doe", "John Michael Doe") == DiscrepancySeverity.MINOR

    def test_only_last_matches_is_major(self):
        assert name_discrepancy_severity("Jon Doe", "John Doe") == DiscrepancySeverity.MAJOR

    def test_only_first_matches_is_major(self):
        assert name_discrepancy_severity("John Smith", "John Doe") == DiscrepancySeverity.MAJOR

    def test_nothing_matches_is_critical(self):
        assert name_discrepancy_severity("Ravi Kumar", "John Doe") == DiscrepancySeverity.CRITICAL


class TestAddressMatching:

    def test_submitted_tokens_found_in_reference(self, reference):
        assert address_overlap("123 main street", reference.address) == 1.0
        assert addresses_match("123 main street", reference.address)

    def test_punctuation_is_ignored(self, reference):
        assert addresses_match("123, Main Street.", reference.address)

    def test_below_threshold(self, reference):
        # 2 of 3 tokens present
        assert address_overlap("123 Main Road", reference.address) == pytest.approx(2 / 3)
        assert not addresses_match("123 Main Road", reference.address)

    def test_empty_submitted_address_matches(self, reference):
        assert address_overlap("  ", reference.address) == 1.0


class TestCompareIdentity:
    """Tests for compare_identity."""

    def test_exact_match_has_no_discrepancies(self, reference):
        assert compare_identity(submitted(address="123 main street"), reference) == []

    def test_name_comparison_ignores_case_and_spacing(self, reference):
        assert compare_identity(submitted(name="john  michael DOE"), reference) == []

    def test_spaced_hyphen_is_a_minor_name_mismatch(self, reference):
        john_doe = replace(reference, name="John Doe")

        discrepancies = compare_identity(submitted(name="John - Doe"), john_doe)

        assert [d.field for d in discrepancies] == ["name"]
        assert discrepancies[0].severity == DiscrepancySeverity.MINOR

    def test_name_mismatch(self, reference):
        discrepancies = compare_identity(submitted(name="Jon Doe"), reference)

        assert len(discrepancies) == 1
        d = discrepancies[0]
        assert d.field == "name"
        assert d.provided_value == "Jon Doe"
        assert d.government_value == "John Michael Doe"
        assert d.severity == DiscrepancySeverity.MAJOR
        assert d.notes == "Name does not match government records"

    def test_gender_mismatch_is_single_critical(self, reference):
        discrepancies = compare_identity(submitted(gender="female"), reference)

        assert len(discrepancies) == 1
        assert discrepancies[0].field == "gender"
        assert discrepancies[0].severity == DiscrepancySeverity.CRITICAL

    def test_date_of_birth_mismatch_is_major(self, reference):
        discrepancies = compare_identity(submitted(date_of_birth=date(1990, 5, 16)), reference)

        assert len(discrepancies) == 1
        d = discrepancies[0]
        assert d.field == "dateOfBirth"
        assert d.provided_value == "1990-05-16"
        assert d.government_value == "1990-05-15"
        assert d.severity == DiscrepancySeverity.MAJOR

    def test_date_of_birth_time_component_ignored(self, reference):
        born = datetime(1990, 5, 15, 18, 30, tzinfo=timezone.utc)
        assert compare_identity(submitted(date_of_birth=born), reference) == []

    def test_address_mismatch_is_minor(self, reference):
        discrepancies = compare_identity(submitted(address="9 Harbour Road Chennai"), reference)

        assert len(discrepancies) == 1
        assert discrepancies[0].field == "address"
        assert discrepancies[0].severity == DiscrepancySeverity.MINOR

    def test_address_skipped_when_not_submitted(self, reference):
        assert compare_identity(submitted(address=None), reference) == []

    def test_multiple_discrepancies_in_field_order(self, reference):
        discrepancies = compare_identity(
            submitted(
                name="Ravi Kumar",
                date_of_birth=date(1980, 1, 1),
                gender="female",
                address="Nowhere Lane",
            ),
            reference,
        )

        assert [d.field for d in discrepancies] == ["name", "dateOfBirth", "gender", "address"]
        assert [d.severity for d in discrepancies] == [
            DiscrepancySeverity.CRITICAL,
            DiscrepancySeverity.MAJOR,
            DiscrepancySeverity.CRITICAL,
            DiscrepancySeverity.MINOR,
        ]

    def test_discrepancy_to_dict(self, reference):
        d = compare_identity(submitted(gender="other"), reference)[0]
        assert d.to_dict() == {
            "field": "gender",
            "provided_value": "other",
            "government_value": "male",
            "severity": "critical",
            "notes": "Gender does not match government records",
        }
