"""
Government Validation Service Tests
===================================

Tests for the validation service, the reference registry and the
display labels.

Author: PMIS Team
Version: 1.0.0
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock

import pytest

from shared.schemas.validation import (
    AddressModel,
    DiscrepancySeverity,
    Gender,
    PrisonerIdentityData,
    ValidationStatus,
)
from pmis.validation.engine import IdentityRecord
from pmis.validation.labels import severity_label, status_label
from pmis.validation.registry import InMemoryReferenceRegistry, SAMPLE_RECORDS
from pmis.validation.service import (
    GovernmentValidationService,
    full_name,
    identity_from_prisoner_data,
)


@pytest.fixture
def service():
    return GovernmentValidationService(InMemoryReferenceRegistry())


@pytest.fixture
def john_doe():
    return IdentityRecord(
        name="John Michael Doe",
        date_of_birth=date(1990, 5, 15),
        gender="male",
        address="123 Main Street",
    )


class TestIdentityFromPrisonerData:

    def test_full_name_skips_empty_parts(self):
        assert full_name("John", None, "Doe") == "John Doe"
        assert full_name("John", "  ", "Doe") == "John Doe"
        assert full_name(" John ", "Michael", "Doe ") == "John Michael Doe"

    def test_builds_complete_record(self):
        data = PrisonerIdentityData(
            first_name="Jane",
            last_name="Smith",
            date_of_birth=date(1985, 12, 3),
            gender=Gender.FEMALE,
            address=AddressModel(street=" 456 Park Avenue ", city="Mumbai"),
        )
        record = identity_from_prisoner_data(data)

        assert record.name == "Jane Smith"
        assert record.date_of_birth == date(1985, 12, 3)
        assert record.gender == "female"
        assert record.address == "456 Park Avenue"

    def test_missing_street_means_no_address(self):
        data = PrisonerIdentityData.model_validate({
            "firstName": "Jane",
            "lastName": "Smith",
            "dateOfBirth": "1985-12-03",
            "gender": "female",
            "address": {"city": "Mumbai"},
        })
        assert identity_from_prisoner_data(data).address is None


class TestGovernmentValidationService:
    """Tests for GovernmentValidationService.validate."""

    @pytest.mark.asyncio
    async def test_verified(self, service, john_doe):
        result = await service.validate(john_doe, "123456789012")

        assert result.status == ValidationStatus.VERIFIED
        assert result.success is True
        assert result.discrepancies == []
        assert result.reference == SAMPLE_RECORDS["123456789012"]

    @pytest.mark.asyncio
    async def test_discrepancies_found(self, service, john_doe):
        mismatched = IdentityRecord(
            name=john_doe.name,
            date_of_birth=john_doe.date_of_birth,
            gender="female",
        )
        result = await service.validate(mismatched, "123456789012")

        assert result.status == ValidationStatus.DISCREPANCIES_FOUND
        assert result.success is True
        assert len(result.discrepancies) == 1
        assert result.discrepancies[0].severity == DiscrepancySeverity.CRITICAL

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service, john_doe):
        result = await service.validate(john_doe, "000000000000")

        assert result.status == ValidationStatus.NOT_FOUND
        assert result.success is False
        assert result.message == "Government record not found"
        assert result.reference is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_reported_not_raised(self, john_doe):
        lookup = AsyncMock()
        lookup.fetch_reference.side_effect = ConnectionError("registry offline")
        service = GovernmentValidationService(lookup)

        result = await service.validate(john_doe, "123456789012")

        assert result.status == ValidationStatus.ERROR
        assert result.success is False
        assert result.message == "Validation service temporarily unavailable"
        lookup.fetch_reference.assert_awaited_once_with("123456789012")

    @pytest.mark.asyncio
    async def test_to_dict(self, service, john_doe):
        result = await service.validate(john_doe, "000000000000")
        assert result.to_dict() == {
            "success": False,
            "validation_status": "not_found",
            "discrepancies": [],
            "message": "Government record not found",
        }


class TestInMemoryReferenceRegistry:

    @pytest.mark.asyncio
    async def test_lookup_strips_whitespace(self):
        registry = InMemoryReferenceRegistry()
        record = await registry.fetch_reference(" 987654321098 ")
        assert record.name == "Jane Smith"

    @pytest.mark.asyncio
    async def test_custom_records(self):
        record = IdentityRecord(name="A B", date_of_birth="2000-01-01", gender="other")
        registry = InMemoryReferenceRegistry(records={"1": record})

        assert len(registry) == 1
        assert await registry.fetch_reference("1") is record
        assert await registry.fetch_reference("123456789012") is None

    @pytest.mark.asyncio
    async def test_latency_is_applied(self, monkeypatch):
        sleep = AsyncMock()
        monkeypatch.setattr(asyncio, "sleep", sleep)
        registry = InMemoryReferenceRegistry(latency_seconds=1.0)

        await registry.fetch_reference("123456789012")

        sleep.assert_awaited_once_with(1.0)


class TestLabels:

    @pytest.mark.parametrize("status,tone", [
        (ValidationStatus.VERIFIED, "success"),
        (ValidationStatus.DISCREPANCIES_FOUND, "warning"),
        (ValidationStatus.OVERRIDE_APPROVED, "info"),
        (ValidationStatus.NOT_FOUND, "danger"),
        (ValidationStatus.PENDING, "neutral"),
        ("something_else", "neutral"),
    ])
    def test_status_label(self, status, tone):
        assert status_label(status) == tone

    @pytest.mark.parametrize("severity,tone", [
        (DiscrepancySeverity.MINOR, "warning"),
        ("major", "caution"),
        (DiscrepancySeverity.CRITICAL, "danger"),
        ("unknown", "neutral"),
    ])
    def test_severity_label(self, severity, tone):
        assert severity_label(severity) == tone
