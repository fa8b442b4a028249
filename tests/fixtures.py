"""
Test Fixtures for PMIS
======================

Shared request payloads and timestamps for API and service tests:
    - A prisoner matching the first sample registry record
    - Identity payloads for government validation
    - Rating payloads for trend scenarios

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime, timedelta, timezone

NOW = datetime.now(timezone.utc)
IST = timezone(timedelta(hours=5, minutes=30))

# Same day, 90 minutes apart. The older instant is written in +05:30, so its
# wall-clock text sorts after the newer one.
NEWER_UTC = NOW - timedelta(days=1)
OLDER_IST = (NEWER_UTC - timedelta(minutes=90)).astimezone(IST)


def days_ago(days: int) -> str:
    """ISO timestamp ``days`` days before the module load time."""
    return (NOW - timedelta(days=days)).isoformat()


# =============================================================================
# Prisoners
# =============================================================================

JOHN_DOE = {
    "prisonerNumber": "P-1001",
    "firstName": "John",
    "middleName": "Michael",
    "lastName": "Doe",
    "dateOfBirth": "1990-05-15",
    "gender": "male",
    "address": {
        "street": "123 Main Street",
        "city": "New Delhi",
        "state": "Delhi",
        "pincode": "110001",
    },
    "governmentIdNumber": "123456789012",
    "securityLevel": "medium",
}

JANE_SMITH = {
    "prisonerNumber": "P-1002",
    "firstName": "Jane",
    "lastName": "Smith",
    "dateOfBirth": "1985-12-03",
    "gender": "female",
    "address": {"street": "456 Park Avenue", "city": "Mumbai"},
    "governmentIdNumber": "987654321098",
    "securityLevel": "minimum",
}


# =============================================================================
# Government validation
# =============================================================================

JOHN_DOE_IDENTITY = {
    "firstName": "John",
    "middleName": "Michael",
    "lastName": "Doe",
    "dateOfBirth": "1990-05-15",
    "gender": "male",
    "address": {"street": "123 Main Street"},
}

JOHN_DOE_WRONG_GENDER = {**JOHN_DOE_IDENTITY, "gender": "female"}

UNKNOWN_ID_NUMBER = "000000000000"


# =============================================================================
# Ratings
# =============================================================================

def rating_payload(prisoner_id: str, value: int, days: int = 1, **overrides) -> dict:
    """Rating with every category set to ``value``."""
    payload = {
        "prisonerId": prisoner_id,
        "cooperation": value,
        "discipline": value,
        "respect": value,
        "workEthic": value,
        "notes": "",
        "period": "monthly",
        "ratingDate": days_ago(days),
    }
    payload.update(overrides)
    return payload


def behavior_payload(
    prisoner_id: str,
    behavior_type: str = "positive",
    severity: str = "medium",
    days: int = 1,
) -> dict:
    return {
        "prisonerId": prisoner_id,
        "behaviorType": behavior_type,
        "severity": severity,
        "description": f"{behavior_type} {severity} incident",
        "location": "Block A",
        "witnesses": ["Officer Rao"],
        "date": days_ago(days),
    }
