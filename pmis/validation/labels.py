"""
Display labels for validation states.

Maps validation statuses and discrepancy severities to presentation
tones the UI renders as colors.
"""

from typing import Any, Dict

from shared.schemas.validation import DiscrepancySeverity, ValidationStatus

NEUTRAL_TONE = "neutral"

STATUS_TONES: Dict[str, str] = {
    ValidationStatus.VERIFIED.value: "success",
    ValidationStatus.DISCREPANCIES_FOUND.value: "warning",
    ValidationStatus.OVERRIDE_APPROVED.value: "info",
    ValidationStatus.NOT_FOUND.value: "danger",
}

SEVERITY_TONES: Dict[str, str] = {
    DiscrepancySeverity.MINOR.value: "warning",
    DiscrepancySeverity.MAJOR.value: "caution",
    DiscrepancySeverity.CRITICAL.value: "danger",
}


def status_label(status: Any) -> str:
    return STATUS_TONES.get(getattr(status, "value", status), NEUTRAL_TONE)


def severity_label(severity: Any) -> str:
    return SEVERITY_TONES.get(getattr(severity, "value", severity), NEUTRAL_TONE)
