"""
PMIS Behavior Scoring Engine
============================

Converts a prisoner's recorded behavior incidents into a bounded
0-100 behavior score.

Scoring Rules:
    - Start from the neutral midpoint of 50.
    - Every incident adds a signed weight looked up by
      (behavior type, severity).
    - Incidents are supplied newest first; the incident at position i of
      n is scaled by ``1 - (i / n) * 0.5`` so the newest counts fully and
      the oldest counts close to half.
    - The total is rounded half-up and clamped to [0, 100].

The engine is stateless and performs no I/O. Callers are responsible
for selecting and ordering the incidents (e.g. "last 50 logs").

Author: PMIS Team
Version: 1.0.0
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from shared.schemas.behavior import BehaviorType, IncidentSeverity


logger = logging.getLogger(__name__)


NEUTRAL_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# Oldest incident keeps (1 - RECENCY_DECAY) of its weight
RECENCY_DECAY = 0.5

INCIDENT_WEIGHTS: Dict[str, Dict[str, int]] = {
    BehaviorType.POSITIVE.value: {
        IncidentSeverity.LOW.value: 2,
        IncidentSeverity.MEDIUM.value: 4,
        IncidentSeverity.HIGH.value: 6,
        IncidentSeverity.CRITICAL.value: 8,
    },
    BehaviorType.NEGATIVE.value: {
        IncidentSeverity.LOW.value: -2,
        IncidentSeverity.MEDIUM.value: -4,
        IncidentSeverity.HIGH.value: -6,
        IncidentSeverity.CRITICAL.value: -8,
    },
    BehaviorType.NEUTRAL.value: {
        IncidentSeverity.LOW.value: 0,
        IncidentSeverity.MEDIUM.value: 0,
        IncidentSeverity.HIGH.value: 0,
        IncidentSeverity.CRITICAL.value: 0,
    },
}


@dataclass(frozen=True)
class BehaviorIncident:
    """
    Minimal view of a behavior log needed for scoring.

    Any object exposing ``behavior_type`` and ``severity`` attributes
    (ORM rows, API models) can be scored directly.
    """
    behavior_type: str
    severity: str
    date: Optional[datetime] = None


@dataclass
class BehaviorTally:
    """Incident counts by type and severity."""
    total: int = 0
    by_type: Dict[str, int] = field(
        default_factory=lambda: {t.value: 0 for t in BehaviorType}
    )
    by_severity: Dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in IncidentSeverity}
    )


def _enum_value(value: Any) -> str:
    """Accept both enum members and raw strings."""
    return getattr(value, "value", value)


def incident_weight(behavior_type: Any, severity: Any) -> int:
    """
    Signed weight for one incident.

    Unknown type/severity combinations weigh 0.
    """
    weights = INCIDENT_WEIGHTS.get(_enum_value(behavior_type), {})
    return weights.get(_enum_value(severity), 0)


def recency_factor(position: int, total: int) -> float:
    """Weight multiplier for the incident at ``position`` (0 = newest)."""
    return 1 - (position / total) * RECENCY_DECAY


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_behavior_score(incidents: Sequence[Any]) -> int:
    """
    Compute the behavior score for incidents ordered newest first.

    Args:
        incidents: Sequence of objects with ``behavior_type`` and
            ``severity`` attributes, newest first

    Returns:
        Integer score in [0, 100]; 50 for an empty sequence
    """
    total = len(incidents)
    if total == 0:
        return NEUTRAL_SCORE

    score = float(NEUTRAL_SCORE)
    for position, incident in enumerate(incidents):
        weight = incident_weight(incident.behavior_type, incident.severity)
        score += weight * recency_factor(position, total)

    result = max(MIN_SCORE, min(MAX_SCORE, _round_half_up(score)))
    logger.debug(f"Behavior score over {total} incidents: {result}")
    return result


def tally_incidents(incidents: Sequence[Any]) -> BehaviorTally:
    """Count incidents by behavior type and by severity."""
    tally = BehaviorTally(total=len(incidents))
    for incident in incidents:
        behavior_type = _enum_value(incident.behavior_type)
        severity = _enum_value(incident.severity)
        if behavior_type in tally.by_type:
            tally.by_type[behavior_type] += 1
        if severity in tally.by_severity:
            tally.by_severity[severity] += 1
    return tally
