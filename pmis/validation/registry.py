"""
Government Reference Registry
=============================

Reference-data lookup used by the validation service.

The service depends only on the ``ReferenceLookup`` protocol. The
bundled ``InMemoryReferenceRegistry`` simulates the national registry
with a fixed set of records and an artificial response delay; a real
registry client would implement the same coroutine.

Author: PMIS Team
Version: 1.0.0
"""

import asyncio
import logging
from typing import Dict, Mapping, Optional, Protocol

from pmis.validation.engine import IdentityRecord


logger = logging.getLogger(__name__)


class ReferenceLookup(Protocol):
    """Capability to fetch a registry record by government ID number."""

    async def fetch_reference(self, id_number: str) -> Optional[IdentityRecord]:
        """Return the record, or None when the ID is unknown."""
        ...


SAMPLE_RECORDS: Dict[str, IdentityRecord] = {
    "123456789012": IdentityRecord(
        name="John Michael Doe",
        date_of_birth="1990-05-15",
        gender="male",
        address="123 Main Street, New Delhi, Delhi, 110001",
        father_name="Robert Doe",
        mother_name="Jane Doe",
    ),
    "987654321098": IdentityRecord(
        name="Jane Smith",
        date_of_birth="1985-12-03",
        gender="female",
        address="456 Park Avenue, Mumbai, Maharashtra, 400001",
        father_name="William Smith",
        mother_name="Mary Smith",
    ),
}


class InMemoryReferenceRegistry:
    """
    Registry backed by an in-memory mapping.

    Attributes:
        latency_seconds: Delay applied to every lookup
    """

    def __init__(
        self,
        records: Optional[Mapping[str, IdentityRecord]] = None,
        latency_seconds: float = 0.0,
    ):
        self._records: Dict[str, IdentityRecord] = dict(
            SAMPLE_RECORDS if records is None else records
        )
        self.latency_seconds = latency_seconds

    async def fetch_reference(self, id_number: str) -> Optional[IdentityRecord]:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        record = self._records.get(id_number.strip())
        logger.debug(f"Registry lookup for {id_number}: {'hit' if record else 'miss'}")
        return record

    def __len__(self) -> int:
        return len(self._records)
