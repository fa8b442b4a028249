"""
PMIS Exceptions
===============

Service-layer error types. Route handlers translate these into HTTP
responses; engines never raise them.

Author: PMIS Team
Version: 1.0.0
"""


class PMISError(Exception):
    """Base class for PMIS service errors."""


class NotFoundError(PMISError):
    """A referenced prisoner, log, rating or record does not exist."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class ValidationError(PMISError):
    """Input rejected before it reaches an engine."""


class ConflictError(PMISError):
    """A unique value (e.g. prisoner number) is already taken."""
