"""
Schema Base Model
=================

Common Pydantic base for all PMIS wire models.

Field names are snake_case in Python and camelCase on the wire, so
clients keep sending ``prisonerId`` / ``workEthic`` while service code
reads ``prisoner_id`` / ``work_ethic``.

Author: PMIS Team
Version: 1.0.0
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
