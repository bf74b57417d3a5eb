"""
Shared model base — camelCase wire names over snake_case attributes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase JSON, accepts either casing on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
