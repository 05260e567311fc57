"""
Shared response shapes.

Field names on the wire are camelCase to match what the frontend
already sends and reads; Python attributes stay snake_case.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class CreatedRow(BaseModel):
    """Result of a single-row insert."""

    id: int = Field(..., description="Generated row id")
    changes: int = Field(..., description="Number of rows affected")


class SuccessResponse(BaseModel):
    success: bool = True
