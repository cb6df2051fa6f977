"""
Base schemas with standardized field types for consistent API responses.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import CURRENCY_CODE

MinorUnits = Annotated[
    int,
    Field(ge=0, description=f"Amount in minor currency units ({CURRENCY_CODE} kobo)"),
]


class StandardizedModel(BaseModel):
    """Base model with standardized JSON encoding"""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)


class ORMResponse(StandardizedModel):
    """Response model populated from SQLAlchemy instances."""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True, from_attributes=True)


class StrictModel(BaseModel):
    """Request bodies: forbid extras, validate defaults and assignments."""

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        validate_assignment=True,
        use_enum_values=True,
    )
