"""Shared field types for the Foodly data contracts."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

# Money travels as a JSON number; the backend parses it with Double.valueOf.
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class WireModel(BaseModel):
    """Base for models that use the backend's camelCase field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """Dump using the backend's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
