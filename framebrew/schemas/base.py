"""Shared base for API schemas.

Schemas use snake_case attribute names in Python and camelCase keys on the
wire, and can be built straight from ORM instances.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json_dict(self) -> dict:
        """Dump with wire aliases and JSON-safe values."""
        return self.model_dump(mode="json", by_alias=True)
