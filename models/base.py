"""
Shared base for client-side models.

The backend speaks camelCase JSON; models expose snake_case attributes and
accept either spelling on input.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Admin endpoints use numeric ids, the public catalog uses strings
EntityId = Union[int, str]


class ApiModel(BaseModel):
    """Base model for entities received from or sent to the backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self, **kwargs) -> dict:
        """JSON-ready dict using the backend's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)
