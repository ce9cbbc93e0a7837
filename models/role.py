from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import ApiModel, EntityId


class Role(ApiModel):
    """
    Represents a job role assessed by the survey (e.g., "Backend Engineer").
    Each role owns a versioned, ordered set of questions.
    """

    id: EntityId
    name: str
    description: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None)  # e.g., "Engineering", "Product"
    active: bool = Field(default=True)
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)


# Fields an administrator can edit; also the update payload shape
ROLE_EDITABLE_FIELDS = ("id", "name", "description", "category", "active")
