from pydantic import Field
from typing import Optional, List
from datetime import datetime

from models.base import ApiModel, EntityId
from models.role import Role
from models.question import Question


class RoleQuestion(ApiModel):
    """A question as included in one role version"""

    id: Optional[EntityId] = Field(default=None)
    question: Question


class RoleVersion(ApiModel):
    """
    Immutable snapshot of a role's question set.
    Versions are append-only; exactly one per role is active.
    """

    id: EntityId
    role: Optional[Role] = Field(default=None)
    version_number: int
    active: bool = Field(default=False)
    created_at: Optional[datetime] = Field(default=None)
    questions: List[RoleQuestion] = Field(default_factory=list)
