from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from models.base import ApiModel, EntityId


class QuestionType(str, Enum):
    """How a question is answered"""
    LIKERT = "LIKERT"
    MULTIPLE = "MULTIPLE"
    TEXT = "TEXT"

    @classmethod
    def _missing_(cls, value):
        # The public assessment endpoints spell the types out in full
        aliases = {"LIKERT_SCALE": cls.LIKERT, "MULTIPLE_CHOICE": cls.MULTIPLE}
        if isinstance(value, str):
            return aliases.get(value.upper())
        return None

    @property
    def needs_options(self) -> bool:
        return self in (QuestionType.LIKERT, QuestionType.MULTIPLE)

    @property
    def is_numeric(self) -> bool:
        """Numeric answers for scale and choice questions, text otherwise."""
        return self is not QuestionType.TEXT


class Pillar(str, Enum):
    """Assessment category used to group questions and scores"""
    TECH = "TECH"
    AI = "AI"
    COMMUNICATION = "COMMUNICATION"
    PORTFOLIO = "PORTFOLIO"

    @classmethod
    def _missing_(cls, value):
        aliases = {"TECHNICAL": cls.TECH, "AI_KNOWLEDGE": cls.AI}
        if isinstance(value, str):
            return aliases.get(value.upper())
        return None


class Question(ApiModel):
    """
    Individual assessment question.
    LIKERT and MULTIPLE questions carry at least two options.
    """

    id: EntityId
    text: str
    type: QuestionType
    pillar: Pillar
    options: List[str] = Field(default_factory=list)
    context: Optional[str] = Field(default=None)  # Optional guidance shown under the question
    active: bool = Field(default=True)
    required: bool = Field(default=True)  # Must be answered before moving on
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    @field_validator("options", mode="before")
    @classmethod
    def _none_options(cls, value):
        return [] if value is None else value


QUESTION_EDITABLE_FIELDS = ("id", "text", "type", "pillar", "options", "context")
