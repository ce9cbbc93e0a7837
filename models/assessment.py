from pydantic import AliasChoices, Field, field_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import datetime
from enum import Enum

from models.base import ApiModel, EntityId
from models.question import Question


class AssessmentStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


# ============ ANSWERS ============

class NumericAnswer(ApiModel):
    """Answer to a LIKERT or MULTIPLE question (scale value or 1-based option index)"""
    kind: Literal["numeric"] = Field(default="numeric", exclude=True)
    question_id: EntityId
    value_numeric: int


class TextAnswer(ApiModel):
    """Free-text answer to a TEXT question"""
    kind: Literal["text"] = Field(default="text", exclude=True)
    question_id: EntityId
    value_text: str


Answer = Annotated[Union[NumericAnswer, TextAnswer], Field(discriminator="kind")]


def answer_for(question: Question, value: Any) -> Union[NumericAnswer, TextAnswer]:
    """
    Build the answer variant matching the question's type.

    Args:
        question: The question being answered
        value: Raw value from the input widget

    Returns:
        NumericAnswer for LIKERT/MULTIPLE, TextAnswer for TEXT
    """
    if question.type.is_numeric:
        return NumericAnswer(question_id=question.id, value_numeric=int(value))
    return TextAnswer(question_id=question.id, value_text=str(value))


# ============ SCORES & RESULTS ============

class AssessmentScores(ApiModel):
    """
    Pillar scores in percent (0-100).

    The backend is not consistent about key names, so each score accepts the
    known spellings.
    """
    overall: Optional[float] = Field(default=None, validation_alias=AliasChoices("overall", "OVERALL"))
    tech: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("tech", "technical", "TECH", "TECHNICAL")
    )
    ai: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("ai", "aiKnowledge", "AI", "AI_KNOWLEDGE")
    )
    communication: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("communication", "COMMUNICATION")
    )
    portfolio: Optional[float] = Field(default=None, validation_alias=AliasChoices("portfolio", "PORTFOLIO"))

    def by_pillar(self) -> Dict[str, Optional[float]]:
        """Pillar scores keyed by display name, overall excluded."""
        return {
            "Tech": self.tech,
            "AI": self.ai,
            "Communication": self.communication,
            "Portfolio": self.portfolio,
        }


class Assessment(ApiModel):
    """One survey session for one role, owned by the server"""
    id: EntityId
    user_id: Optional[str] = Field(default=None)
    role_id: Optional[EntityId] = Field(default=None)
    status: AssessmentStatus = Field(default=AssessmentStatus.IN_PROGRESS)
    created_at: Optional[datetime] = Field(default=None)
    completed_at: Optional[datetime] = Field(default=None)
    answers: List[Dict[str, Any]] = Field(default_factory=list)
    scores: Optional[AssessmentScores] = Field(default=None)

    @field_validator("answers", mode="before")
    @classmethod
    def _none_answers(cls, value):
        return [] if value is None else value


class AssessmentResult(ApiModel):
    """Scoring payload returned when an assessment is completed"""
    assessment_id: EntityId = Field(validation_alias=AliasChoices("assessmentId", "assessment_id", "id"))
    role_id: Optional[EntityId] = Field(default=None)
    scores: AssessmentScores = Field(default_factory=AssessmentScores)
    gaps: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    completed_at: Optional[datetime] = Field(default=None)
    pdf_url: Optional[str] = Field(default=None)

    @field_validator("gaps", "recommendations", mode="before")
    @classmethod
    def _none_lists(cls, value):
        return [] if value is None else value

    @field_validator("scores", mode="before")
    @classmethod
    def _none_scores(cls, value):
        return {} if value is None else value


class AssessmentSummary(ApiModel):
    """Dashboard view of a completed assessment"""
    assessment_id: EntityId = Field(validation_alias=AliasChoices("assessmentId", "assessment_id", "id"))
    completed_at: Optional[datetime] = Field(default=None)
    answer_count: int = Field(default=0)
    scores: AssessmentScores = Field(default_factory=AssessmentScores)
    top_gaps: List[str] = Field(default_factory=list)
    top_recommendations: List[str] = Field(default_factory=list)

    @field_validator("top_gaps", "top_recommendations", mode="before")
    @classmethod
    def _none_lists(cls, value):
        return [] if value is None else value

    @field_validator("scores", mode="before")
    @classmethod
    def _none_scores(cls, value):
        return {} if value is None else value
