from models.base import ApiModel, EntityId
from models.page import Page
from models.role import Role, ROLE_EDITABLE_FIELDS
from models.question import Question, QuestionType, Pillar, QUESTION_EDITABLE_FIELDS
from models.role_version import RoleVersion, RoleQuestion
from models.assessment import (
    Assessment,
    AssessmentStatus,
    AssessmentScores,
    AssessmentResult,
    AssessmentSummary,
    Answer,
    NumericAnswer,
    TextAnswer,
    answer_for,
)
from models.plan import Plan, PlanPriority, PlanMilestones, PlanTask, Report

__all__ = [
    "ApiModel",
    "EntityId",
    "Page",
    "Role",
    "ROLE_EDITABLE_FIELDS",
    "Question",
    "QuestionType",
    "Pillar",
    "QUESTION_EDITABLE_FIELDS",
    "RoleVersion",
    "RoleQuestion",
    "Assessment",
    "AssessmentStatus",
    "AssessmentScores",
    "AssessmentResult",
    "AssessmentSummary",
    "Answer",
    "NumericAnswer",
    "TextAnswer",
    "answer_for",
    "Plan",
    "PlanPriority",
    "PlanMilestones",
    "PlanTask",
    "Report",
]
