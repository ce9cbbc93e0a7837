from pydantic import AliasChoices, Field
from typing import List, Optional
from datetime import datetime

from models.base import ApiModel, EntityId


class PlanTask(ApiModel):
    task: str
    deliverable: Optional[str] = Field(default=None)
    resource: Optional[str] = Field(default=None)


class PlanMilestones(ApiModel):
    """30/60/90 day task lists"""
    d30: List[PlanTask] = Field(default_factory=list)
    d60: List[PlanTask] = Field(default_factory=list)
    d90: List[PlanTask] = Field(default_factory=list)


class PlanPriority(ApiModel):
    name: str
    why: Optional[str] = Field(default=None)
    milestones: Optional[PlanMilestones] = Field(default=None)
    evidence_of_done: List[str] = Field(default_factory=list)


class Plan(ApiModel):
    """
    Development plan generated by the server from an assessment.

    Older endpoints return a single ``content`` blob, newer ones a structured
    summary with priorities; either may be present.
    """
    id: Optional[EntityId] = Field(default=None)
    assessment_id: Optional[EntityId] = Field(default=None)
    content: Optional[str] = Field(default=None)
    summary: Optional[str] = Field(default=None)
    time_budget_hours_per_week: Optional[int] = Field(default=None)
    priorities: List[PlanPriority] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(default=None)


class Report(ApiModel):
    """Handle to a server-rendered assessment report"""
    report_id: EntityId = Field(validation_alias=AliasChoices("reportId", "report_id", "id"))
    assessment_id: Optional[EntityId] = Field(default=None)
    title: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None)  # PENDING, READY, FAILED
    download_url: Optional[str] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)
    expires_at: Optional[datetime] = Field(default=None)
