"""
Repository for the assessment lifecycle.

Create -> submit answers (one batch) -> complete -> results/summary.
"""
from typing import Any, Dict, List, Optional, Union

from models.assessment import (
    Assessment,
    AssessmentResult,
    AssessmentSummary,
    NumericAnswer,
    TextAnswer,
)
from models.base import EntityId
from utils.api_client import ApiClient, parse_model


class AssessmentRepository:
    """Repository for /assessments."""

    def __init__(self, api: ApiClient):
        self.api = api

    def create(
        self,
        user_id: str,
        role_id: EntityId,
        consent: bool = True,
        email: Optional[str] = None,
    ) -> Assessment:
        """
        Start a new assessment with no answers.

        Args:
            user_id: Identifier of the person taking the assessment
            role_id: Role being assessed
            consent: Whether the user accepted the terms
            email: Optional address for results

        Returns:
            The created assessment (status IN_PROGRESS)
        """
        payload: Dict[str, Any] = {
            "userId": user_id,
            "roleId": role_id,
            "consent": consent,
            "answers": [],
        }
        if email:
            payload["email"] = email

        data = self.api.post("/assessments", json=payload)
        # Some deployments answer with {"assessment": ..., "questions": [...]}
        if isinstance(data, dict) and isinstance(data.get("assessment"), dict):
            data = data["assessment"]
        return parse_model(Assessment, data)

    def submit_answers(
        self,
        assessment_id: EntityId,
        answers: List[Union[NumericAnswer, TextAnswer]],
    ) -> None:
        """Send the whole answer buffer in one call."""
        self.api.post(
            f"/assessments/{assessment_id}/answers",
            json=[answer.to_payload() for answer in answers],
        )

    def complete(self, assessment_id: EntityId) -> AssessmentResult:
        """Mark the assessment complete and return the server's scoring."""
        data = self.api.post(f"/assessments/{assessment_id}/complete")
        return self._parse_result(assessment_id, data)

    def get_results(self, assessment_id: EntityId) -> AssessmentResult:
        data = self.api.get(f"/assessments/{assessment_id}/results")
        return self._parse_result(assessment_id, data)

    def get_summary(self, assessment_id: EntityId) -> AssessmentSummary:
        data = self.api.get(f"/assessments/{assessment_id}/summary") or {}
        if isinstance(data, dict):
            data = {"assessmentId": assessment_id, **data}
        return parse_model(AssessmentSummary, data)

    def _parse_result(self, assessment_id: EntityId, data: Any) -> AssessmentResult:
        data = data or {}
        if isinstance(data, dict):
            data = {"assessmentId": assessment_id, **data}
        return parse_model(AssessmentResult, data)
