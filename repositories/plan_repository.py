"""
Repository for development plans generated from assessments.
"""
from models.base import EntityId
from models.plan import Plan
from utils.api_client import ApiClient, parse_model


class PlanRepository:
    """Repository for /plans."""

    def __init__(self, api: ApiClient):
        self.api = api

    def generate(self, assessment_id: EntityId, hours_per_week: int = None) -> Plan:
        """Ask the server to generate a plan. Safe to call again on failure."""
        payload = {"hoursPerWeek": hours_per_week} if hours_per_week else None
        data = self.api.post(f"/plans/generate/{assessment_id}", json=payload)
        return parse_model(Plan, data or {})

    def get_by_assessment(self, assessment_id: EntityId) -> Plan:
        return parse_model(Plan, self.api.get(f"/plans/assessment/{assessment_id}") or {})
