"""
Repository for the public, read-only role catalog.

Mirrors the admin roles for end users starting an assessment.
"""
from typing import List

from models.base import EntityId
from models.question import Question
from models.role import Role
from utils.api_client import ApiClient, parse_model


class CatalogRepository:
    """Repository for /catalog."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list_roles(self) -> List[Role]:
        """Active roles available for assessment."""
        return [parse_model(Role, item) for item in (self.api.get("/catalog/roles") or [])]

    def get_role_questions(self, role_id: EntityId) -> List[Question]:
        """Ordered questions of the role's active version."""
        data = self.api.get(f"/catalog/roles/{role_id}/questions") or []
        return [parse_model(Question, item) for item in data]
