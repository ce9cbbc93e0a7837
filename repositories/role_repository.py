"""
Repository for Role entities on the admin API.

Besides CRUD, roles expose their question list and version history.
"""
from typing import List

from models.base import EntityId
from models.question import Question
from models.role import Role
from models.role_version import RoleVersion
from repositories.base_repository import BaseRepository
from utils.api_client import ApiClient


class RoleRepository(BaseRepository[Role]):
    """Repository for /admin/roles."""

    def __init__(self, api: ApiClient):
        super().__init__(api, Role, "/admin/roles")

    def get_by_category(self, category: str) -> List[Role]:
        return self._parse_list(self.api.get(f"{self.resource_path}/category/{category}"))

    def get_questions(self, role_id: EntityId) -> List[Question]:
        """Questions of the role's active version, in order."""
        return self._parse_list(self.api.get(f"{self.resource_path}/{role_id}/questions"), Question)

    def get_versions(self, role_id: EntityId) -> List[RoleVersion]:
        return self._parse_list(self.api.get(f"{self.resource_path}/{role_id}/versions"), RoleVersion)

    def activate_version(self, role_id: EntityId, version_number: int) -> None:
        self.api.post(f"{self.resource_path}/{role_id}/versions/{version_number}/activate")

    def assign_question(self, role_id: EntityId, question_id: EntityId) -> None:
        """Add a question to the role. The server appends a new version."""
        self.api.post(
            f"{self.resource_path}/questions/assign",
            json={"roleId": role_id, "questionId": question_id},
        )

    def remove_question(self, role_id: EntityId, question_id: EntityId) -> None:
        self.api.delete(f"{self.resource_path}/{role_id}/questions/{question_id}")
