"""
Role catalog operations for the admin console.
"""

import logging
from typing import List, Optional

from models.base import EntityId
from models.page import Page
from models.question import Question
from models.role import Role
from models.role_version import RoleVersion
from repositories.role_repository import RoleRepository
from services.entity_service import CachedEntityService
from services.query_cache import QueryCache, detail_key

logger = logging.getLogger(__name__)


class RoleService(CachedEntityService[Role]):
    """
    Cached access to roles, their questions and their version history.

    Assigning or removing a question creates a new role version on the
    server, so both the role's questions and versions are invalidated.
    """

    entity = "roles"

    def __init__(self, repository: RoleRepository, cache: QueryCache):
        super().__init__(repository, cache)

    def list(self, page: int = 0, size: int = 10, search: Optional[str] = None) -> Page[Role]:
        return super().list(page, size, search=search)

    def by_category(self, category: str) -> List[Role]:
        return self.cache.fetch(
            (self.entity, "category", category),
            lambda: self.repository.get_by_category(category),
        )

    def questions(self, role_id: EntityId) -> List[Question]:
        return self.cache.fetch(
            detail_key(self.entity, role_id, "questions"),
            lambda: self.repository.get_questions(role_id),
        )

    def versions(self, role_id: EntityId) -> List[RoleVersion]:
        return self.cache.fetch(
            detail_key(self.entity, role_id, "versions"),
            lambda: self.repository.get_versions(role_id),
        )

    def activate_version(self, role_id: EntityId, version_number: int) -> None:
        """Make one version current. Drops the role's detail and everything under it."""
        self.repository.activate_version(role_id, version_number)
        logger.info("Activated version %s of role %s", version_number, role_id)
        self.cache.invalidate(detail_key(self.entity, role_id))

    def assign_question(self, role_id: EntityId, question_id: EntityId) -> None:
        self.repository.assign_question(role_id, question_id)
        logger.info("Assigned question %s to role %s", question_id, role_id)
        self._invalidate_role_questions(role_id)

    def remove_question(self, role_id: EntityId, question_id: EntityId) -> None:
        self.repository.remove_question(role_id, question_id)
        logger.info("Removed question %s from role %s", question_id, role_id)
        self._invalidate_role_questions(role_id)

    def _invalidate_lists(self) -> None:
        super()._invalidate_lists()
        self.cache.invalidate((self.entity, "category"))

    def _invalidate_role_questions(self, role_id: EntityId) -> None:
        self.cache.invalidate(detail_key(self.entity, role_id, "questions"))
        self.cache.invalidate(detail_key(self.entity, role_id, "versions"))
