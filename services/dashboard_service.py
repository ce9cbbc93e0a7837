"""
Admin dashboard figures.

The roles and questions first pages have no ordering dependency, so they are
fetched concurrently through the shared cache.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List

from config.settings import settings
from models.question import Question
from models.role import Role
from services.question_service import QuestionService
from services.role_service import RoleService

logger = logging.getLogger(__name__)

RECENT_COUNT = 5


@dataclass
class DashboardStats:
    total_roles: int = 0
    total_questions: int = 0
    recent_roles: List[Role] = field(default_factory=list)
    recent_questions: List[Question] = field(default_factory=list)


class DashboardService:
    """Aggregates catalog totals for the admin home page."""

    def __init__(self, roles: RoleService, questions: QuestionService):
        self.roles = roles
        self.questions = questions

    def stats(self, recent: int = RECENT_COUNT) -> DashboardStats:
        """
        Load both catalog first pages in parallel.

        Raises:
            ApiError: If either read fails
        """
        workers = max(1, min(2, settings.MAX_WORKER_THREADS))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            roles_future = executor.submit(self.roles.list, 0, recent)
            questions_future = executor.submit(self.questions.list, 0, recent)
            roles_page = roles_future.result()
            questions_page = questions_future.result()

        logger.debug(
            "Dashboard totals: %s roles, %s questions",
            roles_page.total_elements,
            questions_page.total_elements,
        )
        return DashboardStats(
            total_roles=roles_page.total_elements,
            total_questions=questions_page.total_elements,
            recent_roles=list(roles_page.content),
            recent_questions=list(questions_page.content),
        )
