"""
Question catalog operations for the admin console.
"""

from typing import Optional

from models.page import Page
from models.question import Pillar, Question, QuestionType
from repositories.question_repository import QuestionRepository
from services.entity_service import CachedEntityService
from services.query_cache import QueryCache


class QuestionService(CachedEntityService[Question]):
    """Cached question list/detail with pillar and type filters."""

    entity = "questions"

    def __init__(self, repository: QuestionRepository, cache: QueryCache):
        super().__init__(repository, cache)

    def list(
        self,
        page: int = 0,
        size: int = 10,
        search: Optional[str] = None,
        pillar: Optional[Pillar] = None,
        type: Optional[QuestionType] = None,
    ) -> Page[Question]:
        return super().list(page, size, search=search, pillar=pillar, type=type)
