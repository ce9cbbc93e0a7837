"""
Repository for Question entities on the admin API.
"""
from typing import Optional

from models.page import Page
from models.question import Question
from repositories.base_repository import BaseRepository
from utils.api_client import ApiClient


class QuestionRepository(BaseRepository[Question]):
    """Repository for /admin/questions."""

    def __init__(self, api: ApiClient):
        super().__init__(api, Question, "/admin/questions")

    def get_page(
        self,
        page: int = 0,
        size: int = 10,
        search: Optional[str] = None,
        pillar: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Page[Question]:
        return super().get_page(page, size, search=search, pillar=pillar, type=type)
