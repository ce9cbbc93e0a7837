"""
Repositories module - Data Access Layer.

Provides repository classes for the remote REST backend following the
Repository pattern. Each repository maps one resource of the API onto
typed models.

Usage:
    from repositories import RoleRepository, CatalogRepository
    from utils.api_client import get_api_client

    api = get_api_client()
    roles = RoleRepository(api)
    page = roles.get_page(page=0, size=10, search="engineer")
    questions = CatalogRepository(api).get_role_questions(role_id)
"""

from repositories.base_repository import BaseRepository
from repositories.role_repository import RoleRepository
from repositories.question_repository import QuestionRepository
from repositories.admin_repository import AdminRepository
from repositories.catalog_repository import CatalogRepository
from repositories.assessment_repository import AssessmentRepository
from repositories.plan_repository import PlanRepository
from repositories.report_repository import ReportRepository

__all__ = [
    "BaseRepository",
    "RoleRepository",
    "QuestionRepository",
    "AdminRepository",
    "CatalogRepository",
    "AssessmentRepository",
    "PlanRepository",
    "ReportRepository",
]
