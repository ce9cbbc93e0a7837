"""
Services module - Business Logic Layer.

Contains the application services the Streamlit pages call, sitting between
the views and the data layer (repositories).

Services handle:
- Query caching and invalidation after mutations
- Client-side form validation
- List view state (pagination, search, filters)
- The assessment wizard state machine

Usage:
    from services import QueryCache, RoleService
    from repositories import RoleRepository

    roles = RoleService(RoleRepository(api), QueryCache())
    page = roles.list(page=0, size=10, search="engineer")
"""

from services.query_cache import QueryCache, list_key, detail_key
from services.entity_service import CachedEntityService
from services.role_service import RoleService
from services.question_service import QuestionService
from services.dashboard_service import DashboardService, DashboardStats
from services.forms import RoleForm, QuestionForm
from services.list_view import ListQuery, Pagination, DeleteConfirmation, DraftScope
from services.assessment_wizard import (
    AssessmentWizard,
    NotStarted,
    InProgress,
    Submitting,
    Completed,
    Failed,
)

__all__ = [
    "QueryCache",
    "list_key",
    "detail_key",
    "CachedEntityService",
    "RoleService",
    "QuestionService",
    "DashboardService",
    "DashboardStats",
    "RoleForm",
    "QuestionForm",
    "ListQuery",
    "Pagination",
    "DeleteConfirmation",
    "DraftScope",
    "AssessmentWizard",
    "NotStarted",
    "InProgress",
    "Submitting",
    "Completed",
    "Failed",
]
