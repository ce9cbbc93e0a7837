"""
Per-process and per-session objects for the Streamlit pages.

The API client is shared by every session (``st.cache_resource``). The query
cache, list-view helpers and the assessment wizard belong to one browser
session and live in ``st.session_state``.
"""

from typing import Callable, Iterable, TypeVar

import streamlit as st

from config.settings import settings
from repositories import (
    AdminRepository,
    AssessmentRepository,
    CatalogRepository,
    PlanRepository,
    QuestionRepository,
    ReportRepository,
    RoleRepository,
)
from services import (
    AssessmentWizard,
    DashboardService,
    DeleteConfirmation,
    DraftScope,
    ListQuery,
    QueryCache,
    QuestionService,
    RoleService,
)
from utils.api_client import ApiClient, get_api_client
from utils.logging_config import configure_logging

T = TypeVar("T")

# Session keys holding per-entity form drafts
DRAFT_PREFIXES = ("question_form_",)


@st.cache_resource
def get_api() -> ApiClient:
    """
    Create and cache the API client.

    Uses Streamlit's cache_resource so a single HTTP connection pool is shared
    across all sessions and reruns.
    """
    configure_logging()
    return get_api_client()


def _session_value(key: str, factory: Callable[[], T]) -> T:
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def get_query_cache() -> QueryCache:
    return _session_value("query_cache", lambda: QueryCache(
        ttl_seconds=settings.CACHE_TTL_SECONDS,
        max_entries=settings.CACHE_MAX_ENTRIES,
    ))


def get_role_service() -> RoleService:
    return RoleService(RoleRepository(get_api()), get_query_cache())


def get_question_service() -> QuestionService:
    return QuestionService(QuestionRepository(get_api()), get_query_cache())


def get_dashboard_service() -> DashboardService:
    return DashboardService(get_role_service(), get_question_service())


def get_admin_repository() -> AdminRepository:
    return AdminRepository(get_api())


def get_assessment_repository() -> AssessmentRepository:
    return AssessmentRepository(get_api())


def get_report_repository() -> ReportRepository:
    return ReportRepository(get_api())


def get_plan_repository() -> PlanRepository:
    return PlanRepository(get_api())


def get_wizard() -> AssessmentWizard:
    """The assessment wizard of this browser session."""
    api = get_api()
    return _session_value(
        "assessment_wizard",
        lambda: AssessmentWizard(
            catalog=CatalogRepository(api),
            assessments=AssessmentRepository(api),
            plans=PlanRepository(api),
            reports=ReportRepository(api),
        ),
    )


def get_delete_confirmation(name: str) -> DeleteConfirmation:
    return _session_value(f"delete_confirmation_{name}", DeleteConfirmation)


def track_route(page: str, *route) -> None:
    """
    Record the route being rendered. Every page calls this first so form
    drafts are dropped once the user moves to another page, view or id.
    """
    scope = _session_value("draft_scope", lambda: DraftScope(DRAFT_PREFIXES))
    for name in scope.enter((page, *route), list(st.session_state.keys())):
        del st.session_state[name]


# ============ URL QUERY STRING ============

def read_list_query(filter_names: Iterable[str] = ()) -> ListQuery:
    """List parameters from the URL (page, size, search, filters)."""
    return ListQuery.from_query_params(st.query_params, filter_names=filter_names)


def write_list_query(query: ListQuery, keep: Iterable[str] = ()) -> None:
    """
    Replace the URL query string with the list parameters and rerun.

    Args:
        query: New list state
        keep: Other query parameters to carry over unchanged
    """
    params = {name: st.query_params[name] for name in keep if name in st.query_params}
    params.update(query.to_query_params())
    st.query_params.from_dict(params)
    st.rerun()


def navigate(**params: str) -> None:
    """Replace the URL query string with params and rerun."""
    st.query_params.from_dict({k: str(v) for k, v in params.items() if v is not None})
    st.rerun()


# ============ FLASH MESSAGES ============

def flash(message: str) -> None:
    """Queue a success message shown after the next rerun."""
    st.session_state["flash_message"] = message


def show_flash() -> None:
    message = st.session_state.pop("flash_message", None)
    if message:
        st.success(message)
