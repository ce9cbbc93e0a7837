"""
Shared fixtures.

Integration tests talk to ``fake_backend`` through FastAPI's TestClient,
which is an ``httpx.Client`` and can be handed straight to ApiClient.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from fake_backend import FakeBackend, create_app
from repositories import (
    AssessmentRepository,
    CatalogRepository,
    PlanRepository,
    QuestionRepository,
    ReportRepository,
    RoleRepository,
)
from services import AssessmentWizard, QueryCache, QuestionService, RoleService
from utils.api_client import ApiClient

BASE_URL = "http://testserver/api"


@pytest.fixture()
def backend() -> FakeBackend:
    """Seeded backend: 3 roles, 5 questions, Backend Engineer with 4 questions."""
    return FakeBackend.seeded()


@pytest.fixture()
def api(backend):
    """ApiClient wired to the fake backend."""
    with TestClient(create_app(backend), base_url=BASE_URL) as http:
        yield ApiClient(http)


@pytest.fixture()
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture()
def role_service(api, cache) -> RoleService:
    return RoleService(RoleRepository(api), cache)


@pytest.fixture()
def question_service(api, cache) -> QuestionService:
    return QuestionService(QuestionRepository(api), cache)


@pytest.fixture()
def wizard(api) -> AssessmentWizard:
    return AssessmentWizard(
        catalog=CatalogRepository(api),
        assessments=AssessmentRepository(api),
        plans=PlanRepository(api),
        reports=ReportRepository(api),
        user_id="test-user",
    )
