"""
Integration tests for the cached role and question services.

Run: pytest tests/integration/test_entity_services.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from models.question import Pillar, QuestionType
from services import QuestionForm, RoleForm
from services.query_cache import detail_key, list_key
from utils.errors import NotFoundError, ValidationError


def request_count(backend, request):
    return sum(1 for r in backend.requests if r == request)


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------

class TestRoleService:

    def test_list_is_cached(self, role_service, backend):
        first = role_service.list(0, 10)
        second = role_service.list(0, 10)
        assert first is second
        assert request_count(backend, "GET /api/admin/roles") == 1

    def test_search(self, role_service):
        page = role_service.list(0, 10, search="product")
        assert [r.name for r in page.content] == ["Product Manager"]

    def test_pagination_flags(self, role_service):
        page = role_service.list(1, 2)
        assert page.number == 1
        assert not page.first
        assert page.last
        assert len(page.content) == 1

    def test_delete_drops_detail_and_list(self, role_service, cache):
        role_service.get(2)
        role_service.list(0, 10)
        assert detail_key("roles", 2) in cache

        role_service.delete(2)

        assert detail_key("roles", 2) not in cache
        assert list_key("roles", page=0, size=10) not in cache
        assert 2 not in [r.id for r in role_service.list(0, 10).content]
        with pytest.raises(NotFoundError):
            role_service.get(2)

    def test_create_invalidates_lists(self, role_service):
        assert role_service.list(0, 10).total_elements == 3

        form = RoleForm()
        form.set("name", "QA Engineer")
        form.set("category", "ENGINEERING")
        created = form.submit(role_service)

        assert created.id == 4
        assert role_service.list(0, 10).total_elements == 4

    def test_update_replaces_detail(self, role_service, cache):
        role = role_service.get(1)
        form = RoleForm.from_entity(role)
        form.set("description", "APIs, services and AI tooling")
        form.submit(role_service)

        assert cache.get(detail_key("roles", 1)).description == "APIs, services and AI tooling"
        assert role_service.get("1").description == "APIs, services and AI tooling"

    def test_update_unchanged_round_trip(self, role_service, backend):
        role = role_service.get(1)
        RoleForm.from_entity(role).submit(role_service)
        stored = backend.roles[1]
        assert (stored["name"], stored["description"], stored["category"], stored["active"]) == (
            role.name, role.description, role.category, role.active,
        )

    def test_by_category(self, role_service):
        assert [r.name for r in role_service.by_category("ENGINEERING")] == ["Backend Engineer"]

    def test_create_invalidates_category(self, role_service, cache):
        role_service.by_category("ENGINEERING")
        role_service.create({"name": "ML Engineer", "category": "ENGINEERING"})
        assert ("roles", "category", "ENGINEERING") not in cache
        assert len(role_service.by_category("ENGINEERING")) == 2

    def test_assign_question_creates_version(self, role_service):
        assert len(role_service.versions(1)) == 1
        assert len(role_service.questions(1)) == 4

        role_service.assign_question(1, 5)

        versions = role_service.versions(1)
        assert [v.version_number for v in versions] == [1, 2]
        assert versions[-1].active
        assert [q.id for q in role_service.questions(1)] == [1, 2, 3, 4, 5]

    def test_remove_question(self, role_service):
        role_service.questions(1)
        role_service.remove_question(1, 4)
        assert [q.id for q in role_service.questions(1)] == [1, 2, 3]

    def test_activate_version(self, role_service):
        role_service.assign_question(1, 5)
        role_service.versions(1)

        role_service.activate_version(1, 1)

        active = [v.version_number for v in role_service.versions(1) if v.active]
        assert active == [1]
        assert len(role_service.questions(1)) == 4


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

class TestQuestionService:

    def test_filters(self, question_service):
        page = question_service.list(0, 10, pillar=Pillar.AI)
        assert {q.id for q in page.content} == {2, 5}

        page = question_service.list(0, 10, pillar=Pillar.AI, type=QuestionType.MULTIPLE)
        assert [q.id for q in page.content] == [5]

    def test_filter_combinations_cached_separately(self, question_service, cache):
        question_service.list(0, 10, pillar="AI")
        question_service.list(0, 10, pillar="TECH")
        assert list_key("questions", page=0, size=10, pillar="AI") in cache
        assert list_key("questions", page=0, size=10, pillar="TECH") in cache

    def test_rejected_form_makes_no_request(self, question_service, backend):
        before = len(backend.requests)
        form = QuestionForm()
        form.set("text", "Rate your prompt skills")
        form.set("type", "LIKERT")
        form.add_option("Low")

        with pytest.raises(ValidationError):
            form.submit(question_service)
        assert len(backend.requests) == before

    def test_create_question(self, question_service, backend):
        form = QuestionForm()
        form.set("text", "Which AI tools do you use?")
        form.set("type", QuestionType.MULTIPLE)
        form.set("pillar", Pillar.AI)
        form.add_option("ChatGPT")
        form.add_option("Copilot")

        created = form.submit(question_service)

        assert created.type is QuestionType.MULTIPLE
        assert backend.questions[created.id]["options"] == ["ChatGPT", "Copilot"]

    def test_edit_unchanged_keeps_fields(self, question_service, backend):
        before = dict(backend.questions[1])
        QuestionForm.from_entity(question_service.get(1)).submit(question_service)
        after = backend.questions[1]
        for field in ("text", "type", "pillar", "options", "context"):
            assert after[field] == before[field]

    def test_delete_question(self, question_service):
        question_service.get(5)
        question_service.delete(5)
        assert 5 not in [q.id for q in question_service.list(0, 10).content]
