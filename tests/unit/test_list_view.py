"""
Unit tests for list view state: ListQuery, Pagination, DeleteConfirmation, DraftScope.

Run: pytest tests/unit/test_list_view.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from models.page import Page
from models.question import Pillar
from services.list_view import DeleteConfirmation, DraftScope, ListQuery, Pagination


class TestListQuery:

    def test_parses_query_params(self):
        query = ListQuery.from_query_params(
            {"page": "2", "size": "20", "search": "eng", "pillar": "AI", "other": "x"},
            filter_names=("pillar", "type"),
        )
        assert query.page == 2
        assert query.size == 20
        assert query.search == "eng"
        assert query.filters == {"pillar": "AI"}

    def test_malformed_numbers_fall_back(self):
        query = ListQuery.from_query_params({"page": "-1", "size": "abc"}, default_size=10)
        assert query.page == 0
        assert query.size == 10

    def test_round_trips_through_query_params(self):
        query = ListQuery(page=3, size=5, search="data", filters={"type": "TEXT"})
        assert ListQuery.from_query_params(query.to_query_params(), filter_names=("type",)) == query

    def test_search_resets_page(self):
        query = ListQuery(page=4).with_search("  backend ")
        assert query.page == 0
        assert query.search == "backend"

    def test_filter_change_resets_page(self):
        query = ListQuery(page=4).with_filter("pillar", Pillar.AI)
        assert query.page == 0
        assert query.filter("pillar") == "AI"

    def test_clearing_a_filter_resets_page(self):
        query = ListQuery(page=2, filters={"pillar": "AI"}).with_filter("pillar", None)
        assert query.page == 0
        assert query.filters == {}

    def test_clear_filters_resets_page(self):
        query = ListQuery(page=2, filters={"pillar": "AI", "type": "TEXT"}).clear_filters()
        assert query.page == 0
        assert query.filters == {}

    def test_with_page_keeps_filters(self):
        query = ListQuery(filters={"type": "TEXT"}, search="x").with_page(3)
        assert query.page == 3
        assert query.filters == {"type": "TEXT"}
        assert query.search == "x"


class TestPagination:

    def test_flags_follow_server_page(self):
        page = Page(content=[], total_elements=25, total_pages=3, size=10, number=1, first=False, last=False)
        pagination = Pagination.from_page(page)
        assert pagination.has_previous
        assert pagination.has_next
        assert pagination.label == "Page 2 of 3"
        assert pagination.range_label == "Showing 11 to 20 of 25 results"

    def test_last_page_range(self):
        page = Page(content=[], total_elements=25, total_pages=3, size=10, number=2, first=False, last=True)
        pagination = Pagination.from_page(page)
        assert not pagination.has_next
        assert pagination.range_label == "Showing 21 to 25 of 25 results"

    def test_empty(self):
        pagination = Pagination.from_page(Page())
        assert not pagination.has_previous
        assert not pagination.has_next
        assert pagination.range_label == "No results"
        assert pagination.label == "Page 1 of 1"


class TestDeleteConfirmation:

    def test_confirm_requires_request(self):
        confirmation = DeleteConfirmation()
        assert confirmation.confirm(1) is False

    def test_confirm_only_matching_id(self):
        confirmation = DeleteConfirmation()
        confirmation.request(1)
        assert confirmation.confirm(2) is False
        assert confirmation.confirm(1) is True
        assert confirmation.confirm(1) is False

    def test_cancel(self):
        confirmation = DeleteConfirmation()
        confirmation.request(1)
        confirmation.cancel()
        assert not confirmation.is_pending(1)


class TestDraftScope:

    KEYS = ["question_form_7", "question_form_7_text", "question_form_new", "query_cache", "flash"]

    def test_first_render_drops_leftovers(self):
        scope = DraftScope(("question_form_",))
        dropped = scope.enter(("questions", "edit", "7"), self.KEYS)
        assert dropped == ["question_form_7", "question_form_7_text", "question_form_new"]

    def test_rerender_keeps_draft(self):
        scope = DraftScope(("question_form_",))
        scope.enter(("questions", "edit", "7"), self.KEYS)
        assert scope.enter(("questions", "edit", "7"), self.KEYS) == []

    def test_leaving_and_returning_drops_draft(self):
        scope = DraftScope(("question_form_",))
        scope.enter(("questions", "edit", "7"), self.KEYS)

        assert scope.enter(("roles", "list", None), self.KEYS) != []
        # Coming back to the same question starts from the server copy
        assert "question_form_7" in scope.enter(("questions", "edit", "7"), self.KEYS)

    def test_other_session_keys_survive(self):
        scope = DraftScope(("question_form_",))
        dropped = scope.enter(("questions", "list", None), self.KEYS)
        assert "query_cache" not in dropped
        assert "flash" not in dropped
