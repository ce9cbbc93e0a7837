"""
State for the paginated admin list views.

Page, size, search and filters live in the URL query string so a filtered
view can be bookmarked, shared and navigated with back/forward. Any change
to the search term or a filter sends the user back to the first page.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from config.settings import settings
from models.page import Page


def _to_int(value: Any, default: int, minimum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


@dataclass(frozen=True)
class ListQuery:
    """Immutable list parameters; every change returns a new query."""

    page: int = 0
    size: int = field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)
    search: str = ""
    filters: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any],
        filter_names: Iterable[str] = (),
        default_size: Optional[int] = None,
    ) -> "ListQuery":
        """
        Parse a query string mapping (e.g. ``st.query_params``).

        Missing or malformed numbers fall back to page 0 and the default size.
        """
        default_size = default_size or settings.DEFAULT_PAGE_SIZE
        filters = {}
        for name in filter_names:
            value = params.get(name)
            if value:
                filters[name] = str(value)
        return cls(
            page=_to_int(params.get("page"), 0, 0),
            size=_to_int(params.get("size"), default_size, 1),
            search=str(params.get("search") or ""),
            filters=filters,
        )

    def to_query_params(self) -> Dict[str, str]:
        params = {"page": str(self.page), "size": str(self.size)}
        if self.search:
            params["search"] = self.search
        params.update(self.filters)
        return params

    def filter(self, name: str) -> Optional[str]:
        return self.filters.get(name)

    def with_search(self, term: Optional[str]) -> "ListQuery":
        return replace(self, search=(term or "").strip(), page=0)

    def with_filter(self, name: str, value: Optional[str]) -> "ListQuery":
        filters = dict(self.filters)
        value = getattr(value, "value", value)
        if value:
            filters[name] = str(value)
        else:
            filters.pop(name, None)
        return replace(self, filters=filters, page=0)

    def clear_filters(self) -> "ListQuery":
        return replace(self, filters={}, page=0)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=max(0, int(page)))


@dataclass(frozen=True)
class Pagination:
    """Pagination controls driven by the server's page flags."""

    number: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page) -> "Pagination":
        return cls(
            number=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.first,
            last=page.last,
        )

    @property
    def has_previous(self) -> bool:
        return not self.first

    @property
    def has_next(self) -> bool:
        return not self.last

    @property
    def label(self) -> str:
        return f"Page {self.number + 1} of {max(self.total_pages, 1)}"

    @property
    def range_label(self) -> str:
        if self.total_elements == 0:
            return "No results"
        start = self.number * self.size + 1
        end = min((self.number + 1) * self.size, self.total_elements)
        return f"Showing {start} to {end} of {self.total_elements} results"


class DeleteConfirmation:
    """
    Two-step gate in front of a destructive call.

    ``request`` arms the gate for one id; ``confirm`` returns True only for
    that id and disarms it.
    """

    def __init__(self):
        self.pending: Optional[Any] = None

    def request(self, entity_id: Any) -> None:
        self.pending = entity_id

    def is_pending(self, entity_id: Any) -> bool:
        return self.pending is not None and self.pending == entity_id

    def confirm(self, entity_id: Any) -> bool:
        if not self.is_pending(entity_id):
            return False
        self.pending = None
        return True

    def cancel(self) -> None:
        self.pending = None


class DraftScope:
    """
    Ties session form drafts to the page route they were opened on.

    ``enter`` is called once per render with the current route, e.g.
    ``("questions", "edit", "7")``, and returns the draft keys to drop when
    the route changed since the last render, however the user navigated.
    """

    def __init__(self, prefixes: Iterable[str]):
        self.prefixes = tuple(prefixes)
        self.route: Optional[Tuple[Any, ...]] = None

    def enter(self, route: Tuple[Any, ...], keys: Iterable[str]) -> List[str]:
        if route == self.route:
            return []
        self.route = route
        return [key for key in keys if isinstance(key, str) and key.startswith(self.prefixes)]
