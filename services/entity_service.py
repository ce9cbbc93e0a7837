"""
Cache-backed CRUD service shared by the admin catalogs.

Reads go through the QueryCache; every successful mutation updates or drops
the affected detail entry and invalidates all list pages of the entity.
"""

import logging
from typing import Any, Dict, Generic, TypeVar

from pydantic import BaseModel

from models.base import EntityId
from models.page import Page
from repositories.base_repository import BaseRepository
from services.query_cache import QueryCache, detail_key, list_key

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class CachedEntityService(Generic[T]):
    """
    Generic list/get/create/update/delete with cache invalidation.

    Subclasses set ``entity`` (the cache namespace) and may add queries.
    """

    entity: str = ""

    def __init__(self, repository: BaseRepository[T], cache: QueryCache):
        self.repository = repository
        self.cache = cache

    # ============ READS ============

    def list(self, page: int = 0, size: int = 10, **filters: Any) -> Page[T]:
        """One page of entities; distinct filter combinations are cached separately."""
        filters = {k: _param(v) for k, v in filters.items()}
        key = list_key(self.entity, page=page, size=size, **filters)
        return self.cache.fetch(key, lambda: self.repository.get_page(page, size, **filters))

    def get(self, id: EntityId) -> T:
        return self.cache.fetch(detail_key(self.entity, id), lambda: self.repository.get_by_id(id))

    # ============ MUTATIONS ============

    def create(self, payload: Dict[str, Any]) -> T:
        created = self.repository.create(payload)
        logger.info("Created %s %s", self.entity, getattr(created, "id", None))
        self._invalidate_lists()
        return created

    def update(self, payload: Dict[str, Any]) -> T:
        updated = self.repository.update(payload)
        logger.info("Updated %s %s", self.entity, getattr(updated, "id", None))
        self.cache.set(detail_key(self.entity, updated.id), updated)
        self._invalidate_lists()
        return updated

    def delete(self, id: EntityId) -> None:
        self.repository.delete_by_id(id)
        logger.info("Deleted %s %s", self.entity, id)
        # Prefix removal also drops nested entries (questions, versions)
        self.cache.invalidate(detail_key(self.entity, id))
        self._invalidate_lists()

    def _invalidate_lists(self) -> None:
        self.cache.invalidate((self.entity, "list"))


def _param(value: Any) -> Any:
    """Enums travel as their value in query strings and cache keys."""
    return getattr(value, "value", value)
