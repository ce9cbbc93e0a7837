"""
Base repository with common CRUD operations over the REST backend.

Provides a foundation for all domain-specific repositories.
"""

from typing import TypeVar, Generic, Optional, List, Type, Any, Dict
from pydantic import BaseModel

from models.base import EntityId
from models.page import Page
from utils.api_client import ApiClient, parse_model

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Generic base repository with common CRUD operations.

    Type Parameters:
        T: Model type returned by the resource
    """

    def __init__(self, api: ApiClient, model_class: Type[T], resource_path: str):
        """
        Initialize repository.

        Args:
            api: API client used for all requests
            model_class: The model class this repository manages
            resource_path: Collection path, e.g. "/admin/roles"
        """
        self.api = api
        self.model_class = model_class
        self.resource_path = resource_path.rstrip("/")

    def get_by_id(self, id: EntityId) -> T:
        """
        Get entity by ID.

        Args:
            id: Entity id

        Returns:
            Entity

        Raises:
            NotFoundError: If the server has no such entity
        """
        return self._parse(self.api.get(f"{self.resource_path}/{id}"))

    def get_page(self, page: int = 0, size: int = 10, **filters: Any) -> Page[T]:
        """
        Get one page of entities.

        Args:
            page: Zero-based page index
            size: Page size
            **filters: Extra query parameters (empty values are dropped)

        Returns:
            Page of entities
        """
        params: Dict[str, Any] = {"page": page, "size": size, **filters}
        data = self.api.get(self.resource_path, params=params)
        return parse_model(Page[self.model_class], data or {})

    def create(self, payload: Dict[str, Any]) -> T:
        """
        Create a new entity.

        Args:
            payload: Request body in the backend's field names

        Returns:
            Created entity with ID
        """
        return self._parse(self.api.post(self.resource_path, json=payload))

    def update(self, payload: Dict[str, Any]) -> T:
        """
        Update an existing entity. The id travels in the body.

        Args:
            payload: Request body including "id"

        Returns:
            Updated entity
        """
        return self._parse(self.api.put(self.resource_path, json=payload))

    def delete_by_id(self, id: EntityId) -> bool:
        """
        Delete entity by ID.

        Returns:
            True once the server confirms the delete
        """
        self.api.delete(f"{self.resource_path}/{id}")
        return True

    def _parse(self, data: Any) -> T:
        return parse_model(self.model_class, data)

    def _parse_list(self, data: Optional[List[Any]], model_class: Type[BaseModel] = None) -> List[Any]:
        model_class = model_class or self.model_class
        return [parse_model(model_class, item) for item in (data or [])]
