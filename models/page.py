from pydantic import Field
from typing import Generic, List, TypeVar

from models.base import ApiModel

T = TypeVar("T")


class Page(ApiModel, Generic[T]):
    """
    One page of a paginated list response.

    Pagination controls are driven by the server's ``first``/``last`` flags.
    """

    content: List[T] = Field(default_factory=list)
    total_elements: int = Field(default=0)
    total_pages: int = Field(default=0)
    size: int = Field(default=0)
    number: int = Field(default=0)  # zero-based page index
    first: bool = Field(default=True)
    last: bool = Field(default=True)
