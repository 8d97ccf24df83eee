"""
Base Repository Interface.
Row-level access by primary key; listing lives on the concrete repositories
because every listing here has its own ordering rule.
"""

from typing import Any, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):

    def get_by_id(self, id: int) -> Optional[T]:
        ...

    def create(self, obj_in: Any) -> T:
        """Insert from a dict or pydantic model and return the refreshed row."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        ...

    def delete(self, id: int) -> Optional[T]:
        ...
