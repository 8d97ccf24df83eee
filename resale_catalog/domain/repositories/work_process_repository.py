"""
WorkProcess Repository Interface.
The persisted run record is the only state shared between the HTTP layer
and the background batch loop.
"""

from typing import List, Optional

from resale_catalog.domain.repositories.base import BaseRepository
from resale_catalog.domain.models.work_process import WorkProcess


class WorkProcessRepository(BaseRepository[WorkProcess]):

    def create_run(self, user_id: Optional[int], product_ids: List[str]) -> WorkProcess:
        ...

    def set_current_product(self, work_process_id: int, product_id: str) -> None:
        ...

    def increment_finished(self, work_process_id: int) -> None:
        """Atomic database-side increment."""
        ...

    def mark_finished(self, work_process_id: int) -> None:
        ...

    def get_active_by_user(self, user_id: int) -> List[WorkProcess]:
        """Unfinished runs for a worker, newest first."""
        ...

    def list_all(self) -> List[WorkProcess]:
        ...
