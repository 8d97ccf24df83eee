"""
SQLAlchemy Implementation of WorkProcess Repository.

Cursor/counter writes are single-statement UPDATEs so that concurrent
writers rely on the database for atomicity.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.sql import func

from resale_catalog.core.exceptions import EntityNotFoundException
from resale_catalog.domain.models.work_process import WorkProcess
from resale_catalog.domain.repositories.work_process_repository import WorkProcessRepository
from resale_catalog.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyWorkProcessRepository(SQLAlchemyRepository[WorkProcess], WorkProcessRepository):

    def _apply(self, work_process_id: int, values: Dict[Any, Any]) -> None:
        values[WorkProcess.updated_at] = func.now()
        updated = (
            self.db.query(WorkProcess)
            .filter(WorkProcess.id == work_process_id)
            .update(values, synchronize_session=False)
        )
        self.db.commit()
        if not updated:
            raise EntityNotFoundException(
                f"Work process {work_process_id} not found",
                details={"workProcessId": work_process_id},
            )

    def create_run(self, user_id: Optional[int], product_ids: List[str]) -> WorkProcess:
        return self.create({
            "user_id": user_id,
            "product_ids": list(product_ids),
            "current_product_id": None,
            "finished_products": 0,
            "is_finished": False,
        })

    def set_current_product(self, work_process_id: int, product_id: str) -> None:
        self._apply(work_process_id, {WorkProcess.current_product_id: product_id})

    def increment_finished(self, work_process_id: int) -> None:
        self._apply(work_process_id, {WorkProcess.finished_products: WorkProcess.finished_products + 1})

    def mark_finished(self, work_process_id: int) -> None:
        self._apply(work_process_id, {WorkProcess.is_finished: True})

    def get_active_by_user(self, user_id: int) -> List[WorkProcess]:
        return (
            self.db.query(WorkProcess)
            .filter(WorkProcess.user_id == user_id, WorkProcess.is_finished.is_(False))
            .order_by(WorkProcess.created_at.desc(), WorkProcess.id.desc())
            .all()
        )

    def list_all(self) -> List[WorkProcess]:
        return self.db.query(WorkProcess).order_by(WorkProcess.created_at.desc(), WorkProcess.id.desc()).all()
