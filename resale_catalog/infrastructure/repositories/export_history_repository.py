"""SQLAlchemy repository for spreadsheet export history."""

from typing import List, Optional

from resale_catalog.domain.models.export_history import ExportHistory
from resale_catalog.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyExportHistoryRepository(SQLAlchemyRepository[ExportHistory]):

    def list_newest_first(self, user_id: Optional[int] = None) -> List[ExportHistory]:
        query = self.db.query(ExportHistory)
        if user_id is not None:
            query = query.filter(ExportHistory.user_id == user_id)
        return query.order_by(ExportHistory.created_at.desc(), ExportHistory.id.desc()).all()
