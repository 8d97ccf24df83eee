"""SQLAlchemy repository over the seeded category tree."""

from typing import Dict, List, Optional

from resale_catalog.domain.models.category import Category
from resale_catalog.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category]):

    def top_level_names(self) -> List[str]:
        rows = self.db.query(Category.category).distinct().order_by(Category.category.asc()).all()
        return [r[0] for r in rows if r[0]]

    def rows_under(self, level: int, parents: Dict[str, str]) -> List[Category]:
        """Rows matching the parent path whose `level` column is filled."""
        query = self.db.query(Category)
        for field, value in parents.items():
            query = query.filter(getattr(Category, field) == value)
        return query.filter(getattr(Category, Category.level_field(level)).isnot(None)).all()

    def code_for_path(self, path: Dict[str, str]) -> Optional[str]:
        query = self.db.query(Category.code)
        for field, value in path.items():
            query = query.filter(getattr(Category, field) == value)
        row = query.first()
        return row[0] if row else None
