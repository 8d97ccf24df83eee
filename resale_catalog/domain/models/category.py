"""Marketplace category tree, flattened to one row per leaf (seed data)."""

from sqlalchemy import Column, Integer, String

from resale_catalog.infrastructure.database import Base

MAX_CATEGORY_LEVEL = 8


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=True, index=True)
    category = Column(String(255), nullable=False, index=True)
    category2 = Column(String(255), nullable=True)
    category3 = Column(String(255), nullable=True)
    category4 = Column(String(255), nullable=True)
    category5 = Column(String(255), nullable=True)
    category6 = Column(String(255), nullable=True)
    category7 = Column(String(255), nullable=True)
    category8 = Column(String(255), nullable=True)

    @staticmethod
    def level_field(level: int) -> str:
        """Column name holding the given tree level (1 → 'category')."""
        return "category" if level == 1 else f"category{level}"

    def __repr__(self):
        return f"<Category {self.code} - {self.category}>"
