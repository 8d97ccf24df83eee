"""Product domain model: maps to the 'products' table.

One row per (management number, upload). Re-uploading a management number
inserts a new row; lookups by management number always use the newest one.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, JSON
from sqlalchemy.sql import func

from resale_catalog.infrastructure.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    management_number = Column(String(100), nullable=False, index=True)  # not unique
    images = Column(JSON, nullable=False, default=list)

    # AI analysis / operator review
    title = Column(Text, nullable=True)
    candidate_titles = Column(JSON, nullable=False, default=list)
    level = Column(String(1), nullable=True, index=True)  # A, B, C
    measurement = Column(Text, nullable=True)
    measurement_type = Column(JSON, nullable=True)  # {"foreign": ..., "japanese": ...}
    condition = Column(String(100), nullable=True, index=True)
    category = Column(String(255), nullable=True, index=True)
    category_list = Column(JSON, nullable=False, default=list)
    shop1 = Column(Text, nullable=True)
    shop2 = Column(Text, nullable=True)
    shop3 = Column(Text, nullable=True)
    price = Column(Float, nullable=True)

    # Relationships / metadata
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    folder_id = Column(Integer, ForeignKey("folders.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Product {self.management_number} - {self.title}>"
