"""Folder: a named upload batch per worker."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from resale_catalog.infrastructure.database import Base


class Folder(Base):
    __tablename__ = "folders"
    __table_args__ = (UniqueConstraint("user_id", "foldername", name="uq_folders_user_foldername"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    foldername = Column(String(255), nullable=False)
    number_of_uploaded_products = Column(Integer, nullable=False, default=0)
    excel_file_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Folder {self.foldername} - {self.number_of_uploaded_products} products>"
