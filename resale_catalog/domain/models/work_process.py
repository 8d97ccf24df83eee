"""WorkProcess: the persisted cursor of one batch analysis run."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func

from resale_catalog.infrastructure.database import Base


class WorkProcess(Base):
    __tablename__ = "work_processes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    product_ids = Column(JSON, nullable=False, default=list)  # management numbers, never reordered
    current_product_id = Column(String(100), nullable=True)
    finished_products = Column(Integer, nullable=False, default=0)
    is_finished = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def total_products(self) -> int:
        return len(self.product_ids or [])

    def __repr__(self):
        return f"<WorkProcess {self.id} - {self.finished_products}/{self.total_products}>"
