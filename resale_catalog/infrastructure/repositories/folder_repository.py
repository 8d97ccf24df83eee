"""SQLAlchemy repository for upload folders."""

from typing import List, Optional, Tuple

from sqlalchemy import func

from resale_catalog.domain.models.folder import Folder
from resale_catalog.domain.models.product import Product
from resale_catalog.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyFolderRepository(SQLAlchemyRepository[Folder]):

    def get_by_user_and_name(self, user_id: int, foldername: str) -> Optional[Folder]:
        return (
            self.db.query(Folder)
            .filter(Folder.user_id == user_id, Folder.foldername == foldername)
            .first()
        )

    def create_or_get(self, user_id: int, foldername: str) -> Folder:
        existing = self.get_by_user_and_name(user_id, foldername)
        if existing:
            return existing
        return self.create({"user_id": user_id, "foldername": foldername, "number_of_uploaded_products": 0})

    def increment_product_count(self, folder_id: int, count: int = 1) -> None:
        (
            self.db.query(Folder)
            .filter(Folder.id == folder_id)
            .update(
                {Folder.number_of_uploaded_products: Folder.number_of_uploaded_products + count},
                synchronize_session=False,
            )
        )
        self.db.commit()

    def set_excel_file_name(self, folder_id: int, file_name: str) -> None:
        self.db.query(Folder).filter(Folder.id == folder_id).update(
            {Folder.excel_file_name: file_name}, synchronize_session=False
        )
        self.db.commit()

    def list_with_counts(self, user_id: Optional[int] = None) -> List[Tuple[Folder, int]]:
        """Folders, newest first, paired with their live product count."""
        counts = (
            self.db.query(Product.folder_id, func.count(Product.id).label("product_count"))
            .group_by(Product.folder_id)
            .subquery()
        )
        query = (
            self.db.query(Folder, func.coalesce(counts.c.product_count, 0))
            .outerjoin(counts, counts.c.folder_id == Folder.id)
        )
        if user_id is not None:
            query = query.filter(Folder.user_id == user_id)
        return [(folder, count) for folder, count in query.order_by(Folder.created_at.desc(), Folder.id.desc()).all()]
