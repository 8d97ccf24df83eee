"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query

from resale_catalog.core.dates import jst_day_bounds
from resale_catalog.core.exceptions import EntityNotFoundException
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.product import ProductFilter
from resale_catalog.infrastructure.repositories.base_repository import SQLAlchemyRepository

# Columns a partial update may touch; identity and ownership stay fixed
UPDATABLE_FIELDS = frozenset({
    "title",
    "candidate_titles",
    "level",
    "measurement",
    "measurement_type",
    "condition",
    "category",
    "category_list",
    "shop1",
    "shop2",
    "shop3",
    "price",
    "images",
})


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def _latest(self, management_number: str) -> Query:
        # Newest row wins; id breaks ties between rows inserted in the same second
        return (
            self.db.query(Product)
            .filter(Product.management_number == management_number)
            .order_by(Product.created_at.desc(), Product.id.desc())
        )

    def _require_latest(self, management_number: str) -> Product:
        product = self._latest(management_number).first()
        if product is None:
            raise EntityNotFoundException(
                f"Product {management_number} not found",
                details={"managementNumber": management_number},
            )
        return product

    def create_from_groups(
        self,
        groups: Dict[str, List[str]],
        price: Optional[float] = None,
        user_id: Optional[int] = None,
        folder_id: Optional[int] = None,
    ) -> List[Product]:
        products = [
            Product(
                management_number=management_number,
                images=list(images),
                candidate_titles=[],
                category_list=[],
                price=price,
                user_id=user_id,
                folder_id=folder_id,
            )
            for management_number, images in groups.items()
        ]
        self.db.add_all(products)
        self.db.commit()
        for product in products:
            self.db.refresh(product)
        return products

    def get_latest_by_management_number(self, management_number: str) -> Optional[Product]:
        return self._latest(management_number).first()

    def update_latest_by_management_number(self, management_number: str, fields: Dict[str, Any]) -> Product:
        product = self._require_latest(management_number)
        for field, value in fields.items():
            if field in UPDATABLE_FIELDS:
                setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_latest_by_management_number(self, management_number: str) -> Product:
        product = self._require_latest(management_number)
        self.db.delete(product)
        self.db.commit()
        return product

    def _filtered(self, filters: ProductFilter) -> Query:
        query = self.db.query(Product)

        if filters.rank:
            query = query.filter(Product.level == filters.rank)
        if filters.date:
            start, end = jst_day_bounds(filters.date)
            query = query.filter(Product.created_at >= start, Product.created_at < end)
        if filters.worker:
            query = query.filter(Product.user_id == filters.worker)
        if filters.category:
            query = query.filter(Product.category.ilike(f"%{filters.category}%"))
        if filters.condition:
            query = query.filter(Product.condition == filters.condition)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(or_(Product.management_number.ilike(pattern), Product.title.ilike(pattern)))
        if filters.folder_id:
            query = query.filter(Product.folder_id == filters.folder_id)

        return query.order_by(Product.created_at.desc(), Product.id.desc())

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        """Get products with filtering and pagination."""
        query = self._filtered(filters)
        total = query.count()
        offset = (filters.page - 1) * filters.limit
        products = query.offset(offset).limit(filters.limit).all()

        return {
            "products": products,
            "total": total,
            "page": filters.page,
            "limit": filters.limit,
            "total_pages": (total + filters.limit - 1) // filters.limit,
        }

    def list_for_export(self, filters: ProductFilter) -> List[Product]:
        return self._filtered(filters).all()

    def list_by_folder(self, folder_id: int) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.folder_id == folder_id)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

    def delete_by_folder(self, folder_id: int) -> List[Product]:
        products = self.list_by_folder(folder_id)
        for product in products:
            self.db.delete(product)
        self.db.commit()
        return products
