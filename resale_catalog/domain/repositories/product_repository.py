"""
Product Repository Interface.

All by-management-number operations resolve to the most recently created row.
"""

from typing import Any, Dict, List, Optional

from resale_catalog.domain.repositories.base import BaseRepository
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.schemas.product import ProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def create_from_groups(
        self,
        groups: Dict[str, List[str]],
        price: Optional[float] = None,
        user_id: Optional[int] = None,
        folder_id: Optional[int] = None,
    ) -> List[Product]:
        """Insert one skeleton row per management number group."""
        ...

    def get_latest_by_management_number(self, management_number: str) -> Optional[Product]:
        ...

    def update_latest_by_management_number(self, management_number: str, fields: Dict[str, Any]) -> Product:
        """Apply a partial update to the latest row; raises EntityNotFoundException."""
        ...

    def delete_latest_by_management_number(self, management_number: str) -> Product:
        """Delete the latest row and return it; raises EntityNotFoundException."""
        ...

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        ...

    def list_for_export(self, filters: ProductFilter) -> List[Product]:
        ...

    def list_by_folder(self, folder_id: int) -> List[Product]:
        ...

    def delete_by_folder(self, folder_id: int) -> List[Product]:
        ...
