"""Pydantic schemas for the cascading category picker."""

from typing import Optional

from resale_catalog.domain.schemas.common import CamelModel


class CategoryOption(CamelModel):
    name: str
    code: Optional[str] = None
    has_children: bool


class CategorySelection(CamelModel):
    """Parent path for the level being requested, plus the product being edited."""
    category: Optional[str] = None
    category2: Optional[str] = None
    category3: Optional[str] = None
    category4: Optional[str] = None
    category5: Optional[str] = None
    category6: Optional[str] = None
    category7: Optional[str] = None
    category8: Optional[str] = None
    product_id: Optional[str] = None

    def path(self) -> dict[str, str]:
        return {
            key: value
            for key, value in self.model_dump(exclude={"product_id"}).items()
            if value
        }


class CategoryLevelResponse(CamelModel):
    level: int
    categories: list[CategoryOption]
    category_list: Optional[list[str]] = None


class CategoryCodeRead(CamelModel):
    code: Optional[str] = None
