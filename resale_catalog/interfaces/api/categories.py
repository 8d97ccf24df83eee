"""Category API routes: cascading picker backed by the seeded tree."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from resale_catalog.application.services import category_service
from resale_catalog.application.services.product_service import record_category_path, record_category_selection
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.category import CategoryCodeRead, CategoryLevelResponse, CategorySelection
from resale_catalog.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from resale_catalog.interfaces.deps import get_category_repository, get_product_repository

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("/top-level", response_model=List[str])
def top_level(repo: SQLAlchemyCategoryRepository = Depends(get_category_repository)):
    return category_service.top_level(repo)


@router.post("/level/{level}", response_model=CategoryLevelResponse)
def categories_for_level(
    level: int,
    body: CategorySelection,
    repo: SQLAlchemyCategoryRepository = Depends(get_category_repository),
    products: ProductRepository = Depends(get_product_repository),
):
    """Options for `level` under the posted parent path.

    With a productId, the parent chosen at `level - 1` is recorded on the
    product's category list.
    """
    path = body.path()
    options = category_service.options_for_level(repo, level, path)

    category_list = None
    if body.product_id:
        category_list = record_category_selection(products, body.product_id, level - 1, path)

    return CategoryLevelResponse(level=level, categories=options, category_list=category_list)


@router.get("/code", response_model=CategoryCodeRead)
def category_code(
    category: str,
    category2: Optional[str] = None,
    category3: Optional[str] = None,
    category4: Optional[str] = None,
    category5: Optional[str] = None,
    category6: Optional[str] = None,
    category7: Optional[str] = None,
    category8: Optional[str] = None,
    product_id: Optional[str] = Query(None, alias="productId"),
    repo: SQLAlchemyCategoryRepository = Depends(get_category_repository),
    products: ProductRepository = Depends(get_product_repository),
):
    """Leaf code for a complete path; with a productId the path is recorded too."""
    selection = CategorySelection(
        category=category,
        category2=category2,
        category3=category3,
        category4=category4,
        category5=category5,
        category6=category6,
        category7=category7,
        category8=category8,
    )
    path = selection.path()
    code = category_service.code_for_path(repo, path)
    if product_id:
        record_category_path(products, product_id, path)
    return CategoryCodeRead(code=code)
