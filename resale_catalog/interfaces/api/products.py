"""Products API routes: review, edit and delete by management number."""

from fastapi import APIRouter, Depends

from resale_catalog.application.services.product_service import (
    delete_product,
    delete_products,
    get_product,
    list_products,
    select_candidate_title,
    update_product,
)
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.product import (
    BulkDeleteRequest,
    BulkDeleteResult,
    CandidateTitlesRead,
    CategoryListRead,
    ProductFilter,
    ProductPage,
    ProductRead,
    ProductUpdate,
    SelectTitleRequest,
)
from resale_catalog.infrastructure.storage import FileStorage, get_image_storage
from resale_catalog.interfaces.deps import get_product_filter, get_product_repository

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductPage)
def list_all(
    filters: ProductFilter = Depends(get_product_filter),
    repo: ProductRepository = Depends(get_product_repository),
):
    """List products with filtering and pagination, newest first."""
    return list_products(repo, filters)


@router.post("/bulk-delete", response_model=BulkDeleteResult)
def bulk_delete(
    body: BulkDeleteRequest,
    repo: ProductRepository = Depends(get_product_repository),
    storage: FileStorage = Depends(get_image_storage),
):
    return delete_products(repo, storage, body.management_numbers)


@router.get("/{management_number}", response_model=ProductRead)
def read_product(
    management_number: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    return get_product(repo, management_number)


@router.put("/{management_number}", response_model=ProductRead)
def edit_product(
    management_number: str,
    body: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
):
    return update_product(repo, management_number, body)


@router.delete("/{management_number}")
def remove_product(
    management_number: str,
    repo: ProductRepository = Depends(get_product_repository),
    storage: FileStorage = Depends(get_image_storage),
):
    deletion = delete_product(repo, storage, management_number)
    return {
        "message": f"Product {management_number} deleted",
        "managementNumber": management_number,
        "removedImages": deletion.images.removed,
        "failedImages": deletion.images.failed,
    }


@router.get("/{management_number}/candidate-titles", response_model=CandidateTitlesRead)
def candidate_titles(
    management_number: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    product = get_product(repo, management_number)
    return CandidateTitlesRead(
        management_number=product.management_number,
        candidate_titles=product.candidate_titles or [],
    )


@router.post("/{management_number}/select-title", response_model=ProductRead)
def select_title(
    management_number: str,
    body: SelectTitleRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    return select_candidate_title(repo, management_number, body.selected_title)


@router.get("/{management_number}/category-list", response_model=CategoryListRead)
def category_list(
    management_number: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    product = get_product(repo, management_number)
    return CategoryListRead(
        management_number=product.management_number,
        category_list=product.category_list or [],
    )
