"""Folder API routes: upload batches per worker."""

from typing import List

from fastapi import APIRouter, Depends

from resale_catalog.application.services.folder_service import delete_folder, get_folder, list_folders
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.folder import FolderDeleteResult, FolderDetail, FolderRead
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.storage import FileStorage, get_image_storage
from resale_catalog.interfaces.deps import get_folder_repository, get_product_repository

router = APIRouter(prefix="/api/folders", tags=["Folders"])


@router.get("", response_model=List[FolderRead])
def all_folders(repo: SQLAlchemyFolderRepository = Depends(get_folder_repository)):
    return list_folders(repo)


@router.get("/user/{user_id}", response_model=List[FolderRead])
def folders_by_user(user_id: int, repo: SQLAlchemyFolderRepository = Depends(get_folder_repository)):
    return list_folders(repo, user_id=user_id)


@router.get("/{folder_id}", response_model=FolderDetail)
def read_folder(
    folder_id: int,
    repo: SQLAlchemyFolderRepository = Depends(get_folder_repository),
    products: ProductRepository = Depends(get_product_repository),
):
    return get_folder(repo, products, folder_id)


@router.delete("/{folder_id}", response_model=FolderDeleteResult)
def remove_folder(
    folder_id: int,
    repo: SQLAlchemyFolderRepository = Depends(get_folder_repository),
    products: ProductRepository = Depends(get_product_repository),
    storage: FileStorage = Depends(get_image_storage),
):
    """Delete a folder, its products and their image files."""
    return delete_folder(repo, products, storage, folder_id)
