"""User API routes: worker registration."""

from typing import List

from fastapi import APIRouter, Depends, status

from resale_catalog.application.services import user_service
from resale_catalog.domain.schemas.user import UserBulkDeleteRequest, UserBulkDeleteResult, UserRead, UserWrite
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from resale_catalog.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(body: UserWrite, repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    return user_service.create_user(repo, body)


@router.get("", response_model=List[UserRead])
def list_users(repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    return user_service.list_users(repo)


@router.post("/bulk-delete", response_model=UserBulkDeleteResult)
def bulk_delete(body: UserBulkDeleteRequest, repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    return user_service.delete_users(repo, body.ids)


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: int, repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    return user_service.get_user(repo, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, body: UserWrite, repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    return user_service.update_user(repo, user_id, body)


@router.delete("/{user_id}")
def delete_user(user_id: int, repo: SQLAlchemyUserRepository = Depends(get_user_repository)):
    user = user_service.delete_user(repo, user_id)
    return {"message": f"User '{user.username}' deleted", "id": user_id}
