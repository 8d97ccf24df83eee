"""User service: worker registration."""

from typing import List, Optional

import structlog

from resale_catalog.core.exceptions import AppError, ConflictException, EntityNotFoundException, ValidationException
from resale_catalog.domain.models.user import User
from resale_catalog.domain.schemas.user import UserBulkDeleteResult, UserWrite
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


def _clean_username(data: UserWrite) -> str:
    username = (data.username or "").strip()
    if not username:
        raise ValidationException("Username is required")
    return username


def _ensure_available(repo: SQLAlchemyUserRepository, username: str, user_id: Optional[int] = None) -> None:
    existing = repo.get_by_username(username)
    if existing and existing.id != user_id:
        raise ConflictException("Username already exists", details={"username": username})


def get_user(repo: SQLAlchemyUserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found", details={"userId": user_id})
    return user


def list_users(repo: SQLAlchemyUserRepository) -> List[User]:
    return repo.list_newest_first()


def create_user(repo: SQLAlchemyUserRepository, data: UserWrite) -> User:
    username = _clean_username(data)
    _ensure_available(repo, username)
    user = repo.create({"username": username})
    logger.info("User created", user_id=user.id, username=username)
    return user


def update_user(repo: SQLAlchemyUserRepository, user_id: int, data: UserWrite) -> User:
    user = get_user(repo, user_id)
    username = _clean_username(data)
    _ensure_available(repo, username, user_id=user.id)
    return repo.update(user, {"username": username})


def delete_user(repo: SQLAlchemyUserRepository, user_id: int) -> User:
    user = get_user(repo, user_id)
    repo.delete(user.id)
    logger.info("User deleted", user_id=user_id)
    return user


def delete_users(repo: SQLAlchemyUserRepository, user_ids: List[int]) -> UserBulkDeleteResult:
    deleted: List[int] = []
    failed: List[int] = []
    for user_id in user_ids:
        try:
            delete_user(repo, user_id)
            deleted.append(user_id)
        except AppError as e:
            logger.warning("Failed to delete user", user_id=user_id, error=e.message)
            failed.append(user_id)
    return UserBulkDeleteResult(deleted=deleted, failed=failed)
