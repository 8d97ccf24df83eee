"""Work process service: run lookup, cancellation and stats."""

from typing import Dict, List

import structlog

from resale_catalog.core.exceptions import EntityNotFoundException, ValidationException
from resale_catalog.domain.models.work_process import WorkProcess
from resale_catalog.domain.repositories.work_process_repository import WorkProcessRepository
from resale_catalog.domain.schemas.work_process import UserWorkProcessStats, WorkProcessStats
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


def get_work_process(repo: WorkProcessRepository, work_process_id: int) -> WorkProcess:
    work_process = repo.get_by_id(work_process_id)
    if work_process is None:
        raise EntityNotFoundException(
            "Work process not found",
            details={"workProcessId": work_process_id},
        )
    return work_process


def prepare_start(repo: WorkProcessRepository, work_process_id: int) -> WorkProcess:
    """Check that a run can be handed to the orchestrator."""
    work_process = get_work_process(repo, work_process_id)
    if work_process.is_finished:
        raise ValidationException(
            "Work process is already finished",
            details={"workProcessId": work_process_id},
        )
    if not work_process.product_ids:
        raise ValidationException(
            "No products available for processing",
            details={"workProcessId": work_process_id},
        )
    return work_process


def force_finish(repo: WorkProcessRepository, work_process_id: int) -> WorkProcess:
    """Operator cancellation. Only flips the flag; a running loop keeps going."""
    work_process = get_work_process(repo, work_process_id)
    repo.mark_finished(work_process.id)
    logger.info(
        "Work process force-finished",
        work_process_id=work_process_id,
        finished_products=work_process.finished_products,
        total_products=work_process.total_products,
    )
    return get_work_process(repo, work_process_id)


def get_active_by_user(
    repo: WorkProcessRepository,
    users: SQLAlchemyUserRepository,
    user_id: int,
) -> List[WorkProcess]:
    if users.get_by_id(user_id) is None:
        raise EntityNotFoundException("User not found", details={"userId": user_id})
    return repo.get_active_by_user(user_id)


def get_stats(repo: WorkProcessRepository, users: SQLAlchemyUserRepository) -> WorkProcessStats:
    runs = repo.list_all()
    by_user: Dict[int, UserWorkProcessStats] = {}

    for run in runs:
        stats = by_user.get(run.user_id)
        if stats is None:
            user = users.get_by_id(run.user_id) if run.user_id is not None else None
            stats = UserWorkProcessStats(user_id=run.user_id, username=user.username if user else None)
            by_user[run.user_id] = stats
        stats.total += 1
        if run.is_finished:
            stats.finished += 1
        else:
            stats.active += 1

    finished = sum(1 for run in runs if run.is_finished)
    return WorkProcessStats(
        total=len(runs),
        finished=finished,
        active=len(runs) - finished,
        by_user=list(by_user.values()),
    )
