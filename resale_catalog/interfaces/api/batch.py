"""Batch API routes: image upload, run start, progress and cancellation."""

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile

from resale_catalog.application.services.batch_orchestrator import BatchOrchestrator
from resale_catalog.application.services.batch_service import ingest_upload
from resale_catalog.application.services.upload_grouper import IncomingFile
from resale_catalog.application.services.work_process_service import (
    force_finish,
    get_active_by_user,
    get_stats,
    get_work_process,
    prepare_start,
)
from resale_catalog.config import get_settings
from resale_catalog.core.dates import now_jst
from resale_catalog.core.exceptions import ValidationException
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.repositories.work_process_repository import WorkProcessRepository
from resale_catalog.domain.schemas.batch import UploadResponse
from resale_catalog.domain.schemas.work_process import (
    StartProcessingRequest,
    StartProcessingResponse,
    WorkProcessRead,
    WorkProcessStats,
)
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from resale_catalog.infrastructure.storage import FileStorage, get_image_storage
from resale_catalog.interfaces.deps import (
    get_batch_orchestrator,
    get_folder_repository,
    get_product_repository,
    get_user_repository,
    get_work_process_repository,
)

settings = get_settings()
router = APIRouter(prefix="/api/batch", tags=["Batch"])


@router.post("/upload-directory", response_model=UploadResponse)
async def upload_directory(
    images: List[UploadFile] = File(...),
    user_id: int = Form(..., alias="userId"),
    price: Optional[float] = Form(None),
    folder_name: Optional[str] = Form(None, alias="folderName"),
    products: ProductRepository = Depends(get_product_repository),
    work_processes: WorkProcessRepository = Depends(get_work_process_repository),
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
    folders: SQLAlchemyFolderRepository = Depends(get_folder_repository),
    storage: FileStorage = Depends(get_image_storage),
):
    if len(images) > settings.MAX_UPLOAD_FILES:
        raise ValidationException(
            f"Too many files. Maximum is {settings.MAX_UPLOAD_FILES}",
            details={"totalFiles": len(images)},
        )
    if price is not None and price < 0:
        raise ValidationException("Price must not be negative", details={"price": price})

    files = []
    for upload in images:
        # One byte past the ceiling is enough to know a file is oversized
        content = await upload.read(settings.MAX_UPLOAD_FILE_SIZE + 1)
        if len(content) > settings.MAX_UPLOAD_FILE_SIZE:
            size = upload.size or len(content)
            content = None
        else:
            size = len(content)
        await upload.close()
        files.append(IncomingFile(filename=upload.filename or "", size=size, content=content))

    return ingest_upload(
        files,
        user_id,
        products=products,
        work_processes=work_processes,
        users=users,
        folders=folders,
        storage=storage,
        max_file_size=settings.MAX_UPLOAD_FILE_SIZE,
        price=price,
        folder_name=folder_name,
    )


@router.post("/start-processing", response_model=StartProcessingResponse)
def start_processing(
    body: StartProcessingRequest,
    background_tasks: BackgroundTasks,
    repo: WorkProcessRepository = Depends(get_work_process_repository),
    orchestrator: BatchOrchestrator = Depends(get_batch_orchestrator),
):
    """Schedule the run and return straight away; poll the work process for progress."""
    work_process = prepare_start(repo, body.work_process_id)
    background_tasks.add_task(orchestrator.run, work_process.id)
    return StartProcessingResponse(
        work_process_id=work_process.id,
        total_products=work_process.total_products,
        start_time=now_jst(),
    )


@router.get("/work-process/{work_process_id}", response_model=WorkProcessRead)
def read_work_process(
    work_process_id: int,
    repo: WorkProcessRepository = Depends(get_work_process_repository),
):
    return get_work_process(repo, work_process_id)


@router.patch("/work-process/{work_process_id}/finish", response_model=WorkProcessRead)
def finish_work_process(
    work_process_id: int,
    repo: WorkProcessRepository = Depends(get_work_process_repository),
):
    return force_finish(repo, work_process_id)


@router.get("/users/{user_id}/work-processes", response_model=List[WorkProcessRead])
def active_work_processes(
    user_id: int,
    repo: WorkProcessRepository = Depends(get_work_process_repository),
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
):
    return get_active_by_user(repo, users, user_id)


@router.get("/work-processes/stats", response_model=WorkProcessStats)
def work_process_stats(
    repo: WorkProcessRepository = Depends(get_work_process_repository),
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
):
    return get_stats(repo, users)
