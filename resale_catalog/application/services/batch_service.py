"""Batch upload service: turns an uploaded image set into products and a run."""

from typing import List, Optional

import structlog

from resale_catalog.application.services.upload_grouper import IncomingFile, group_files, stored_filename
from resale_catalog.core.exceptions import EntityNotFoundException, ValidationException
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.repositories.work_process_repository import WorkProcessRepository
from resale_catalog.domain.schemas.batch import (
    ProductGroupRead,
    SkippedFileRead,
    UploadResponse,
    UploadSummary,
)
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from resale_catalog.infrastructure.storage import FileStorage

logger = structlog.get_logger(__name__)


def ingest_upload(
    files: List[IncomingFile],
    user_id: int,
    *,
    products: ProductRepository,
    work_processes: WorkProcessRepository,
    users: SQLAlchemyUserRepository,
    folders: SQLAlchemyFolderRepository,
    storage: FileStorage,
    max_file_size: int,
    price: Optional[float] = None,
    folder_name: Optional[str] = None,
) -> UploadResponse:
    """Store valid images, create one product per group and a pending work process.

    Fails as a whole when nothing valid is left after grouping.
    """
    if not files:
        raise ValidationException("No images provided")

    user = users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found", details={"userId": user_id})

    grouping = group_files(files, max_file_size)
    skipped = [SkippedFileRead(filename=s.filename, reason=s.reason) for s in grouping.skipped]

    for s in grouping.skipped:
        logger.info("Upload file skipped", filename=s.filename, reason=s.reason)

    if not grouping.groups:
        raise ValidationException(
            "No valid images to process",
            details={"skippedFiles": [s.model_dump(by_alias=True) for s in skipped]},
        )

    for incoming in grouping.accepted:
        storage.save(stored_filename(incoming.filename), incoming.content or b"")

    folder_id = None
    if folder_name and folder_name.strip():
        folder = folders.create_or_get(user.id, folder_name.strip())
        folder_id = folder.id

    created = products.create_from_groups(grouping.groups, price=price, user_id=user.id, folder_id=folder_id)
    if folder_id is not None:
        folders.increment_product_count(folder_id, len(created))

    run = work_processes.create_run(user.id, list(grouping.groups.keys()))

    logger.info(
        "Batch upload accepted",
        work_process_id=run.id,
        user_id=user.id,
        folder_id=folder_id,
        total_files=len(files),
        total_products=len(grouping.groups),
        skipped_files=len(skipped),
    )

    return UploadResponse(
        work_process_id=run.id,
        total_images=len(grouping.accepted),
        total_products=len(grouping.groups),
        folder_id=folder_id,
        upload_summary=UploadSummary(
            total_files=len(files),
            valid_files=len(grouping.accepted),
            skipped_files=skipped,
        ),
        product_groups=[
            ProductGroupRead(product_id=management_number, image_count=len(images), images=images)
            for management_number, images in grouping.groups.items()
        ],
    )
