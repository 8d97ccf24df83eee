"""Batch orchestrator: walks one work process, one product at a time.

The loop runs outside the request that started it, so it owns its own
database session and runs its blocking database work in the threadpool.
A failed item or progress write is logged and the loop moves on, so the
run always reaches its finish flag.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict

import structlog
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from resale_catalog.domain.models.product import Product
from resale_catalog.domain.models.work_process import WorkProcess
from resale_catalog.domain.schemas.analysis import AnalysisResult
from resale_catalog.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from resale_catalog.infrastructure.repositories.work_process_repository import SQLAlchemyWorkProcessRepository
from resale_catalog.vision.analyzer import VisionAnalyzer

logger = structlog.get_logger(__name__)


@dataclass
class RunSummary:
    processed: int = 0
    analyzed: int = 0
    skipped: int = 0
    failed: int = 0


def analysis_to_product_fields(result: AnalysisResult) -> Dict[str, Any]:
    titles = list(result.title or [])
    return {
        "title": titles[0] if titles else "",
        "candidate_titles": titles,
        "level": result.level,
        "category": result.category,
        "measurement": result.measurement,
        "measurement_type": result.measurement_type.model_dump() if result.measurement_type else None,
        "condition": result.condition,
        "shop1": result.shop1,
        "shop2": result.shop2,
        "shop3": result.shop3,
    }


class BatchOrchestrator:

    def __init__(
        self,
        session_factory: Callable[[], Session],
        analyzer: VisionAnalyzer,
        delay_seconds: float = 1.0,
    ):
        self.session_factory = session_factory
        self.analyzer = analyzer
        self.delay_seconds = delay_seconds

    async def _record(self, db: Session, event: str, write: Callable[..., None], *args, **log_kw) -> bool:
        """Run one progress write off the event loop; a failed write is logged, never raised."""
        try:
            await run_in_threadpool(write, *args)
            return True
        except Exception as e:
            await run_in_threadpool(db.rollback)
            logger.error(event, error=str(e), **log_kw)
            return False

    async def run(self, work_process_id: int) -> RunSummary:
        summary = RunSummary()
        db = self.session_factory()
        try:
            products = SQLAlchemyProductRepository(db, Product)
            runs = SQLAlchemyWorkProcessRepository(db, WorkProcess)

            work_process = await run_in_threadpool(runs.get_by_id, work_process_id)
            if work_process is None:
                logger.warning("Work process not found, nothing to run", work_process_id=work_process_id)
                return summary

            product_ids = list(work_process.product_ids or [])
            logger.info("Batch run started", work_process_id=work_process_id, total_products=len(product_ids))

            for product_id in product_ids:
                await self._record(
                    db, "Batch cursor update failed", runs.set_current_product, work_process_id, product_id,
                    work_process_id=work_process_id, product_id=product_id,
                )
                analyzed = False
                try:
                    analyzed = await self._process_one(products, product_id, summary)
                except Exception as e:
                    await run_in_threadpool(db.rollback)
                    summary.failed += 1
                    logger.error(
                        "Batch item failed",
                        work_process_id=work_process_id,
                        product_id=product_id,
                        error=str(e),
                    )
                await self._record(
                    db, "Batch counter update failed", runs.increment_finished, work_process_id,
                    work_process_id=work_process_id, product_id=product_id,
                )
                summary.processed += 1

                if analyzed and self.delay_seconds > 0:
                    await asyncio.sleep(self.delay_seconds)

            await self._record(
                db, "Batch finish flag update failed", runs.mark_finished, work_process_id,
                work_process_id=work_process_id,
            )
            logger.info(
                "Batch run finished",
                work_process_id=work_process_id,
                processed=summary.processed,
                analyzed=summary.analyzed,
                skipped=summary.skipped,
                failed=summary.failed,
            )
            return summary
        finally:
            db.close()

    async def _process_one(self, products: SQLAlchemyProductRepository, product_id: str, summary: RunSummary) -> bool:
        product = await run_in_threadpool(products.get_latest_by_management_number, product_id)
        if product is None or not product.images:
            summary.skipped += 1
            logger.info("Batch item skipped", product_id=product_id, reason="missing" if product is None else "no images")
            return False

        result = await self.analyzer.analyze(product_id, list(product.images))
        await run_in_threadpool(
            products.update_latest_by_management_number, product_id, analysis_to_product_fields(result)
        )
        summary.analyzed += 1
        return True
