"""Bounded-concurrency re-extraction of low quality SDS documents."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence
from uuid import UUID

from chemlabel.core.config import BatchSettings, settings
from chemlabel.core.database import async_session_maker
from chemlabel.core.exceptions import ValidationError
from chemlabel.database.models import SDSDocument
from chemlabel.repositories.sds_document_repository import SDSDocumentRepository
from chemlabel.services.base_service import BaseService
from chemlabel.services.extraction.sds_extraction_orchestrator import ExtractionResult, SDSExtractionOrchestrator

ExtractionRunner = Callable[[SDSDocument], Awaitable[ExtractionResult]]


async def run_extraction_in_session(document: SDSDocument) -> ExtractionResult:
    """Re-extract one document through its own database session.

    Concurrent extractions never share a session.
    """
    async with async_session_maker() as session:
        orchestrator = SDSExtractionOrchestrator(SDSDocumentRepository(session))
        return await orchestrator.execute(document.id)


@dataclass
class BatchResult:
    total_documents: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    quality_threshold: int = 50
    force_reprocess: bool = False

    @property
    def message(self) -> str:
        return (
            f"Batch processing completed: {self.processed} processed, "
            f"{self.skipped} skipped, {self.failed} failed"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "message": self.message,
            "total_documents": self.total_documents,
            "processed": self.processed,
            "skipped": self.skipped,
            "failed": self.failed,
            "errors": self.errors,
            "quality_threshold": self.quality_threshold,
            "force_reprocess": self.force_reprocess,
        }


class SDSBatchProcessor(BaseService):
    """Re-runs extraction over documents whose quality score is below a threshold.

    Documents are processed in sub-batches: every document in a sub-batch runs
    concurrently, sub-batches run one after another with a fixed delay in
    between. One document failing is recorded and never stops the batch; only
    failing to load the candidates aborts it.
    """

    def __init__(
        self,
        repository: SDSDocumentRepository,
        extraction_runner: Optional[ExtractionRunner] = None,
        batch_settings: Optional[BatchSettings] = None,
    ):
        super().__init__(repository)
        self.extraction_runner = extraction_runner or run_extraction_in_session
        self.config = batch_settings or settings.batch

    def validate(
        self,
        facility_id: Optional[UUID] = None,
        document_ids: Optional[Sequence[UUID]] = None,
        quality_threshold: Optional[int] = None,
        force_reprocess: bool = False,
    ) -> None:
        if quality_threshold is not None and not 0 <= quality_threshold <= 100:
            raise ValidationError("quality_threshold must be between 0 and 100")

    async def run(
        self,
        facility_id: Optional[UUID] = None,
        document_ids: Optional[Sequence[UUID]] = None,
        quality_threshold: Optional[int] = None,
        force_reprocess: bool = False,
    ) -> BatchResult:
        threshold = self.config.quality_threshold if quality_threshold is None else quality_threshold

        candidates = await self.repository.get_batch_candidates(
            document_ids=document_ids,
            facility_id=facility_id,
            quality_threshold=threshold,
            force_reprocess=force_reprocess,
            limit=self.config.max_documents,
        )
        candidates = candidates[: self.config.max_documents]

        result = BatchResult(
            total_documents=len(candidates),
            quality_threshold=threshold,
            force_reprocess=force_reprocess,
        )

        to_process: list[SDSDocument] = []
        for document in candidates:
            if self.should_skip(document, threshold, force_reprocess):
                result.skipped += 1
            else:
                to_process.append(document)

        self.logger.info(
            "Starting SDS batch processing",
            extra={
                "total_documents": result.total_documents,
                "to_process": len(to_process),
                "skipped": result.skipped,
                "quality_threshold": threshold,
                "force_reprocess": force_reprocess,
            },
        )

        batches = [
            to_process[start:start + self.config.batch_size]
            for start in range(0, len(to_process), self.config.batch_size)
        ]
        for index, batch in enumerate(batches):
            if index > 0:
                await asyncio.sleep(self.config.delay_seconds)

            self.logger.info(
                f"Processing sub-batch {index + 1}/{len(batches)}",
                extra={"batch_size": len(batch)},
            )
            outcomes = await asyncio.gather(
                *(self.extraction_runner(document) for document in batch),
                return_exceptions=True,
            )
            for document, outcome in zip(batch, outcomes):
                self._record_outcome(result, document, outcome)

        self.logger.info(
            result.message,
            extra={
                "processed": result.processed,
                "skipped": result.skipped,
                "failed": result.failed,
            },
        )
        return result

    @staticmethod
    def should_skip(document: SDSDocument, quality_threshold: int, force_reprocess: bool) -> bool:
        if not document.document_url:
            return True
        if force_reprocess:
            return False
        score = document.extraction_quality_score
        return score is not None and score >= quality_threshold

    def _record_outcome(self, result: BatchResult, document: SDSDocument, outcome: Any) -> None:
        if isinstance(outcome, BaseException):
            error = str(outcome)
        elif not outcome.persisted:
            error = outcome.persistence_error or "extraction result was not saved"
        else:
            result.processed += 1
            return

        result.failed += 1
        label = document.product_name or str(document.id)
        self.logger.error(
            "SDS batch extraction failed",
            exc_info=outcome if isinstance(outcome, BaseException) else None,
            extra={"document_id": str(document.id), "error": error},
        )
        if len(result.errors) < self.config.max_reported_errors:
            result.errors.append(f"{label}: {error}")
