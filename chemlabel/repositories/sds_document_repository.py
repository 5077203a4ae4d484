"""Repository for SDS document records."""

from typing import Any, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chemlabel.database.models import SDSDocument
from chemlabel.repositories.base_repository import BaseRepository


class SDSDocumentRepository(BaseRepository[SDSDocument]):
    """Reads SDS documents and writes extraction results back to them."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, SDSDocument)

    async def get_batch_candidates(
        self,
        document_ids: Optional[Sequence[UUID]] = None,
        facility_id: Optional[UUID] = None,
        quality_threshold: int = 50,
        force_reprocess: bool = False,
        limit: int = 50,
    ) -> List[SDSDocument]:
        """Select documents for batch re-extraction.

        Explicit ``document_ids`` take precedence over the quality filter.
        Without IDs, documents scoring below ``quality_threshold`` (or never
        scored) are selected, unless ``force_reprocess`` drops that filter.

        Args:
            document_ids: Explicit documents to consider
            facility_id: Optional facility scope
            quality_threshold: Score below which a document is a candidate
            force_reprocess: Skip the quality filter entirely
            limit: Maximum number of documents returned

        Returns:
            Candidate documents, oldest extraction first
        """
        if document_ids:
            query = select(SDSDocument).where(SDSDocument.id.in_(list(document_ids)))
        else:
            query = select(SDSDocument)
            if not force_reprocess:
                query = query.where(
                    or_(
                        SDSDocument.extraction_quality_score.is_(None),
                        SDSDocument.extraction_quality_score < quality_threshold,
                    )
                )

        if facility_id is not None:
            query = query.where(SDSDocument.facility_id == facility_id)

        query = query.order_by(SDSDocument.last_extracted_at.asc().nulls_first()).limit(limit)

        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error selecting batch candidates: {str(e)}",
                exc_info=True,
                extra={
                    "facility_id": str(facility_id) if facility_id else None,
                    "quality_threshold": quality_threshold,
                    "force_reprocess": force_reprocess,
                },
            )
            raise

    async def save_extraction(self, document_id: UUID, fields: dict[str, Any]) -> Optional[SDSDocument]:
        """Overwrite the extracted fields of a document.

        Args:
            document_id: Target document
            fields: Column values produced by the extraction pipeline

        Returns:
            The updated document, or None if it no longer exists
        """
        return await self.update(document_id, **fields)
