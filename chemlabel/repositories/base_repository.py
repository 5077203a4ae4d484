from datetime import datetime, timezone
from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chemlabel.utils.logging import get_logger

ModelType = TypeVar("ModelType")

LOGGER = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """Primary-key lookup and partial update shared by the SDS repositories.

    Database errors are logged with the table and row involved and then
    re-raised; ``BaseService.execute`` turns them into ``DatabaseError``.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model
        self.logger = LOGGER

    @property
    def table_name(self) -> str:
        return getattr(self.model, "__tablename__", self.model.__name__)

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        try:
            result = await self.session.execute(select(self.model).where(self.model.id == id))
        except SQLAlchemyError as e:
            self.logger.error(
                f"Lookup in {self.table_name} failed: {str(e)}",
                exc_info=True,
                extra={"document_id": str(id)},
            )
            raise
        return result.scalar_one_or_none()

    async def update(self, id: UUID, **fields) -> Optional[ModelType]:
        """Apply ``fields`` to one row and commit.

        Keys that are not mapped columns are ignored. ``updated_at`` is
        stamped when the model has it.

        Args:
            id: Primary key of the row
            **fields: Column values to write

        Returns:
            The refreshed instance, or None when the row does not exist
        """
        instance = await self.get_by_id(id)
        if instance is None:
            return None

        for column, value in fields.items():
            if hasattr(instance, column):
                setattr(instance, column, value)
        if hasattr(instance, "updated_at"):
            instance.updated_at = datetime.now(timezone.utc)

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                f"Update of {self.table_name} row failed: {str(e)}",
                exc_info=True,
                extra={"document_id": str(id), "columns": sorted(fields)},
            )
            raise
        return instance
