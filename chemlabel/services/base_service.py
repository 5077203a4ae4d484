import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from chemlabel.core.exceptions import AppError, DatabaseError
from chemlabel.repositories.base_repository import BaseRepository
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base class for SDS services.

    ``execute`` validates the input, runs the service and normalises
    failures: application errors pass through unchanged, database errors
    become ``DatabaseError`` and anything else becomes ``AppError``.
    """

    def __init__(self, repository: Optional[BaseRepository] = None):
        """Initialize the service.

        Args:
            repository: Primary repository of the service
        """
        self.repository = repository
        self.logger = LOGGER

    @property
    def service_name(self) -> str:
        return type(self).__name__

    async def execute(self, *args, **kwargs) -> Any:
        """Validate and run the service.

        Returns:
            Result of ``run``

        Raises:
            AppError: If validation or execution fails
        """
        started = time.perf_counter()
        try:
            self.validate(*args, **kwargs)
            result = await self.run(*args, **kwargs)

        except AppError as e:
            self.logger.warning(
                f"{self.service_name} rejected request: {str(e)}",
                extra={"service": self.service_name, "error_type": type(e).__name__},
            )
            raise

        except SQLAlchemyError as e:
            self.logger.error(
                f"{self.service_name} database operation failed: {str(e)}",
                exc_info=True,
                extra={"service": self.service_name},
            )
            raise DatabaseError(f"Database operation failed: {str(e)}", original_error=e) from e

        except Exception as e:
            self.logger.error(
                f"Service execution failed: {str(e)}",
                exc_info=True,
                extra={"service": self.service_name},
            )
            raise AppError(f"Service execution failed: {str(e)}", original_error=e) from e

        self.logger.debug(
            f"{self.service_name} completed",
            extra={"service": self.service_name, "duration_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return result

    def validate(self, *args, **kwargs) -> None:
        """Check service input before ``run``.

        Raises:
            ValidationError: If input is invalid
        """

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Run the core service logic."""
