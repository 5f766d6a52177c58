"""
Base service layer for unified store access
"""

import logging
from typing import Any, Awaitable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NOT_FOUND = "RESOURCE_NOT_FOUND"
EXECUTION_ERROR = "EXECUTION_ERROR"

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def first(self) -> Optional[Dict[str, Any]]:
        return self.data[0] if self.data else None


class BaseService:
    """Base service that turns store calls into ServiceResult values"""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        logger.info(f"BaseService initialized for resource: {resource_name}")

    async def _many(self, operation: str, call: Awaitable[List[Dict[str, Any]]]) -> ServiceResult:
        """
        Await a store call returning a list of records

        Args:
            operation: Operation name for logging
            call: Awaitable store call

        Returns:
            ServiceResult with all records
        """
        try:
            records = await call
        except Exception as e:
            logger.error(f"{operation} operation failed for {self.resource_name}: {e}", exc_info=True)
            return ServiceResult(success=False, error=str(e), error_type=EXECUTION_ERROR)

        return ServiceResult(success=True, data=records, count=len(records))

    async def _one(
        self,
        operation: str,
        call: Awaitable[Optional[Dict[str, Any]]],
        record_id: Optional[str] = None
    ) -> ServiceResult:
        """
        Await a store call returning a single record or None

        Args:
            operation: Operation name for logging
            call: Awaitable store call
            record_id: Identifier used for the not-found message

        Returns:
            ServiceResult with one record, or a RESOURCE_NOT_FOUND failure
        """
        try:
            record = await call
        except Exception as e:
            logger.error(f"{operation} operation failed for {self.resource_name}: {e}", exc_info=True)
            return ServiceResult(success=False, error=str(e), error_type=EXECUTION_ERROR)

        if record is None:
            return ServiceResult(
                success=False,
                error=f"Record not found with ID: {record_id}",
                error_type=NOT_FOUND
            )

        return ServiceResult(success=True, data=[record], count=1)
