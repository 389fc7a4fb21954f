"""
Error taxonomy for the CRUD API.

Every failure a request can end in is one of the exceptions below. Each carries
the HTTP status code it is rendered with, so the response formatter never has to
guess. All of them are terminal for the request: nothing is retried.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from tvapi.handlers.utils.observability import logger, metrics, tracer

SERVER_FAULT_MESSAGE = 'Internal server error'


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    ROUTING = "ROUTING"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.user_message = user_message or message
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "status_code": self.status_code,
            "message": self.message,
            "user_message": self.user_message,
            "category": self.category.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class EntityValidationError(BaseServiceError):
    """Raised when caller-supplied data is malformed or missing."""

    status_code = 400

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            category=ErrorCategory.VALIDATION,
        )
        self.field_errors = field_errors or []


class EntityNotFoundError(BaseServiceError):
    """Raised when the referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity_label: str, collection: str, entity_id: str):
        super().__init__(
            message=f"{entity_label} with id {entity_id} not found in {collection}",
            error_code="RESOURCE_NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
        )
        self.collection = collection
        self.entity_id = entity_id


class EntityConflictError(BaseServiceError):
    """Raised when a create collides with an existing identifier."""

    status_code = 409

    def __init__(self, entity_label: str, entity_id: str):
        super().__init__(
            message=f"{entity_label} with id {entity_id} already exists",
            error_code="RESOURCE_CONFLICT",
            category=ErrorCategory.CONFLICT,
        )
        self.entity_id = entity_id


class UnmatchedRouteError(BaseServiceError):
    """Raised when no operation matches the method and path."""

    status_code = 400

    def __init__(self, method: str, path: str):
        super().__init__(
            message=f"Unsupported operation: {method} {path}",
            error_code="UNMATCHED_ROUTE",
            category=ErrorCategory.ROUTING,
        )
        self.method = method
        self.path = path


class ServerFaultError(BaseServiceError):
    """Raised for missing configuration or an underlying store fault.

    The user-facing message is always the generic one; ``message`` keeps the
    detail for the logs.
    """

    status_code = 500

    def __init__(self, message: str, error_code: str = "INTERNAL_SERVER_ERROR"):
        super().__init__(
            message=message,
            error_code=error_code,
            category=ErrorCategory.INFRASTRUCTURE,
            user_message=SERVER_FAULT_MESSAGE,
        )


class StoreFaultError(ServerFaultError):
    """Raised by an entity gateway when the backing table call fails."""

    def __init__(self, message: str, operation: str, table_name: str):
        super().__init__(message=message, error_code="STORE_FAULT")
        self.operation = operation
        self.table_name = table_name


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    if error.status_code >= 500:
        metrics.add_metric(name="ServerFault", unit=MetricUnit.Count, value=1)
    else:
        metrics.add_metric(name="ClientError", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.error if error.status_code >= 500 else logger.info
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_category": error.category.value,
            "error_message": error.message,
            "status_code": error.status_code,
        },
    )
