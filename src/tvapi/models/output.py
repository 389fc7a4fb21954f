"""
Output models for CRUD operation results.

An ``OperationResult`` is the successful outcome of an operation before it is
rendered into an API Gateway response. Failures are exceptions, see
``tvapi.handlers.utils.errors``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Operation(str, Enum):
    """The five operations every entity collection supports."""

    LIST = 'List'
    GET_BY_ID = 'GetByID'
    CREATE = 'Create'
    UPDATE = 'Update'
    DELETE = 'Delete'


class ListOutput(BaseModel):
    """Body of a successful List operation."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0


class OperationResult(BaseModel):
    """Successful outcome of a CRUD operation."""

    operation: Operation
    status_code: int
    body: Optional[Dict[str, Any]] = None
