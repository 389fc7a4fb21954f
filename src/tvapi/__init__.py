"""
TV Catalog CRUD Service.

One implementation of the request-routing and CRUD contract, shared by every
entity collection of the TV catalog API:

- handlers: Lambda entry points, routing, response formatting
- logic: the five CRUD operations
- dal: entity store gateways (DynamoDB, in-memory)
- models: entity schemas and operation results
"""

__version__ = "1.0.0"
__description__ = "TV actors and TV shows CRUD API on AWS Lambda and DynamoDB"

from tvapi.handlers.utils.observability import logger, metrics, tracer
from tvapi.models.entity import ACTORS, TV_SHOWS, EntityDefinition
from tvapi.models.output import Operation, OperationResult

__all__ = [
    "ACTORS",
    "TV_SHOWS",
    "EntityDefinition",
    "Operation",
    "OperationResult",
    "logger",
    "tracer",
    "metrics",
]
