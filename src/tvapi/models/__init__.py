"""
TV Catalog Models Package

Entity schemas (pydantic) and the per-entity-type definitions the CRUD handler
is configured with.
"""

from .entity import (
    ACTORS,
    CREATED_AT_FIELD,
    ENTITY_DEFINITIONS,
    ID_FIELD,
    SYSTEM_FIELDS,
    TV_SHOWS,
    UPDATED_AT_FIELD,
    CreateActorRequest,
    CreateTvShowRequest,
    EntityDefinition,
    UpdateActorRequest,
    UpdateTvShowRequest,
    get_entity_definition,
    utc_timestamp,
)
from .output import ListOutput, Operation, OperationResult

__all__ = [
    # Operation results
    "Operation",
    "OperationResult",
    "ListOutput",

    # Request models
    "CreateActorRequest",
    "UpdateActorRequest",
    "CreateTvShowRequest",
    "UpdateTvShowRequest",

    # Entity definitions
    "EntityDefinition",
    "ACTORS",
    "TV_SHOWS",
    "ENTITY_DEFINITIONS",
    "get_entity_definition",

    # Field names and helpers
    "ID_FIELD",
    "CREATED_AT_FIELD",
    "UPDATED_AT_FIELD",
    "SYSTEM_FIELDS",
    "utc_timestamp",
]
