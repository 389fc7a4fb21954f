"""
Business Logic Layer for entity CRUD.

``EntityService`` implements the five operations against an entity store
gateway. It holds no entity state between calls; every operation re-reads what
it needs. Create and Update are check-then-act over two separate store calls
and are not atomic: concurrent writers race and the last write wins.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import ValidationError

from tvapi.dal import Entity, EntityGateway
from tvapi.handlers.utils.errors import (
    EntityConflictError,
    EntityNotFoundError,
    EntityValidationError,
    ServerFaultError,
)
from tvapi.handlers.utils.observability import logger, metrics, tracer
from tvapi.models.entity import (
    CREATED_AT_FIELD,
    SYSTEM_FIELDS,
    UPDATED_AT_FIELD,
    EntityDefinition,
    utc_timestamp,
)
from tvapi.models.output import ListOutput, Operation, OperationResult

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_field_errors(error: ValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into ``{field, message}`` pairs."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in error.errors()
    ]


class EntityService:
    """CRUD operations for one entity type."""

    def __init__(
        self,
        gateway: EntityGateway,
        definition: EntityDefinition,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the entity service.

        Args:
            gateway: Entity store gateway for the entity's table
            definition: Schema and naming of the entity type
            clock: Source of "now" for timestamps, UTC
        """
        self.gateway = gateway
        self.definition = definition
        self.clock = clock or _utc_now

    def _store(self, action: str, func: Callable[..., Any], *args: Any) -> Any:
        """Run one gateway call, turning any fault into a ServerFaultError."""
        try:
            return func(*args)
        except ServerFaultError:
            raise
        except Exception as e:
            logger.exception(f"Entity store {action} failed", extra={
                "table_name": getattr(self.gateway, "table_name", None),
                "entity": self.definition.name,
            })
            raise ServerFaultError(
                message=f"Entity store {action} failed: {e}",
                error_code="STORE_FAULT",
            ) from e

    def _validate(self, model: Any, payload: Dict[str, Any]) -> Any:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            field_errors = to_field_errors(e)
            fields = ", ".join(sorted({err["field"] for err in field_errors}))
            raise EntityValidationError(
                message=f"Invalid {self.definition.label} fields: {fields}",
                field_errors=field_errors,
            ) from e

    def _success(self, operation: Operation, status_code: int, body: Optional[Dict[str, Any]]) -> OperationResult:
        metrics.add_metric(name=f"{operation.value}Success", unit=MetricUnit.Count, value=1)
        return OperationResult(operation=operation, status_code=status_code, body=body)

    @tracer.capture_method
    def list_entities(self) -> OperationResult:
        """Return every entity with a count."""
        items = self._store("scan", self.gateway.scan_all)

        logger.info(f"Listed {len(items)} {self.definition.collection}")
        output = ListOutput(items=items, count=len(items))
        return self._success(Operation.LIST, 200, output.model_dump())

    @tracer.capture_method
    def get_entity(self, entity_id: str) -> OperationResult:
        """
        Return the stored entity verbatim.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        tracer.put_annotation("entity_id", entity_id)
        entity = self._require(entity_id)
        return self._success(Operation.GET_BY_ID, 200, entity)

    @tracer.capture_method
    def create_entity(self, payload: Dict[str, Any]) -> OperationResult:
        """
        Create a new entity from a request payload.

        Args:
            payload: Parsed JSON body

        Returns:
            Result carrying the full stored entity, timestamps included

        Raises:
            EntityValidationError: If the id or mandatory field is missing, or a field has the wrong type
            EntityConflictError: If an entity with this id already exists
        """
        started_at = utc_timestamp(self.clock())
        id_field = self.definition.id_field
        required_field = self.definition.required_field

        missing = [name for name in (id_field, required_field) if payload.get(name) in (None, "")]
        if missing:
            raise EntityValidationError(
                message=f"{id_field} and {required_field} are required fields",
                field_errors=[{"field": name, "message": "Field required"} for name in missing],
            )

        request = self._validate(self.definition.create_model, payload)
        entity_id = getattr(request, id_field)
        tracer.put_annotation("entity_id", entity_id)

        existing = self._store("get", self.gateway.get_by_key, entity_id)
        if existing is not None:
            raise EntityConflictError(self.definition.label, entity_id)

        entity: Entity = request.model_dump(exclude_none=True)
        entity[CREATED_AT_FIELD] = started_at
        entity[UPDATED_AT_FIELD] = started_at

        self._store("put", self.gateway.put, entity)

        logger.info(f"{self.definition.label} created", extra={"entity_id": entity_id})
        return self._success(Operation.CREATE, 201, entity)

    @tracer.capture_method
    def update_entity(self, entity_id: str, payload: Dict[str, Any]) -> OperationResult:
        """
        Merge a partial payload over the stored entity and write it back whole.

        Identifier and creation time always come from storage; any values for
        them in the payload are ignored. A null for an optional field removes it.

        Raises:
            EntityNotFoundError: If no entity has this id
            EntityValidationError: If a supplied field has the wrong type
        """
        started_at = utc_timestamp(self.clock())
        tracer.put_annotation("entity_id", entity_id)

        stored = self._require(entity_id)

        updates = {key: value for key, value in payload.items() if key not in SYSTEM_FIELDS}
        request = self._validate(self.definition.update_model, updates)
        changes = request.model_dump(exclude_unset=True)

        required_field = self.definition.required_field
        if required_field in changes and changes[required_field] is None:
            raise EntityValidationError(
                message=f"{required_field} cannot be null",
                field_errors=[{"field": required_field, "message": "Field cannot be null"}],
            )

        merged: Entity = dict(stored)
        for key, value in changes.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        merged[self.definition.id_field] = entity_id
        if CREATED_AT_FIELD in stored:
            merged[CREATED_AT_FIELD] = stored[CREATED_AT_FIELD]
        merged[UPDATED_AT_FIELD] = started_at

        self._store("put", self.gateway.put, merged)

        logger.info(f"{self.definition.label} updated", extra={
            "entity_id": entity_id,
            "updated_fields": sorted(changes),
        })
        return self._success(Operation.UPDATE, 200, merged)

    @tracer.capture_method
    def delete_entity(self, entity_id: str) -> OperationResult:
        """
        Delete an existing entity.

        Raises:
            EntityNotFoundError: If no entity has this id; the store delete is not called
        """
        tracer.put_annotation("entity_id", entity_id)
        self._require(entity_id)

        self._store("delete", self.gateway.delete, entity_id)

        logger.info(f"{self.definition.label} deleted", extra={"entity_id": entity_id})
        return self._success(Operation.DELETE, 204, None)

    def _require(self, entity_id: str) -> Entity:
        entity = self._store("get", self.gateway.get_by_key, entity_id)
        if entity is None:
            logger.info(f"{self.definition.label} not found", extra={"entity_id": entity_id})
            raise EntityNotFoundError(self.definition.label, self.definition.collection, entity_id)
        return entity
