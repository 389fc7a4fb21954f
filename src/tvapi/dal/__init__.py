"""
Data Access Layer (DAL) for the TV catalog.

This module defines the entity store gateway interface the CRUD operations talk
to, and a factory for the DynamoDB implementation used in Lambda.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

Entity = Dict[str, Any]


@runtime_checkable
class EntityGateway(Protocol):
    """Protocol defining the entity store gateway interface."""

    table_name: str

    def scan_all(self) -> List[Entity]:
        """Return every entity in the table."""
        ...

    def get_by_key(self, entity_id: str) -> Optional[Entity]:
        """Return the entity stored under ``entity_id``, or None."""
        ...

    def put(self, entity: Entity) -> None:
        """Write ``entity``, overwriting any item with the same key."""
        ...

    def delete(self, entity_id: str) -> None:
        """Remove the entity stored under ``entity_id``."""
        ...


class BaseEntityGateway(ABC):
    """Abstract base class for entity store gateway implementations."""

    def __init__(self, table_name: str, key_field: str = 'id') -> None:
        """
        Initialize the gateway.

        Args:
            table_name: Name of the backing table
            key_field: Attribute the table is keyed on
        """
        self.table_name = table_name
        self.key_field = key_field

    @abstractmethod
    def scan_all(self) -> List[Entity]:
        """Return every entity in the table."""
        pass

    @abstractmethod
    def get_by_key(self, entity_id: str) -> Optional[Entity]:
        """Return the entity stored under ``entity_id``, or None."""
        pass

    @abstractmethod
    def put(self, entity: Entity) -> None:
        """Write ``entity``, overwriting any item with the same key."""
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> None:
        """Remove the entity stored under ``entity_id``."""
        pass


def get_entity_gateway(table_name: str, key_field: str = 'id', endpoint_url: Optional[str] = None) -> EntityGateway:
    """
    Factory function to get the DynamoDB entity gateway.

    Args:
        table_name: Name of the DynamoDB table
        key_field: Partition key attribute name
        endpoint_url: DynamoDB endpoint URL (for local testing)

    Returns:
        Entity gateway instance
    """
    # Import here to avoid circular imports
    from tvapi.dal.dynamodb_gateway import DynamoDBEntityGateway

    return DynamoDBEntityGateway(table_name, key_field=key_field, endpoint_url=endpoint_url)


__all__ = [
    'Entity',
    'EntityGateway',
    'BaseEntityGateway',
    'get_entity_gateway',
]
