"""
Business Logic Layer.

The CRUD operations shared by every entity type live here, independent of
API Gateway events and of the concrete entity store.
"""

from tvapi.logic.entity_service import EntityService

__all__ = [
    "EntityService",
]
