"""
In-memory entity store gateway.

Used by the unit tests and the local invocation script in place of DynamoDB.
Every call is recorded in ``calls`` so tests can assert which store operations
a request performed, and ``fail_on`` makes chosen operations raise a store
fault.
"""

import copy
from typing import Dict, Iterable, List, Optional, Set, Tuple

from tvapi.dal import BaseEntityGateway, Entity
from tvapi.handlers.utils.errors import StoreFaultError


class InMemoryEntityGateway(BaseEntityGateway):
    """Dict-backed gateway that mirrors DynamoDB's full-item semantics."""

    def __init__(
        self,
        table_name: str = 'in-memory',
        key_field: str = 'id',
        items: Optional[Iterable[Entity]] = None,
    ) -> None:
        super().__init__(table_name, key_field=key_field)
        self._items: Dict[str, Entity] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.fail_on: Set[str] = set()
        for item in items or []:
            self._items[item[key_field]] = copy.deepcopy(item)

    def _record(self, operation: str, entity_id: Optional[str] = None) -> None:
        self.calls.append((operation, entity_id))
        if operation in self.fail_on:
            raise StoreFaultError(
                message=f"Simulated {operation} failure on {self.table_name}",
                operation=operation,
                table_name=self.table_name,
            )

    def operations(self) -> List[str]:
        """Names of the operations called so far, in order."""
        return [operation for operation, _ in self.calls]

    def scan_all(self) -> List[Entity]:
        self._record('scan_all')
        return [copy.deepcopy(item) for item in self._items.values()]

    def get_by_key(self, entity_id: str) -> Optional[Entity]:
        self._record('get_by_key', entity_id)
        item = self._items.get(entity_id)
        return copy.deepcopy(item) if item is not None else None

    def put(self, entity: Entity) -> None:
        entity_id = entity[self.key_field]
        self._record('put', entity_id)
        self._items[entity_id] = copy.deepcopy(entity)

    def delete(self, entity_id: str) -> None:
        self._record('delete', entity_id)
        self._items.pop(entity_id, None)
