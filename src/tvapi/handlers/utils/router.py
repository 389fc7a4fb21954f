"""
Request router for the CRUD handlers.

Matching is on the pair (HTTP method, path shape), where the shape of a path
template is either the collection root (``/actors``) or the collection root
plus exactly one ``{id}`` parameter (``/actors/{id}``). Anything else is
unmatched. Routing is pure: it performs no I/O.
"""

import binascii
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from tvapi.handlers.utils.errors import EntityValidationError, UnmatchedRouteError
from tvapi.models.output import Operation


class PathShape(str, Enum):
    COLLECTION = 'collection'
    ITEM = 'collection/{id}'


ROUTING_TABLE: Dict[Tuple[str, PathShape], Operation] = {
    ('GET', PathShape.COLLECTION): Operation.LIST,
    ('GET', PathShape.ITEM): Operation.GET_BY_ID,
    ('POST', PathShape.COLLECTION): Operation.CREATE,
    ('PUT', PathShape.ITEM): Operation.UPDATE,
    ('DELETE', PathShape.ITEM): Operation.DELETE,
}

OPERATIONS_WITH_BODY = frozenset({Operation.CREATE, Operation.UPDATE})


@dataclass(frozen=True)
class RequestDescriptor:
    """The parts of an inbound HTTP request the router looks at."""

    method: str
    path_template: str
    path_parameters: Optional[Dict[str, str]] = None
    raw_body: Optional[str] = None

    @classmethod
    def from_event(cls, event: APIGatewayProxyEvent) -> 'RequestDescriptor':
        """
        Build a descriptor from an API Gateway REST proxy event.

        Raises:
            EntityValidationError: If a base64-encoded body does not decode to UTF-8 text
        """
        raw_body = None
        if event.get('body') is not None:
            try:
                raw_body = event.decoded_body
            except (binascii.Error, UnicodeDecodeError):
                raise EntityValidationError(message="Request body is not valid UTF-8")
        return cls(
            method=(event.get('httpMethod') or '').upper(),
            path_template=event.get('resource') or event.get('path') or '',
            path_parameters=event.get('pathParameters'),
            raw_body=raw_body,
        )


@dataclass(frozen=True)
class RouteMatch:
    """A matched route: which operation to run and with what inputs."""

    operation: Operation
    entity_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


class Router:
    """Maps request descriptors for one collection onto CRUD operations."""

    def __init__(self, collection: str, id_param: str = 'id'):
        self.collection = collection
        self.id_param = id_param
        self._item_segment = f'{{{id_param}}}'

    def path_shape(self, path_template: str) -> Optional[PathShape]:
        """Classify a path template, or return None if it has neither shape."""
        segments = [segment for segment in path_template.split('/') if segment]
        if not segments or segments[0] != self.collection:
            return None
        if len(segments) == 1:
            return PathShape.COLLECTION
        if len(segments) == 2 and segments[1] == self._item_segment:
            return PathShape.ITEM
        return None

    def match(self, request: RequestDescriptor) -> RouteMatch:
        """
        Resolve a request to one operation and its inputs.

        Raises:
            UnmatchedRouteError: If no routing table entry matches
            EntityValidationError: If the id parameter is missing or the body is not a JSON object
        """
        shape = self.path_shape(request.path_template)
        operation = ROUTING_TABLE.get((request.method, shape)) if shape else None
        if operation is None:
            raise UnmatchedRouteError(request.method, request.path_template)

        entity_id = None
        if shape is PathShape.ITEM:
            entity_id = (request.path_parameters or {}).get(self.id_param)
            if not entity_id:
                raise EntityValidationError(
                    message=f"Missing {self.id_param} path parameter",
                    field_errors=[{"field": self.id_param, "message": "Path parameter required"}],
                )

        payload: Dict[str, Any] = {}
        if operation in OPERATIONS_WITH_BODY:
            payload = parse_body(request.raw_body)

        return RouteMatch(operation=operation, entity_id=entity_id, payload=payload)


def _reject_constant(token: str) -> Any:
    # NaN, Infinity and -Infinity are accepted by json.loads but are not JSON
    raise EntityValidationError(message=f"Invalid number in request body: {token}")


def parse_body(raw_body: Optional[str]) -> Dict[str, Any]:
    """
    Parse a request body as a JSON object; an absent or blank body is ``{}``.

    Raises:
        EntityValidationError: If the body is not valid JSON or not an object
    """
    if raw_body is None or not raw_body.strip():
        return {}
    try:
        parsed = json.loads(raw_body, parse_constant=_reject_constant)
    except json.JSONDecodeError:
        raise EntityValidationError(message="Invalid JSON in request body")
    if not isinstance(parsed, dict):
        raise EntityValidationError(message="Request body must be a JSON object")
    return parsed
