"""
API Gateway REST proxy event builder.

Used to invoke the handler outside API Gateway: local runs and tests.
"""

import json
import uuid
from typing import Any, Dict, Optional


def build_api_event(
    method: str,
    resource: str,
    path_parameters: Optional[Dict[str, str]] = None,
    body: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Build a minimal API Gateway REST proxy event.

    Args:
        method: HTTP method
        resource: Resource template, e.g. ``/actors/{id}``
        path_parameters: Values for the template's parameters
        body: Request body; non-strings are JSON-encoded

    Returns:
        Event dictionary in the API Gateway REST proxy format
    """
    path = resource
    for name, value in (path_parameters or {}).items():
        path = path.replace(f'{{{name}}}', value)

    if body is not None and not isinstance(body, str):
        body = json.dumps(body)

    request_id = str(uuid.uuid4())
    return {
        'resource': resource,
        'path': path,
        'httpMethod': method,
        'headers': {'Content-Type': 'application/json'},
        'multiValueHeaders': {},
        'queryStringParameters': None,
        'multiValueQueryStringParameters': None,
        'pathParameters': path_parameters,
        'stageVariables': None,
        'requestContext': {
            'requestId': request_id,
            'resourcePath': resource,
            'httpMethod': method,
            'stage': 'local',
        },
        'body': body,
        'isBase64Encoded': False,
    }
