"""
Response formatting for API Gateway proxy integrations.

Every response, success or failure, is ``{statusCode, headers, body}`` with a
JSON content type and the CORS headers attached.
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.shared.json_encoder import Encoder

from tvapi.handlers.utils.errors import BaseServiceError, EntityValidationError, SERVER_FAULT_MESSAGE
from tvapi.models.output import OperationResult

DEFAULT_CORS_ORIGIN = '*'
CORS_ALLOW_HEADERS = 'Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token'
CORS_ALLOW_METHODS = 'OPTIONS,GET,POST,PUT,DELETE'


def create_api_response(
    status_code: int,
    body: Optional[Any] = None,
    cors_origin: str = DEFAULT_CORS_ORIGIN,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Create a standardized API Gateway response.

    Args:
        status_code: HTTP status code
        body: JSON-serializable body; None renders as an empty string
        cors_origin: Value of the Access-Control-Allow-Origin header
        headers: Extra headers merged over the defaults

    Returns:
        API Gateway proxy response dictionary
    """
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": cors_origin,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": "" if body is None else json.dumps(body, cls=Encoder, ensure_ascii=False),
    }


def format_result(result: OperationResult, cors_origin: str = DEFAULT_CORS_ORIGIN) -> Dict[str, Any]:
    """Render a successful operation."""
    return create_api_response(result.status_code, result.body, cors_origin=cors_origin)


def format_error(error: BaseServiceError, cors_origin: str = DEFAULT_CORS_ORIGIN) -> Dict[str, Any]:
    """Render a service error; server faults never expose their detail."""
    body: Dict[str, Any] = {"message": error.user_message}
    if isinstance(error, EntityValidationError) and error.field_errors:
        body["field_errors"] = error.field_errors
    return create_api_response(error.status_code, body, cors_origin=cors_origin)


def internal_error_response(cors_origin: str = DEFAULT_CORS_ORIGIN) -> Dict[str, Any]:
    """The generic 500 response for faults outside the service error taxonomy."""
    return create_api_response(500, {"message": SERVER_FAULT_MESSAGE}, cors_origin=cors_origin)
