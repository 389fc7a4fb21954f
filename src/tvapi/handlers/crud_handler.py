"""
CRUD Handler - Lambda function for entity collection APIs.

This module implements the handler layer shared by every entity type. It reads
configuration, turns the API Gateway event into a request descriptor, routes it
to one of the five CRUD operations and formats the outcome. Each invocation
builds its own service; nothing about entities is kept between requests.
"""

from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from tvapi.dal import EntityGateway, get_entity_gateway
from tvapi.handlers.models.env_vars import HandlerEnvVars, get_handler_env_vars
from tvapi.handlers.utils.errors import BaseServiceError, ServerFaultError, log_error_metrics
from tvapi.handlers.utils.observability import logger, metrics, tracer
from tvapi.handlers.utils.responses import (
    DEFAULT_CORS_ORIGIN,
    format_error,
    format_result,
    internal_error_response,
)
from tvapi.handlers.utils.router import RequestDescriptor, RouteMatch, Router
from tvapi.logic.entity_service import EntityService
from tvapi.models.entity import ENTITY_DEFINITIONS, EntityDefinition, get_entity_definition
from tvapi.models.output import Operation, OperationResult

LambdaHandler = Callable[[Dict[str, Any], LambdaContext], Dict[str, Any]]


def execute(service: EntityService, route: RouteMatch) -> OperationResult:
    """Run the operation a route resolved to."""
    if route.operation is Operation.LIST:
        return service.list_entities()
    if route.operation is Operation.GET_BY_ID:
        return service.get_entity(route.entity_id)
    if route.operation is Operation.CREATE:
        return service.create_entity(route.payload)
    if route.operation is Operation.UPDATE:
        return service.update_entity(route.entity_id, route.payload)
    return service.delete_entity(route.entity_id)


@tracer.capture_method
def process_request(
    event: Dict[str, Any],
    gateway: EntityGateway,
    definition: EntityDefinition,
    cors_origin: str = DEFAULT_CORS_ORIGIN,
) -> Dict[str, Any]:
    """
    Route one API Gateway event against an entity gateway.

    Args:
        event: API Gateway REST proxy event
        gateway: Entity store gateway for the entity's table
        definition: Entity type being served
        cors_origin: Value for the CORS origin header

    Returns:
        API Gateway response; never raises
    """
    try:
        request = RequestDescriptor.from_event(APIGatewayProxyEvent(event))
        logger.info("Processing request", extra={
            "http_method": request.method,
            "resource": request.path_template,
            "entity": definition.name,
        })

        route = Router(definition.collection, id_param=definition.id_field).match(request)
        tracer.put_annotation("operation", route.operation.value)

        service = EntityService(gateway=gateway, definition=definition)
        result = execute(service, route)

    except BaseServiceError as e:
        log_error_metrics(e)
        return format_error(e, cors_origin=cors_origin)

    except Exception:
        logger.exception("Unexpected error processing request", extra={"entity": definition.name})
        metrics.add_metric(name="ServerFault", unit=MetricUnit.Count, value=1)
        return internal_error_response(cors_origin=cors_origin)

    logger.info("Request completed", extra={
        "operation": result.operation.value,
        "status_code": result.status_code,
    })
    return format_result(result, cors_origin=cors_origin)


def describe_configuration_error(error: ValueError) -> str:
    """Name the environment variables an env-model failure is about."""
    if not isinstance(error, ValidationError):
        return f"Invalid handler configuration: {error}"

    fields = sorted({str(err["loc"][0]) for err in error.errors() if err["loc"]})
    if "TABLE_NAME" in fields:
        return "Table name is not configured"
    return f"Invalid handler configuration: {', '.join(fields)}"


def load_configuration(entity_name: Optional[str] = None) -> HandlerEnvVars:
    """
    Read and validate handler configuration.

    Raises:
        ServerFaultError: If TABLE_NAME is missing or any variable is invalid
    """
    try:
        env_vars = get_handler_env_vars()
    except ValueError as e:
        raise ServerFaultError(message=describe_configuration_error(e), error_code="CONFIGURATION_ERROR") from e

    if entity_name:
        if entity_name not in ENTITY_DEFINITIONS:
            raise ServerFaultError(message=f"Unknown entity type: {entity_name}", error_code="CONFIGURATION_ERROR")
        env_vars = env_vars.model_copy(update={"ENTITY_NAME": entity_name})
    return env_vars


def create_lambda_handler(entity_name: Optional[str] = None) -> LambdaHandler:
    """
    Build the Lambda handler for one entity type.

    Args:
        entity_name: Entity type to serve; ENTITY_NAME is used when omitted

    Returns:
        Lambda handler function decorated with Powertools observability
    """

    @tracer.capture_lambda_handler
    @logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
    @metrics.log_metrics(capture_cold_start_metric=True)
    def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
        """
        Main Lambda handler function.

        Args:
            event: API Gateway REST proxy event
            context: Lambda context object

        Returns:
            API Gateway response
        """
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

        try:
            env_vars = load_configuration(entity_name)
        except ServerFaultError as e:
            log_error_metrics(e)
            return format_error(e)

        definition = get_entity_definition(env_vars.ENTITY_NAME)
        tracer.put_annotation("entity", definition.name)

        try:
            gateway = get_entity_gateway(
                table_name=env_vars.TABLE_NAME,
                key_field=definition.id_field,
                endpoint_url=env_vars.DYNAMODB_ENDPOINT,
            )
        except Exception:
            logger.exception("Failed to initialize entity gateway", extra={"table_name": env_vars.TABLE_NAME})
            metrics.add_metric(name="ServerFault", unit=MetricUnit.Count, value=1)
            return internal_error_response(cors_origin=env_vars.CORS_ALLOW_ORIGIN)

        return process_request(event, gateway, definition, cors_origin=env_vars.CORS_ALLOW_ORIGIN)

    return lambda_handler


lambda_handler = create_lambda_handler()
