"""
Environment variable models for type-safe configuration.

The CRUD handler reads its configuration once per invocation through
``aws-lambda-env-modeler``; a missing or empty TABLE_NAME fails validation and
is reported as a server fault before any routing happens.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field


class HandlerEnvVars(BaseModel):
    """Environment variables for the CRUD Lambda handlers."""

    # DynamoDB table holding the entities
    TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for entity storage',
        min_length=1
    )]

    # Entity type served when the entry point does not pin one
    ENTITY_NAME: Annotated[str, Field(
        description='Entity type served by the handler',
        pattern=r'^(actors|tvshows)$'
    )] = 'actors'

    # Local DynamoDB endpoint, e.g. http://localhost:8000
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        description='DynamoDB endpoint URL override for local testing'
    )] = None

    CORS_ALLOW_ORIGIN: Annotated[str, Field(
        description='CORS allowed origin for API responses'
    )] = '*'

    LOG_LEVEL: Annotated[str, Field(
        description='Log level for application logging',
        pattern=r'(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'


def get_handler_env_vars() -> HandlerEnvVars:
    """
    Get typed environment variables for the CRUD handlers.

    Returns:
        Validated environment variables model instance

    Raises:
        pydantic.ValidationError: If a variable is missing or invalid
    """
    return get_environment_variables(model=HandlerEnvVars)
