"""
Pytest configuration and shared fixtures for the TV catalog API.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import os

# Powertools reads these at import time, before any test module imports tvapi
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "TABLE_NAME": "test-catalog-table",
    "POWERTOOLS_SERVICE_NAME": "test-tv-catalog-api",
    "POWERTOOLS_METRICS_NAMESPACE": "TestTvCatalog",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterator, Optional
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from tvapi.dal.memory_gateway import InMemoryEntityGateway
from tvapi.handlers.utils.events import build_api_event
from tvapi.logic.entity_service import EntityService
from tvapi.models.entity import ACTORS, TV_SHOWS

TEST_TABLE_NAME = "test-catalog-table"


class FakeClock:
    """Deterministic clock; every call advances by one second."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current = self.current + timedelta(seconds=1)
        return moment


# DynamoDB fixtures
@pytest.fixture
def dynamodb_table():
    """Create a mock DynamoDB table keyed on ``id``."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


# In-memory store fixtures
@pytest.fixture
def memory_gateway() -> InMemoryEntityGateway:
    """Empty in-memory entity store."""
    return InMemoryEntityGateway(table_name=TEST_TABLE_NAME)


@pytest.fixture
def fixed_clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def actor_service(memory_gateway, fixed_clock) -> EntityService:
    return EntityService(gateway=memory_gateway, definition=ACTORS, clock=fixed_clock)


@pytest.fixture
def tvshow_service(memory_gateway, fixed_clock) -> EntityService:
    return EntityService(gateway=memory_gateway, definition=TV_SHOWS, clock=fixed_clock)


# Sample data fixtures
@pytest.fixture
def sample_actor() -> Dict[str, Any]:
    return {
        "id": "actor-1",
        "name": "Bryan Cranston",
        "age": 67,
        "nationality": "American",
        "knownFor": ["Breaking Bad", "Malcolm in the Middle"],
        "isActive": True,
    }


@pytest.fixture
def sample_tvshow() -> Dict[str, Any]:
    return {
        "id": "show-1",
        "title": "Breaking Bad",
        "genre": "Drama",
        "year": 2008,
        "seasons": 5,
        "rating": 9.5,
    }


@pytest.fixture
def api_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def _build(
        method: str,
        resource: str,
        path_parameters: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
    ) -> Dict[str, Any]:
        return build_api_event(method, resource, path_parameters, body)

    return _build


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-crud-function"
    context.function_version = "$LATEST"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-crud-function"
    context.memory_limit_in_mb = 256
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-crud-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


# Error simulation fixtures
@pytest.fixture
def client_error():
    """Build botocore ClientErrors for testing error handling."""
    from botocore.exceptions import ClientError

    def create_error(error_code: str, message: str = "Test error", operation: str = "TestOperation"):
        return ClientError(
            error_response={"Error": {"Code": error_code, "Message": message}},
            operation_name=operation,
        )

    return create_error


@pytest.fixture
def integration_client() -> Iterator[Any]:
    """HTTP client for end-to-end tests against a deployed API."""
    import httpx

    base_url = os.environ.get("API_BASE_URL")
    if not base_url:
        pytest.skip("API_BASE_URL is not set")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        yield client


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line("markers", "benchmark: Performance benchmark tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "e2e" in path:
            item.add_marker(pytest.mark.e2e)
        elif "benchmark" in path:
            item.add_marker(pytest.mark.benchmark)
