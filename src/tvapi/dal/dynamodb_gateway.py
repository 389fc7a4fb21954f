"""
DynamoDB implementation of the entity store gateway.

The table is keyed on a single string partition key. Items are written whole
with ``put_item``; there is no conditional write, so check-then-act sequences in
the logic layer are last-write-wins.
"""

import json
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tvapi.dal import BaseEntityGateway, Entity
from tvapi.handlers.utils.errors import StoreFaultError
from tvapi.handlers.utils.observability import logger, tracer


def to_dynamodb_item(entity: Entity) -> Dict[str, Any]:
    """Convert floats to Decimal, which is the only number type boto3 accepts."""
    return json.loads(json.dumps(entity), parse_float=Decimal)


def from_dynamodb_item(value: Any) -> Any:
    """Convert boto3 Decimals back to int or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_dynamodb_item(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [from_dynamodb_item(item) for item in value]
    if isinstance(value, set):
        return sorted(from_dynamodb_item(item) for item in value)
    return value


class DynamoDBEntityGateway(BaseEntityGateway):
    """DynamoDB implementation of the entity store gateway."""

    def __init__(
        self,
        table_name: str,
        key_field: str = 'id',
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the DynamoDB gateway.

        Args:
            table_name: Name of the DynamoDB table
            key_field: Partition key attribute name
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        super().__init__(table_name, key_field=key_field)

        resource_config: Dict[str, Any] = {}
        if region_name:
            resource_config['region_name'] = region_name
        if endpoint_url:
            resource_config['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **resource_config)
        self.table = self.dynamodb.Table(table_name)

        logger.debug("DynamoDB gateway initialized", extra={
            "table_name": table_name,
            "endpoint_url": endpoint_url,
        })

    def _fault(self, operation: str, error: Exception) -> StoreFaultError:
        if isinstance(error, ClientError):
            error_code = error.response['Error']['Code']
        else:
            error_code = type(error).__name__
        logger.error(f"DynamoDB {operation} failed: {error_code}", extra={
            "table_name": self.table_name,
            "operation": operation,
            "error": str(error),
        })
        return StoreFaultError(
            message=f"DynamoDB {operation} on {self.table_name} failed: {error_code}",
            operation=operation,
            table_name=self.table_name,
        )

    @tracer.capture_method
    def scan_all(self) -> List[Entity]:
        """
        Scan the whole table, following ``LastEvaluatedKey`` until exhausted.

        Raises:
            StoreFaultError: If a DynamoDB call fails
        """
        items: List[Entity] = []
        scan_kwargs: Dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except (ClientError, BotoCoreError) as e:
            raise self._fault('scan', e) from e

        logger.debug(f"Scanned {len(items)} items from {self.table_name}")
        return [from_dynamodb_item(item) for item in items]

    @tracer.capture_method
    def get_by_key(self, entity_id: str) -> Optional[Entity]:
        """
        Retrieve an item by its partition key.

        Raises:
            StoreFaultError: If the DynamoDB call fails
        """
        try:
            response = self.table.get_item(Key={self.key_field: entity_id})
        except (ClientError, BotoCoreError) as e:
            raise self._fault('get_item', e) from e

        item = response.get('Item')
        if not item:
            return None
        return from_dynamodb_item(item)

    @tracer.capture_method
    def put(self, entity: Entity) -> None:
        """
        Write an item, replacing any existing one with the same key.

        Raises:
            StoreFaultError: If the DynamoDB call fails
        """
        try:
            self.table.put_item(Item=to_dynamodb_item(entity))
        except (ClientError, BotoCoreError) as e:
            raise self._fault('put_item', e) from e

        tracer.put_annotation('entity_written', str(entity.get(self.key_field)))

    @tracer.capture_method
    def delete(self, entity_id: str) -> None:
        """
        Delete an item by its partition key.

        Raises:
            StoreFaultError: If the DynamoDB call fails
        """
        try:
            self.table.delete_item(Key={self.key_field: entity_id})
        except (ClientError, BotoCoreError) as e:
            raise self._fault('delete_item', e) from e

        tracer.put_annotation('entity_deleted', entity_id)
