"""
Integration tests for the Data Access Layer (DAL).

This module tests the DynamoDB entity gateway against DynamoDB (mocked with
moto) to ensure items round-trip with their types intact.
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest
from botocore.exceptions import EndpointConnectionError

from tvapi.dal import EntityGateway, get_entity_gateway
from tvapi.dal.dynamodb_gateway import DynamoDBEntityGateway, from_dynamodb_item, to_dynamodb_item
from tvapi.handlers.utils.errors import StoreFaultError


@pytest.mark.integration
class TestDynamoDBEntityGateway:
    """Integration tests for the DynamoDB gateway."""

    def test_factory_returns_gateway(self, dynamodb_table):
        """Test the factory builds a gateway satisfying the protocol."""
        gateway = get_entity_gateway("test-catalog-table")

        assert isinstance(gateway, DynamoDBEntityGateway)
        assert isinstance(gateway, EntityGateway)
        assert gateway.table_name == "test-catalog-table"

    def test_put_and_get_round_trip(self, dynamodb_table, sample_tvshow):
        """Test that numbers, lists and booleans survive a round trip."""
        gateway = DynamoDBEntityGateway("test-catalog-table")
        entity = dict(sample_tvshow, tags=["crime", "drama"], finished=True)

        gateway.put(entity)

        assert gateway.get_by_key("show-1") == entity
        stored = dynamodb_table.get_item(Key={"id": "show-1"})["Item"]
        assert stored["rating"] == Decimal("9.5")
        assert stored["year"] == Decimal("2008")

    def test_get_missing(self, dynamodb_table):
        gateway = DynamoDBEntityGateway("test-catalog-table")

        assert gateway.get_by_key("ghost") is None

    def test_put_overwrites_whole_item(self, dynamodb_table):
        gateway = DynamoDBEntityGateway("test-catalog-table")
        gateway.put({"id": "a1", "name": "X", "age": 30})

        gateway.put({"id": "a1", "name": "Y"})

        assert gateway.get_by_key("a1") == {"id": "a1", "name": "Y"}

    def test_scan_all(self, dynamodb_table):
        gateway = DynamoDBEntityGateway("test-catalog-table")
        for index in range(5):
            gateway.put({"id": f"a{index}", "name": f"Actor {index}"})

        items = gateway.scan_all()

        assert sorted(item["id"] for item in items) == ["a0", "a1", "a2", "a3", "a4"]

    def test_scan_follows_last_evaluated_key(self, dynamodb_table):
        """Test that every page of a paginated scan is collected."""
        gateway = DynamoDBEntityGateway("test-catalog-table")
        gateway.table = Mock()
        gateway.table.scan.side_effect = [
            {"Items": [{"id": "a1"}], "LastEvaluatedKey": {"id": "a1"}},
            {"Items": [{"id": "a2", "age": Decimal("41")}]},
        ]

        items = gateway.scan_all()

        assert items == [{"id": "a1"}, {"id": "a2", "age": 41}]
        assert gateway.table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": "a1"}}

    def test_delete(self, dynamodb_table):
        gateway = DynamoDBEntityGateway("test-catalog-table")
        gateway.put({"id": "a1", "name": "X"})

        gateway.delete("a1")

        assert gateway.get_by_key("a1") is None

    def test_missing_table_is_store_fault(self, dynamodb_table):
        """Test that a ClientError surfaces as a store fault."""
        gateway = DynamoDBEntityGateway("no-such-table")

        with pytest.raises(StoreFaultError) as exc_info:
            gateway.get_by_key("a1")

        assert exc_info.value.operation == "get_item"
        assert exc_info.value.table_name == "no-such-table"
        assert "ResourceNotFoundException" in exc_info.value.message

    def test_connection_error_is_store_fault(self, dynamodb_table):
        gateway = DynamoDBEntityGateway("test-catalog-table")
        gateway.table = Mock()
        gateway.table.put_item.side_effect = EndpointConnectionError(endpoint_url="http://localhost:8000")

        with pytest.raises(StoreFaultError) as exc_info:
            gateway.put({"id": "a1"})

        assert exc_info.value.operation == "put_item"

    def test_throttling_is_store_fault(self, dynamodb_table, client_error):
        """Test that throttling is not retried and surfaces as a store fault."""
        gateway = DynamoDBEntityGateway("test-catalog-table")
        gateway.table = Mock()
        gateway.table.delete_item.side_effect = client_error("ProvisionedThroughputExceededException", operation="DeleteItem")

        with pytest.raises(StoreFaultError) as exc_info:
            gateway.delete("a1")

        assert "ProvisionedThroughputExceededException" in exc_info.value.message
        gateway.table.delete_item.assert_called_once()


class TestItemConversion:
    """Test cases for the Decimal conversion helpers."""

    def test_floats_become_decimal(self):
        item = to_dynamodb_item({"rating": 8.7, "nested": {"score": 0.5}, "scores": [1.5, 2]})

        assert item == {"rating": Decimal("8.7"), "nested": {"score": Decimal("0.5")}, "scores": [Decimal("1.5"), 2]}

    def test_decimals_become_numbers(self):
        value = from_dynamodb_item({"year": Decimal("2008"), "rating": Decimal("9.5"), "list": [Decimal("1")]})

        assert value == {"year": 2008, "rating": 9.5, "list": [1]}
        assert isinstance(value["year"], int)
