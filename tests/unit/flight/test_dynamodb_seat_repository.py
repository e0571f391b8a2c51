from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.flight.infrastructure import DynamoDBSeatRepository
from skybooking.shared.domain.exception import (
    OptimisticLockException,
    PersistenceUnavailableException,
    ResourceNotFoundException,
    SeatUnavailableException,
)
from skybooking.shared.infrastructure import DynamoDBStore

FLIGHT_ID = FlightId(value="FL-0a1b2c3d")


def _seat_item(seat_number: str, status: str = "AVAILABLE") -> dict:
    return {
        "PK": f"FLIGHT#{FLIGHT_ID}",
        "SK": f"SEAT#{seat_number}",
        "flight_id": str(FLIGHT_ID),
        "seat_number": seat_number,
        "seat_class": "ECONOMY",
        "price": "10000",
        "currency": "DZD",
        "status": status,
    }


def _transaction_cancelled(*codes: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": code} for code in codes],
        },
        "TransactWriteItems",
    )


@pytest.fixture
def table():
    mock_table = MagicMock()
    mock_table.query.return_value = {
        "Items": [_seat_item("3A"), _seat_item("3B"), _seat_item("3C", "OCCUPIED")]
    }
    return mock_table


@pytest.fixture
def repository(table):
    resource = MagicMock()
    resource.Table.return_value = table
    store = DynamoDBStore(table_name="skybooking-test", resource=resource).open()
    return DynamoDBSeatRepository(store)


class TestDynamoDBSeatRepository:
    def test_assign_writes_one_transaction(self, repository, table):
        """座席の状態遷移と空席数の更新を同じトランザクションで行う"""

        # Act
        seats = repository.assign(FLIGHT_ID, [SeatNumber(value="3A"), SeatNumber(value="3B")])

        # Assert
        table.meta.client.transact_write_items.assert_called_once()
        items = table.meta.client.transact_write_items.call_args.kwargs["TransactItems"]
        assert len(items) == 3
        assert items[0]["Update"]["ExpressionAttributeValues"][":expected"] == "AVAILABLE"
        assert items[-1]["Update"]["Key"]["SK"] == "METADATA"
        assert items[-1]["Update"]["ExpressionAttributeValues"][":delta"] == -2
        assert all(s.status.value == "OCCUPIED" for s in seats)

    def test_assign_maps_failed_conditions_to_seats(self, repository, table):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "None", "ConditionalCheckFailed", "None"
        )

        with pytest.raises(SeatUnavailableException) as exc_info:
            repository.assign(FLIGHT_ID, [SeatNumber(value="3A"), SeatNumber(value="3B")])

        assert exc_info.value.seat_numbers == ["3B"]

    def test_assign_missing_seat_never_writes(self, repository, table):
        with pytest.raises(SeatUnavailableException):
            repository.assign(FLIGHT_ID, [SeatNumber(value="9A")])

        table.meta.client.transact_write_items.assert_not_called()

    def test_missing_flight_metadata(self, repository, table):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "None", "ConditionalCheckFailed"
        )

        with pytest.raises(ResourceNotFoundException):
            repository.assign(FLIGHT_ID, [SeatNumber(value="3A")])

    def test_release_skips_seats_that_are_not_occupied(self, repository, table):
        table.meta.client.transact_write_items.side_effect = [
            None,
            _transaction_cancelled("ConditionalCheckFailed", "None"),
        ]

        released = repository.release(
            FLIGHT_ID, [SeatNumber(value="3C"), SeatNumber(value="3A")]
        )

        assert released == 1

    def test_reassign_conflict_on_release_side(self, repository, table):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled(
            "ConditionalCheckFailed", "None"
        )

        with pytest.raises(OptimisticLockException):
            repository.reassign(FLIGHT_ID, [SeatNumber(value="3C")], [SeatNumber(value="3A")])

    def test_unreachable_store_is_fatal(self, repository, table):
        table.query.side_effect = EndpointConnectionError(endpoint_url="http://dynamodb")

        with pytest.raises(PersistenceUnavailableException):
            repository.find_by_flight(FLIGHT_ID)

    def test_throttling_is_fatal(self, repository, table):
        table.meta.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
            "TransactWriteItems",
        )

        with pytest.raises(PersistenceUnavailableException):
            repository.assign(FLIGHT_ID, [SeatNumber(value="3A")])
