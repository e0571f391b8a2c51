from .dynamodb_flight_repository import (
    DynamoDBFlightRepository as DynamoDBFlightRepository,
)
from .dynamodb_seat_repository import DynamoDBSeatRepository as DynamoDBSeatRepository
