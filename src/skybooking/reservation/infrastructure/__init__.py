from .dynamodb_reservation_repository import (
    DynamoDBReservationRepository as DynamoDBReservationRepository,
)
from .dynamodb_ticket_repository import (
    DynamoDBTicketRepository as DynamoDBTicketRepository,
)
