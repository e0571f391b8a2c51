from .passenger import Passenger as Passenger
from .reservation_id import ReservationId as ReservationId
from .ticket_id import TicketId as TicketId
