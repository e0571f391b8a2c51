from .reservation_repository import ReservationRepository as ReservationRepository
from .ticket_repository import TicketRepository as TicketRepository
