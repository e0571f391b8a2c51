from .reservation import Reservation as Reservation
from .ticket import Ticket as Ticket
