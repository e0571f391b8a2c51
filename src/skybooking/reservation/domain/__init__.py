from .entity import Reservation as Reservation
from .entity import Ticket as Ticket
from .enum import ReservationStatus as ReservationStatus
from .factory import ReservationFactory as ReservationFactory
from .factory import TicketFactory as TicketFactory
from .repository import ReservationRepository as ReservationRepository
from .repository import TicketRepository as TicketRepository
from .value_object import Passenger as Passenger
from .value_object import ReservationId as ReservationId
from .value_object import TicketId as TicketId
