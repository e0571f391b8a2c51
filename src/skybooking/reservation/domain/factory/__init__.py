from .reservation_factory import PassengerDetails as PassengerDetails
from .reservation_factory import ReservationFactory as ReservationFactory
from .reservation_factory import TicketFactory as TicketFactory
from .reservation_factory import total_price_of as total_price_of
