from .flight_id import FlightId as FlightId
from .flight_number import FlightNumber as FlightNumber
from .seat_number import SeatNumber as SeatNumber
