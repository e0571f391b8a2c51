from .flight_repository import FlightRepository as FlightRepository
from .seat_repository import SeatRepository as SeatRepository
