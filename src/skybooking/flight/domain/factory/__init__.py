from .flight_factory import FlightDetails as FlightDetails
from .flight_factory import FlightFactory as FlightFactory
from .seat_map_factory import SeatMapFactory as SeatMapFactory
