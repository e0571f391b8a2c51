from .entity import Flight as Flight
from .entity import Seat as Seat
from .enum import FlightStatus as FlightStatus
from .enum import SeatClass as SeatClass
from .enum import SeatStatus as SeatStatus
from .factory import FlightFactory as FlightFactory
from .factory import SeatMapFactory as SeatMapFactory
from .repository import FlightRepository as FlightRepository
from .repository import SeatRepository as SeatRepository
from .value_object import FlightId as FlightId
from .value_object import FlightNumber as FlightNumber
from .value_object import SeatNumber as SeatNumber
