from .flight import Flight as Flight
from .seat import Seat as Seat
