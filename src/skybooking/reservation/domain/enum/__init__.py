from .reservation_status import ReservationStatus as ReservationStatus
