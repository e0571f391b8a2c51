from .currency import Currency as Currency
from .customer_id import CustomerId as CustomerId
from .iso_date_time import IsoDateTime as IsoDateTime
from .iso_date_time import utc_now as utc_now
from .money import Money as Money
from .scoped_id import ReservationScopedId as ReservationScopedId
