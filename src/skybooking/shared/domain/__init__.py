from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .repository import Repository as Repository
from .repository import StatusGuardedRepository as StatusGuardedRepository
from .value_object import Currency as Currency
from .value_object import CustomerId as CustomerId
from .value_object import IsoDateTime as IsoDateTime
from .value_object import Money as Money
from .value_object import utc_now as utc_now
from .value_object import ReservationScopedId as ReservationScopedId
