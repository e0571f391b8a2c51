from .exceptions import BackendException as BackendException
from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import CallTimeoutException as CallTimeoutException
from .exceptions import (
    CancellationNotAllowedException as CancellationNotAllowedException,
)
from .exceptions import ConflictException as ConflictException
from .exceptions import DomainException as DomainException
from .exceptions import DuplicateResourceException as DuplicateResourceException
from .exceptions import ErrorKind as ErrorKind
from .exceptions import FatalException as FatalException
from .exceptions import InsufficientFundsException as InsufficientFundsException
from .exceptions import InvalidCardException as InvalidCardException
from .exceptions import (
    ModificationNotAllowedException as ModificationNotAllowedException,
)
from .exceptions import OptimisticLockException as OptimisticLockException
from .exceptions import PaymentException as PaymentException
from .exceptions import (
    PersistenceUnavailableException as PersistenceUnavailableException,
)
from .exceptions import PolicyException as PolicyException
from .exceptions import RefundException as RefundException
from .exceptions import (
    ReservationAlreadyCancelledException as ReservationAlreadyCancelledException,
)
from .exceptions import ReservationException as ReservationException
from .exceptions import ResourceNotFoundException as ResourceNotFoundException
from .exceptions import SeatNotAvailableException as SeatNotAvailableException
from .exceptions import SeatUnavailableException as SeatUnavailableException
from .exceptions import ValidationException as ValidationException
