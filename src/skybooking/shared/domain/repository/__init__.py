from .repository import Repository as Repository
from .repository import StatusGuardedRepository as StatusGuardedRepository
