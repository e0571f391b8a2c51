from .budget import OperationBudget as OperationBudget
from .cancellation_token import CancellationToken as CancellationToken
from .cancellation_token import current_token as current_token
from .executor import BoundedCallExecutor as BoundedCallExecutor
from .outcome import CallOutcome as CallOutcome
from .outcome import OutcomeKind as OutcomeKind
