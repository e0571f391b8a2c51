from .cancellation_policy import CancellationPolicy as CancellationPolicy
