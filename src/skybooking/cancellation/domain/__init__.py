from .value_object import CancellationPolicy as CancellationPolicy
