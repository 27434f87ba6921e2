"""Arrays used by layer structures and parameters."""

from ._activable_array import ActivableArray
from ._augmented_array import AugmentedArray
from ._updatable_array import UpdatableArray

__all__ = [
    ActivableArray.__name__,
    AugmentedArray.__name__,
    UpdatableArray.__name__,
]
