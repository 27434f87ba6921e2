"""
Weight initialization public API.

This module aggregates the supported weight initialization strategies
(constants, Xavier/Glorot, Kaiming/He) and registers them into the global
`WeightInitializer` registry via import side effects.

Exports
-------
- WeightInitializer:
    The registry-backed initializer dispatcher used to fill parameter arrays
    with a selected initialization strategy.
"""

from ._constants import *
from ._xavier import *
from ._kaiming import *
from ._base import WeightInitializer

__all__ = [
    WeightInitializer.__name__,
]
