"""
Domain contracts of seqdnn.

Backend-agnostic protocols and the exception taxonomy. Infrastructure
implementations live in `seqdnn.infrastructure`.
"""

from ._activation import IActivationFunction
from ._errors import (
    EmptyAccumulatorError,
    InvalidConfigurationError,
    ProcessorStateError,
    SequenceLengthError,
    ShapeMismatchError,
    TimestepOutOfRangeError,
)
from ._layer import ILayerContextWindow, ILayerStructure, IPoolItem
from ._update_method import (
    IBatchScheduling,
    IDecayMethod,
    IEpochScheduling,
    IExampleScheduling,
    IUpdateMethod,
)

__all__ = [
    "IActivationFunction",
    "ILayerContextWindow",
    "ILayerStructure",
    "IPoolItem",
    "IUpdateMethod",
    "IEpochScheduling",
    "IBatchScheduling",
    "IExampleScheduling",
    "IDecayMethod",
    "ShapeMismatchError",
    "SequenceLengthError",
    "TimestepOutOfRangeError",
    "EmptyAccumulatorError",
    "ProcessorStateError",
    "InvalidConfigurationError",
]
