"""
Kaiming (He) weight initializers.

Implemented variants
--------------------
- ``kaiming``:
    Kaiming normal initialization using ``std = sqrt(2 / fan_in)``.
- ``kaiming_uniform``:
    Kaiming uniform initialization using
    ``U(-sqrt(6/fan_in), +sqrt(6/fan_in))``.

Notes
-----
- Fan-in is computed from the array shape via ``_calculate_fan_in``.
- Intended for ReLU-family feedforward layers; gated recurrent cells are
  usually better served by the Xavier variants.
"""

import math

import numpy as np

from ._base import WeightInitializer
from ....domain.utils._weight_initialization import _calculate_fan_in


@WeightInitializer.register_initializer("kaiming")
def kaiming(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Apply standard Kaiming (He) normal initialization.

        std = sqrt(2 / fan_in)

    Parameters
    ----------
    array:
        The array to initialize in-place.
    rng:
        Random source.

    Returns
    -------
    np.ndarray
        The initialized array (same object).
    """
    fan_in = max(1, int(_calculate_fan_in(tuple(array.shape))))

    std = math.sqrt(2.0 / float(fan_in))
    array[...] = rng.standard_normal(array.shape) * std
    return array


@WeightInitializer.register_initializer("kaiming_uniform")
def kaiming_uniform(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Apply Kaiming (He) uniform initialization.

        U(-bound, +bound), where bound = sqrt(6 / fan_in)
    """
    fan_in = max(1, int(_calculate_fan_in(tuple(array.shape))))

    bound = math.sqrt(6.0 / float(fan_in))
    array[...] = rng.uniform(-bound, bound, size=array.shape)
    return array
