"""
Constant weight initializers.

Provided initializers
---------------------
- ``zeros``:
    Fill an array with zeros.
- ``ones``:
    Fill an array with ones.

These are the usual choice for biases and for deterministic test setups. The
`rng` argument is accepted for a uniform initializer signature and ignored.
"""

import numpy as np

from ._base import WeightInitializer


@WeightInitializer.register_initializer("zeros")
def zeros(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Fill `array` with zeros in-place and return it."""
    array.fill(0.0)
    return array


@WeightInitializer.register_initializer("ones")
def ones(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Fill `array` with ones in-place and return it."""
    array.fill(1.0)
    return array
