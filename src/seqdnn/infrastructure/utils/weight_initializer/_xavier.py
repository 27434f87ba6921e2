"""
Xavier/Glorot weight initializers.

Implemented variants
--------------------
- ``xavier``:
    Xavier normal initialization using ``std = sqrt(2 / (fan_in + fan_out))``.
- ``xavier_uniform``:
    Xavier uniform initialization using
    ``U(-sqrt(6/(fan_in+fan_out)), +sqrt(6/(fan_in+fan_out)))``.
    This is the default initializer of `NeuralNetwork.initialize`, the
    closest match to the Glorot-style random initialization that recurrent
    networks are usually trained from.

Notes
-----
- Fan-in and fan-out are computed from the array shape via
  ``_calculate_fan_in_and_fan_out``; for a ``(out, in)`` weight matrix this is
  ``(in, out)``.
- Initializers mutate the provided array in-place and return it.
"""

import math

import numpy as np

from ._base import WeightInitializer
from ....domain.utils._weight_initialization import _calculate_fan_in_and_fan_out


@WeightInitializer.register_initializer("xavier")
def xavier(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Apply Xavier (Glorot) normal initialization.

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
    fan_in, fan_out = _calculate_fan_in_and_fan_out(tuple(array.shape))
    fan_in = max(1, int(fan_in))
    fan_out = max(1, int(fan_out))

    std = math.sqrt(2.0 / float(fan_in + fan_out))
    array[...] = rng.standard_normal(array.shape) * std
    return array


@WeightInitializer.register_initializer("xavier_uniform")
def xavier_uniform(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Apply Xavier (Glorot) uniform initialization.

    This initializes weights from a uniform distribution:

        U(-bound, +bound), where bound = sqrt(6 / (fan_in + fan_out))

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
    fan_in, fan_out = _calculate_fan_in_and_fan_out(tuple(array.shape))
    fan_in = max(1, int(fan_in))
    fan_out = max(1, int(fan_out))

    bound = math.sqrt(6.0 / float(fan_in + fan_out))
    array[...] = rng.uniform(-bound, bound, size=array.shape)
    return array
