"""
AdaGrad update method.

Scales the learning rate of each element by the inverse square root of the
sum of its squared gradients.

    m <- m + g^2
    w <- w - lr * g / sqrt(m + eps)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from ..arrays._updatable_array import UpdatableArray


@dataclass
class AdaGradMethod:
    """
    AdaGrad.

    Parameters
    ----------
    learning_rate : float
        Must be positive. Defaults to 0.01.
    epsilon : float
        Numerical stability term. Must be positive. Defaults to 1e-8.
    """

    learning_rate: float = 0.01
    epsilon: float = 1e-8

    def __init__(self, learning_rate: float = 0.01, epsilon: float = 1e-8) -> None:
        self.learning_rate = float(learning_rate)
        self.epsilon = float(epsilon)
        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")

        # id(array) -> {"m": ndarray}
        self._state: Dict[int, Dict[str, np.ndarray]] = {}

    def update(self, array: UpdatableArray, errors: np.ndarray) -> None:
        g = np.asarray(errors)
        st = self._state.get(id(array))
        if st is None:
            st = {"m": np.zeros_like(array.values)}
            self._state[id(array)] = st

        m = st["m"]
        m += g * g
        array.values[...] -= self.learning_rate * g / np.sqrt(m + self.epsilon)
