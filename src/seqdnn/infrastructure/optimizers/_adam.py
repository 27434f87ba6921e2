"""
ADAM update method.

Maintains exponentially decaying averages of past gradients (first moment)
and past squared gradients (second moment). Bias correction is folded into
the step size ``alpha``, which depends on the example time step.

Design notes
------------
- The time step is advanced by `on_new_example`, i.e. once per training
  example, not once per array update. Before the first example the bias
  correction of time step 1 is used.
- Per-array moments are keyed by ``id(array)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np

from ..arrays._updatable_array import UpdatableArray


@dataclass
class ADAMMethod:
    """
    ADAM.

    Update rule
    -----------
    Let ``g`` be the gradient and ``t`` the example time step:

        alpha = step_size * sqrt(1 - beta2^t) / (1 - beta1^t)

        m <- beta1 * m + (1 - beta1) * g
        v <- beta2 * v + (1 - beta2) * g^2

        w <- w - alpha * m / (sqrt(v) + epsilon)

    Parameters
    ----------
    step_size : float
        Must be positive. Defaults to 0.001.
    beta1, beta2 : float
        Decay rates of the moments, each in ``(0, 1)``.
    epsilon : float
        Numerical stability term. Must be positive.
    """

    step_size: float = 0.001
    beta1: float = 0.9
    beta2: float = 0.999
    epsilon: float = 1e-8

    def __init__(
        self,
        step_size: float = 0.001,
        beta1: float = 0.9,
        beta2: float = 0.999,
        epsilon: float = 1e-8,
    ) -> None:
        self.step_size = float(step_size)
        self.beta1 = float(beta1)
        self.beta2 = float(beta2)
        self.epsilon = float(epsilon)

        if self.step_size <= 0.0:
            raise ValueError(f"step_size must be > 0, got {self.step_size}")
        if not (0.0 < self.beta1 < 1.0) or not (0.0 < self.beta2 < 1.0):
            raise ValueError(
                f"betas must be in (0,1), got {(self.beta1, self.beta2)}"
            )
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")

        self.time_step = 0
        self.alpha = self._alpha(1)

        # id(array) -> {"m": ndarray, "v": ndarray}
        self._state: Dict[int, Dict[str, np.ndarray]] = {}

    def _alpha(self, t: int) -> float:
        return (
            self.step_size
            * math.sqrt(1.0 - self.beta2**t)
            / (1.0 - self.beta1**t)
        )

    def on_new_example(self) -> None:
        """Advance the time step and recompute the bias-corrected step size."""
        self.time_step += 1
        self.alpha = self._alpha(self.time_step)

    def update(self, array: UpdatableArray, errors: np.ndarray) -> None:
        g = np.asarray(errors)
        st = self._state.get(id(array))
        if st is None:
            st = {"m": np.zeros_like(array.values), "v": np.zeros_like(array.values)}
            self._state[id(array)] = st

        m = st["m"]
        v = st["v"]
        m *= self.beta1
        m += (1.0 - self.beta1) * g
        v *= self.beta2
        v += (1.0 - self.beta2) * g * g

        array.values[...] -= self.alpha * m / (np.sqrt(v) + self.epsilon)
