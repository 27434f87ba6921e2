"""
Plain learning rate and momentum update methods.

Both methods apply one update to one `UpdatableArray` given its gradient.
The learning rate can follow a decay schedule, advanced once per epoch.

Design notes
------------
- Per-array state (momentum velocity) is keyed by ``id(array)``, so the same
  method instance can serve every array of a model.
- Updates are written in place into the array storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from ..arrays._updatable_array import UpdatableArray
from ...domain._update_method import IDecayMethod


@dataclass
class LearningRateMethod:
    """
    Gradient descent with a (possibly decaying) learning rate.

    Update rule
    -----------
        w <- w - lr * g

    Parameters
    ----------
    learning_rate : float
        Initial learning rate. Must be positive.
    decay_method : IDecayMethod, optional
        Schedule applied by `on_new_epoch`.
    """

    learning_rate: float
    decay_method: Optional[IDecayMethod] = None

    def __init__(
        self,
        learning_rate: float,
        decay_method: Optional[IDecayMethod] = None,
    ) -> None:
        self.learning_rate = float(learning_rate)
        self.decay_method = decay_method
        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")

        self.initial_learning_rate = self.learning_rate
        self.epoch_count = 0

    def on_new_epoch(self) -> None:
        """Advance the epoch counter and apply the decay schedule, if any."""
        self.epoch_count += 1
        if self.decay_method is not None:
            self.learning_rate = self.decay_method.update(
                self.learning_rate, self.epoch_count
            )

    def update(self, array: UpdatableArray, errors: np.ndarray) -> None:
        array.values[...] -= self.learning_rate * np.asarray(errors)


@dataclass
class MomentumMethod(LearningRateMethod):
    """
    Gradient descent with momentum.

    Update rule
    -----------
        v <- momentum * v - lr * g
        w <- w + v

    Parameters
    ----------
    learning_rate : float
        Initial learning rate. Must be positive.
    momentum : float
        Momentum coefficient, in ``[0, 1)``.
    decay_method : IDecayMethod, optional
        Schedule applied by `on_new_epoch`.
    """

    momentum: float = 0.9

    def __init__(
        self,
        learning_rate: float,
        momentum: float = 0.9,
        decay_method: Optional[IDecayMethod] = None,
    ) -> None:
        super().__init__(learning_rate, decay_method=decay_method)
        self.momentum = float(momentum)
        if not (0.0 <= self.momentum < 1.0):
            raise ValueError(f"momentum must be in [0, 1), got {self.momentum}")

        # id(array) -> {"v": ndarray}
        self._state: Dict[int, Dict[str, np.ndarray]] = {}

    def update(self, array: UpdatableArray, errors: np.ndarray) -> None:
        st = self._state.get(id(array))
        if st is None:
            st = {"v": np.zeros_like(array.values)}
            self._state[id(array)] = st

        v = st["v"]
        v *= self.momentum
        v -= self.learning_rate * np.asarray(errors)
        array.values[...] += v
