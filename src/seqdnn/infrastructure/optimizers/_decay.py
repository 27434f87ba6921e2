"""
Learning rate decay schedules.

Decay methods map ``(learning_rate, time_step)`` to the learning rate of the
given time step. Time steps are 1-based: the first step always keeps the
initial learning rate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ExponentialDecay:
    """
    Exponential decay from `init_learning_rate` to `final_learning_rate` over
    `total_iterations` steps:

        lr_t = exp(((T - t) * ln(lr) + ln(lr_final)) / (T - t + 1))

    The learning rate is left unchanged once it reaches `final_learning_rate`.
    """

    total_iterations: int
    init_learning_rate: float = 0.01
    final_learning_rate: float = 0.0001

    def __init__(
        self,
        total_iterations: int,
        init_learning_rate: float = 0.01,
        final_learning_rate: float = 0.0001,
    ) -> None:
        self.total_iterations = int(total_iterations)
        self.init_learning_rate = float(init_learning_rate)
        self.final_learning_rate = float(final_learning_rate)

        if self.total_iterations <= 0:
            raise ValueError(
                f"total_iterations must be > 0, got {self.total_iterations}"
            )
        if self.final_learning_rate <= 0.0:
            raise ValueError(
                f"final_learning_rate must be > 0, got {self.final_learning_rate}"
            )
        if self.init_learning_rate <= self.final_learning_rate:
            raise ValueError(
                "init_learning_rate must be > final_learning_rate, got "
                f"{self.init_learning_rate} <= {self.final_learning_rate}"
            )

    def update(self, learning_rate: float, time_step: int) -> float:
        if learning_rate > self.final_learning_rate and time_step > 1:
            remaining = self.total_iterations - time_step
            numerator = remaining * math.log(learning_rate) + math.log(
                self.final_learning_rate
            )
            return math.exp(numerator / (remaining + 1))
        return learning_rate


@dataclass
class HyperbolicDecay:
    """
    Hyperbolic decay of the initial learning rate:

        lr_t = lr_0 / (1 + decay * t)
    """

    decay: float
    init_learning_rate: float = 0.01

    def __init__(self, decay: float, init_learning_rate: float = 0.01) -> None:
        self.decay = float(decay)
        self.init_learning_rate = float(init_learning_rate)

        if self.decay <= 0.0:
            raise ValueError(f"decay must be > 0, got {self.decay}")
        if self.init_learning_rate <= 0.0:
            raise ValueError(
                f"init_learning_rate must be > 0, got {self.init_learning_rate}"
            )

    def update(self, learning_rate: float, time_step: int) -> float:
        if time_step > 1:
            return self.init_learning_rate / (1.0 + self.decay * time_step)
        return learning_rate
