"""
Parameter units.

A parameter unit is the ``(weights, biases)`` pair of one linear transform
``W·x + b``. The recurrent variant adds the ``recurrent_weights`` matrix applied
to the previous timestep output, forming the gate unit triple used by every
gate of the recurrent cells.
"""

from __future__ import annotations

from typing import Iterator

from ..arrays._updatable_array import UpdatableArray


class ParametersUnit:
    """
    Weights ``[output_size x input_size]`` and biases ``[output_size]``.
    """

    def __init__(self, input_size: int, output_size: int, name: str = "") -> None:
        if input_size <= 0 or output_size <= 0:
            raise ValueError(
                "sizes must be > 0, got "
                f"input_size={input_size}, output_size={output_size}"
            )
        self.input_size = int(input_size)
        self.output_size = int(output_size)
        prefix = f"{name}." if name else ""
        self.weights = UpdatableArray.zeros(
            (self.output_size, self.input_size), name=f"{prefix}weights"
        )
        self.biases = UpdatableArray.zeros((self.output_size,), name=f"{prefix}biases")

    def __iter__(self) -> Iterator[UpdatableArray]:
        yield self.weights
        yield self.biases


class RecurrentParametersUnit(ParametersUnit):
    """
    A `ParametersUnit` with recurrent weights ``[output_size x output_size]``.
    """

    def __init__(self, input_size: int, output_size: int, name: str = "") -> None:
        super().__init__(input_size, output_size, name=name)
        prefix = f"{name}." if name else ""
        self.recurrent_weights = UpdatableArray.zeros(
            (self.output_size, self.output_size), name=f"{prefix}recurrent_weights"
        )

    def __iter__(self) -> Iterator[UpdatableArray]:
        yield self.weights
        yield self.biases
        yield self.recurrent_weights
