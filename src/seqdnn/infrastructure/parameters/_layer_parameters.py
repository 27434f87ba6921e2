"""
Layer parameters.

A `LayerParameters` object holds every trainable array of one layer
connection, exposed through `params_list` in a fixed order. The same class is
used for three purposes:

- the model parameters, shared by every timestep of every sequence;
- gradient buffers (`zeros_like()`), written by backward;
- contributions buffers, written by the contributions forward path.

Because all three are laid out identically, accumulators and optimizers pair
arrays positionally by iterating two objects of the same type side by side.

Design notes
------------
- Subclasses build their units in `__init__` and implement `params_list`,
  `weights_list` and `biases_list`.
- `sparse_input` is recorded and propagated to copies; storage is always
  dense NumPy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

import numpy as np

from ..arrays._updatable_array import UpdatableArray
from ..utils.weight_initializer import WeightInitializer
from ._params_unit import ParametersUnit, RecurrentParametersUnit
from ...domain._errors import ShapeMismatchError


class LayerParameters(ABC):
    """
    Base class of the trainable arrays of one layer connection.

    Parameters
    ----------
    input_size : int
        Size of the layer input.
    output_size : int
        Size of the layer output.
    sparse_input : bool
        Whether the input is expected to be sparse.
    """

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        if input_size <= 0 or output_size <= 0:
            raise ValueError(
                "sizes must be > 0, got "
                f"input_size={input_size}, output_size={output_size}"
            )
        self.input_size = int(input_size)
        self.output_size = int(output_size)
        self.sparse_input = bool(sparse_input)

    @property
    @abstractmethod
    def params_list(self) -> List[UpdatableArray]:
        """Every trainable array, in the fixed order of this layout."""
        raise NotImplementedError

    @property
    @abstractmethod
    def weights_list(self) -> List[UpdatableArray]:
        """Arrays initialized with the weights initializer."""
        raise NotImplementedError

    @property
    @abstractmethod
    def biases_list(self) -> List[UpdatableArray]:
        """Arrays initialized with the biases initializer."""
        raise NotImplementedError

    def __iter__(self) -> Iterator[UpdatableArray]:
        return iter(self.params_list)

    def __len__(self) -> int:
        return len(self.params_list)

    def initialize(
        self,
        weights_initializer: Optional[str] = "xavier_uniform",
        biases_initializer: Optional[str] = "zeros",
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Fill the arrays in place with registered initializers.

        A `None` initializer leaves the corresponding arrays untouched.
        """
        if rng is None:
            rng = np.random.default_rng()
        if weights_initializer is not None:
            init = WeightInitializer(weights_initializer)
            for w in self.weights_list:
                init(w.values, rng=rng)
        if biases_initializer is not None:
            init = WeightInitializer(biases_initializer)
            for b in self.biases_list:
                init(b.values, rng=rng)

    def assign_values(self, other: "LayerParameters") -> None:
        """
        Copy the values of `other` (same layout) into this object.
        """
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot assign {type(other).__name__} to {type(self).__name__}."
            )
        for mine, theirs in zip(self.params_list, other.params_list):
            mine.assign_values(theirs.values)

    def zeros_like(self) -> "LayerParameters":
        """Return a zeroed object with the same layout."""
        return self._new_empty()

    def copy(self) -> "LayerParameters":
        cloned = self._new_empty()
        cloned.assign_values(self)
        return cloned

    def _new_empty(self) -> "LayerParameters":
        return type(self)(
            self.input_size, self.output_size, sparse_input=self.sparse_input
        )

    def check_compatible(self, other: "LayerParameters") -> None:
        """
        Raise if `other` does not have the same type and shapes as this object.
        """
        if type(other) is not type(self):
            raise TypeError(
                f"Expected {type(self).__name__}, got {type(other).__name__}."
            )
        for mine, theirs in zip(self.params_list, other.params_list):
            if mine.shape != theirs.shape:
                raise ShapeMismatchError(
                    mine.shape, theirs.shape, mine.name or "parameter"
                )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(input_size={self.input_size}, "
            f"output_size={self.output_size})"
        )


class FeedforwardLayerParameters(LayerParameters):
    """Parameters of a feedforward layer: ``y = f(W·x + b)``."""

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        super().__init__(input_size, output_size, sparse_input=sparse_input)
        self.unit = ParametersUnit(self.input_size, self.output_size)

    @property
    def params_list(self) -> List[UpdatableArray]:
        return [self.unit.weights, self.unit.biases]

    @property
    def weights_list(self) -> List[UpdatableArray]:
        return [self.unit.weights]

    @property
    def biases_list(self) -> List[UpdatableArray]:
        return [self.unit.biases]


class SimpleRecurrentLayerParameters(LayerParameters):
    """Parameters of a simple recurrent layer: ``y = f(W·x + Wrec·yPrev + b)``."""

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        super().__init__(input_size, output_size, sparse_input=sparse_input)
        self.unit = RecurrentParametersUnit(self.input_size, self.output_size)

    @property
    def params_list(self) -> List[UpdatableArray]:
        return [self.unit.weights, self.unit.biases, self.unit.recurrent_weights]

    @property
    def weights_list(self) -> List[UpdatableArray]:
        return [self.unit.weights, self.unit.recurrent_weights]

    @property
    def biases_list(self) -> List[UpdatableArray]:
        return [self.unit.biases]
