"""
Parameters of a whole network.

`NetworkParameters` holds one `LayerParameters` per layer connection. The
model parameters are created once per network; gradient buffers and
contributions buffers are zeroed twins obtained with `zeros_like()`.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

import numpy as np

from ..arrays._updatable_array import UpdatableArray
from ..layers._factory import build_layer_parameters
from ..layers._layer_configuration import LayerConfiguration
from ..parameters._layer_parameters import LayerParameters


class NetworkParameters:
    """
    One `LayerParameters` per connection of a network.

    Parameters
    ----------
    layers_configuration : Sequence[LayerConfiguration]
        The network architecture; entry ``i + 1`` describes the layer built on
        top of entry ``i``.
    """

    def __init__(self, layers_configuration: Sequence[LayerConfiguration]) -> None:
        self.layers_configuration = tuple(layers_configuration)
        configs = self.layers_configuration
        self.params_per_layer: List[LayerParameters] = [
            build_layer_parameters(
                cfg.connection_type,
                input_size=prev.size,
                output_size=cfg.size,
                sparse_input=prev.sparse_input,
            )
            for prev, cfg in zip(configs, configs[1:])
        ]

    def __iter__(self) -> Iterator[UpdatableArray]:
        """Iterate every trainable array, layer by layer."""
        for layer_params in self.params_per_layer:
            yield from layer_params

    def __len__(self) -> int:
        return sum(len(p) for p in self.params_per_layer)

    def __getitem__(self, index: int) -> LayerParameters:
        return self.params_per_layer[index]

    def initialize(
        self,
        weights_initializer: Optional[str] = "xavier_uniform",
        biases_initializer: Optional[str] = "zeros",
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if rng is None:
            rng = np.random.default_rng()
        for layer_params in self.params_per_layer:
            layer_params.initialize(weights_initializer, biases_initializer, rng=rng)

    def assign_values(self, other: "NetworkParameters") -> None:
        self._check_same_layout(other)
        for mine, theirs in zip(self.params_per_layer, other.params_per_layer):
            mine.assign_values(theirs)

    def check_compatible(self, other: "NetworkParameters") -> None:
        self._check_same_layout(other)
        for mine, theirs in zip(self.params_per_layer, other.params_per_layer):
            mine.check_compatible(theirs)

    def _check_same_layout(self, other: "NetworkParameters") -> None:
        if not isinstance(other, NetworkParameters):
            raise TypeError(f"Expected NetworkParameters, got {type(other).__name__}.")
        if len(other.params_per_layer) != len(self.params_per_layer):
            raise TypeError(
                f"Expected {len(self.params_per_layer)} layers, "
                f"got {len(other.params_per_layer)}."
            )

    def zeros_like(self) -> "NetworkParameters":
        return NetworkParameters(self.layers_configuration)

    def copy(self) -> "NetworkParameters":
        cloned = self.zeros_like()
        cloned.assign_values(self)
        return cloned

    def __repr__(self) -> str:
        layers = ", ".join(type(p).__name__ for p in self.params_per_layer)
        return f"NetworkParameters([{layers}])"
