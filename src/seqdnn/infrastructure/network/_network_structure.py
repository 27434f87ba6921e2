"""
Network structure of one timestep.

A `RecurrentNetworkStructure` is the stack of layer structures computed for a
single element of a sequence. Layer ``i``'s output array is the very same
object as layer ``i + 1``'s input array, so errors written on it by the upper
layer are read as output errors by the lower one.

Every layer references the shared model parameters; nothing here is copied
from one timestep to another. Recurrent access goes exclusively through the
context window passed to `forward` and `backward`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from ..arrays._augmented_array import AugmentedArray
from ..layers._factory import build_layer_structure
from ..layers._layer_configuration import LayerConfiguration
from ..layers._layer_structure import LayerStructure
from ._network_parameters import NetworkParameters
from ...domain._errors import ShapeMismatchError


class RecurrentNetworkStructure:
    """
    The layer structures of one timestep.

    Parameters
    ----------
    layers_configuration : Sequence[LayerConfiguration]
        The network architecture.
    params : NetworkParameters
        Shared model parameters.
    rng : numpy.random.Generator, optional
        Random source of the dropout masks.
    """

    def __init__(
        self,
        layers_configuration: Sequence[LayerConfiguration],
        params: NetworkParameters,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        configs = tuple(layers_configuration)
        self.input_array = AugmentedArray(configs[0].size)

        self.layers: List[LayerStructure] = []
        input_array = self.input_array
        for i, cfg in enumerate(configs[1:]):
            output_array = AugmentedArray(cfg.size)
            self.layers.append(
                build_layer_structure(
                    cfg.connection_type,
                    input_array,
                    output_array,
                    params.params_per_layer[i],
                    activation_function=cfg.activation_function,
                    dropout=configs[i].dropout,
                    rng=rng,
                )
            )
            input_array = output_array

    @property
    def input_layer(self) -> LayerStructure:
        return self.layers[0]

    @property
    def output_layer(self) -> LayerStructure:
        return self.layers[-1]

    @property
    def output_array(self) -> AugmentedArray:
        return self.output_layer.output_array

    def forward(
        self,
        features,
        window: Optional[Any] = None,
        use_dropout: bool = False,
        contributions: Optional[NetworkParameters] = None,
    ) -> np.ndarray:
        """
        Forward `features` through every layer and return the output values.

        Parameters
        ----------
        features : array_like
            Input vector of this timestep.
        window : StateContextWindow, optional
            Context window of this timestep.
        use_dropout : bool
            Whether to apply the configured dropout.
        contributions : NetworkParameters, optional
            Zeroed buffer receiving the contributions of every weight.
        """
        features = np.asarray(features, dtype=np.float64)
        if features.shape != self.input_array.shape:
            raise ShapeMismatchError(self.input_array.shape, features.shape, "features")
        self.input_array.assign_values(features)

        for i, layer in enumerate(self.layers):
            layer_window = window.layer(i) if window is not None else None
            if contributions is not None:
                layer.forward_with_contributions(
                    contributions.params_per_layer[i], layer_window, use_dropout
                )
            else:
                layer.forward(layer_window, use_dropout)

        return self.output_array.values

    def backward(
        self,
        output_errors,
        params_errors: NetworkParameters,
        propagate_to_input: bool = False,
        window: Optional[Any] = None,
    ) -> None:
        """
        Backward `output_errors` from the output layer down to the input.

        Every layer but the first always propagates to its input; the first
        one only when `propagate_to_input` is set.
        """
        last = len(self.layers) - 1
        for i in range(last, -1, -1):
            layer = self.layers[i]
            errors = output_errors if i == last else layer.output_array.errors
            layer.backward(
                errors,
                params_errors.params_per_layer[i],
                propagate_to_input=(propagate_to_input or i > 0),
                window=window.layer(i) if window is not None else None,
            )

    @property
    def input_errors(self) -> np.ndarray:
        return self.input_array.errors
