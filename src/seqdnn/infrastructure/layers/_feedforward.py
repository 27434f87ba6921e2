"""
Feedforward and simple recurrent layer structures.

    feedforward:       y = f(W·x + b)
    simple recurrent:  y = f(W·x + Wrec·yPrev + b)

Both keep the activation on the output array: backward multiplies the output
gradient by ``f'`` computed from the activated output values.
"""

from __future__ import annotations

import numpy as np

from ..parameters._layer_parameters import (
    FeedforwardLayerParameters,
    SimpleRecurrentLayerParameters,
)
from ._gate import (
    activation_deriv,
    assign_gate_errors,
    linear_forward,
    propagate_gate_errors,
)
from ._layer_configuration import LayerConnection
from ._layer_structure import LayerStructure


class FeedforwardLayerStructure(LayerStructure):
    """One timestep of a feedforward layer. Ignores the context window."""

    CONNECTION = LayerConnection.FEEDFORWARD
    PARAMS_TYPE = FeedforwardLayerParameters

    params: FeedforwardLayerParameters

    def __init__(
        self,
        input_array,
        output_array,
        params,
        activation_function=None,
        dropout=0.0,
        rng=None,
    ):
        super().__init__(
            input_array, output_array, params, activation_function, dropout, rng
        )
        if activation_function is not None:
            self.output_array.set_activation(activation_function)

    def _forward(self, x, window, contributions) -> None:
        self.output_array.assign_values(
            linear_forward(
                self.params.unit,
                x,
                contributions=contributions.unit if contributions is not None else None,
            )
        )
        self.output_array.activate()

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        grad = grad_output * activation_deriv(self.output_array)
        assign_gate_errors(params_errors.unit, grad, self.layer_input)
        self.recurrent_errors = None
        input_errors, _ = propagate_gate_errors(self.params.unit, grad)
        return input_errors


class SimpleRecurrentLayerStructure(LayerStructure):
    """One timestep of a simple (Elman) recurrent layer."""

    CONNECTION = LayerConnection.SIMPLE_RECURRENT
    PARAMS_TYPE = SimpleRecurrentLayerParameters

    params: SimpleRecurrentLayerParameters

    def __init__(
        self,
        input_array,
        output_array,
        params,
        activation_function=None,
        dropout=0.0,
        rng=None,
    ):
        super().__init__(
            input_array, output_array, params, activation_function, dropout, rng
        )
        if activation_function is not None:
            self.output_array.set_activation(activation_function)

    def _forward(self, x, window, contributions) -> None:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        self.output_array.assign_values(
            linear_forward(
                self.params.unit,
                x,
                y_prev,
                contributions.unit if contributions is not None else None,
            )
        )
        self.output_array.activate()

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None

        grad = grad_output * activation_deriv(self.output_array)
        assign_gate_errors(params_errors.unit, grad, self.layer_input, y_prev)

        input_errors, rec_errors = propagate_gate_errors(self.params.unit, grad)
        self.recurrent_errors = rec_errors if prev is not None else None
        return input_errors
