"""
Chaos-Free Network layer structure.

    i  = σ(Wi·x + Ri·yPrev + bi)
    fg = σ(Wf·x + Rf·yPrev + bf)
    c  = f(Wcand·x)
    y  = i ⊙ c + fg ⊙ f(yPrev)

The candidate has neither bias nor recurrence. At the first timestep
``y = i ⊙ c``.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .._activations import Sigmoid
from ..parameters._gated_parameters import CFNLayerParameters
from ._gate import (
    activation_deriv,
    assign_gate_errors,
    gate_forward,
    new_gate,
    propagate_gate_errors,
    unit_of,
)
from ._layer_configuration import LayerConnection
from ._layer_structure import LayerStructure


class CFNLayerStructure(LayerStructure):
    """One timestep of a CFN layer."""

    CONNECTION = LayerConnection.CFN
    PARAMS_TYPE = CFNLayerParameters

    params: CFNLayerParameters

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
        size = params.output_size
        sigmoid = Sigmoid()
        self.input_gate = new_gate(size, sigmoid)
        self.forget_gate = new_gate(size, sigmoid)
        self.candidate = new_gate(size, activation_function)
        self._activated_prev: Optional[np.ndarray] = None

    def _activate(self, values: np.ndarray) -> np.ndarray:
        if self.activation_function is None:
            return values.copy()
        return self.activation_function.f(values)

    def _forward(self, x, window, contributions) -> None:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        p = self.params
        c = contributions

        gate_forward(self.input_gate, p.input_gate, x, y_prev, unit_of(c, "input_gate"))
        gate_forward(
            self.forget_gate, p.forget_gate, x, y_prev, unit_of(c, "forget_gate")
        )

        self.candidate.assign_values(np.dot(p.candidate_weights.values, x))
        self.candidate.activate()
        if c is not None:
            c.candidate_weights.assign_values(
                p.candidate_weights.values * x[np.newaxis, :]
            )

        y = self.input_gate.values * self.candidate.values
        if prev is not None:
            self._activated_prev = self._activate(y_prev)
            y = y + self.forget_gate.values * self._activated_prev
        else:
            self._activated_prev = None
        self.output_array.assign_values(y)

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        x = self.layer_input
        params = self.params

        i = self.input_gate.values
        fg = self.forget_gate.values

        grad_i = grad_output * self.candidate.values * activation_deriv(self.input_gate)
        grad_c = grad_output * i * activation_deriv(self.candidate)
        if prev is not None:
            grad_f = (
                grad_output * self._activated_prev * activation_deriv(self.forget_gate)
            )
        else:
            grad_f = np.zeros_like(grad_output)

        self.input_gate.assign_errors(grad_i)
        self.forget_gate.assign_errors(grad_f)
        self.candidate.assign_errors(grad_c)

        pe = params_errors
        assign_gate_errors(pe.input_gate, grad_i, x, y_prev)
        assign_gate_errors(pe.forget_gate, grad_f, x, y_prev)
        pe.candidate_weights.assign_values(np.outer(grad_c, x))

        i_in, i_rec = propagate_gate_errors(params.input_gate, grad_i)
        f_in, f_rec = propagate_gate_errors(params.forget_gate, grad_f)
        c_in = np.dot(params.candidate_weights.values.T, grad_c)

        if prev is not None:
            if self.activation_function is not None:
                prev_deriv = self.activation_function.df_optimized(self._activated_prev)
            else:
                prev_deriv = np.ones_like(y_prev)
            self.recurrent_errors = grad_output * fg * prev_deriv + i_rec + f_rec
        else:
            self.recurrent_errors = None

        return i_in + f_in + c_in
