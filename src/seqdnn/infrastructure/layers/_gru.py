"""
Gated Recurrent Unit layer structure.

    r = σ(Wr·x + Rr·yPrev + br)
    p = σ(Wp·x + Rp·yPrev + bp)
    c = f(Wc·x + Rc·(r ⊙ yPrev) + bc)
    y = p ⊙ c + (1 - p) ⊙ yPrev

At the first timestep ``y = p ⊙ c``.
"""

from __future__ import annotations

import numpy as np

from .._activations import Sigmoid
from ..parameters._gated_parameters import GRULayerParameters
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


class GRULayerStructure(LayerStructure):
    """One timestep of a GRU layer."""

    CONNECTION = LayerConnection.GRU
    PARAMS_TYPE = GRULayerParameters

    params: GRULayerParameters

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
        self.reset_gate = new_gate(size, sigmoid)
        self.partition_gate = new_gate(size, sigmoid)
        self.candidate = new_gate(size, activation_function)

    def _forward(self, x, window, contributions) -> None:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        p = self.params
        c = contributions

        gate_forward(self.reset_gate, p.reset_gate, x, y_prev, unit_of(c, "reset_gate"))
        gate_forward(
            self.partition_gate,
            p.partition_gate,
            x,
            y_prev,
            unit_of(c, "partition_gate"),
        )

        reset_prev = self.reset_gate.values * y_prev if prev is not None else None
        gate_forward(
            self.candidate, p.candidate, x, reset_prev, unit_of(c, "candidate")
        )

        part = self.partition_gate.values
        y = part * self.candidate.values
        if prev is not None:
            y = y + (1.0 - part) * y_prev
        self.output_array.assign_values(y)

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        x = self.layer_input
        params = self.params

        r = self.reset_gate.values
        part = self.partition_gate.values
        cand = self.candidate.values

        grad_c = grad_output * part * activation_deriv(self.candidate)
        if prev is not None:
            grad_p = (
                grad_output * (cand - y_prev) * activation_deriv(self.partition_gate)
            )
            rc_errors = np.dot(params.candidate.recurrent_weights.values.T, grad_c)
            grad_r = rc_errors * y_prev * activation_deriv(self.reset_gate)
        else:
            grad_p = grad_output * cand * activation_deriv(self.partition_gate)
            grad_r = np.zeros_like(grad_c)

        self.candidate.assign_errors(grad_c)
        self.partition_gate.assign_errors(grad_p)
        self.reset_gate.assign_errors(grad_r)

        pe = params_errors
        reset_prev = r * y_prev if prev is not None else None
        assign_gate_errors(pe.candidate, grad_c, x, reset_prev)
        assign_gate_errors(pe.reset_gate, grad_r, x, y_prev)
        assign_gate_errors(pe.partition_gate, grad_p, x, y_prev)

        c_in, _ = propagate_gate_errors(params.candidate, grad_c)
        r_in, r_rec = propagate_gate_errors(params.reset_gate, grad_r)
        p_in, p_rec = propagate_gate_errors(params.partition_gate, grad_p)

        if prev is not None:
            self.recurrent_errors = (
                grad_output * (1.0 - part) + p_rec + r_rec + rc_errors * r
            )
        else:
            self.recurrent_errors = None

        return c_in + r_in + p_in
