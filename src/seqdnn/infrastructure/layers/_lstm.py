"""
Long Short-Term Memory layer structure.

Forward, with ``σ`` the sigmoid and ``f`` the layer activation:

    i  = σ(Wi·x + Ri·yPrev + bi)
    o  = σ(Wo·x + Ro·yPrev + bo)
    fg = σ(Wf·x + Rf·yPrev + bf)
    g  = f(Wc·x + Rc·yPrev + bc)
    cell = i ⊙ g + fg ⊙ cellPrev
    y  = o ⊙ f(cell)

The `cell` array keeps the cell state as its not-activated values and
``f(cell)`` as its values. In backward, the cell gradient of the next timestep
flows back through that timestep's forget gate.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .._activations import Sigmoid
from ..parameters._gated_parameters import LSTMLayerParameters
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


class LSTMLayerStructure(LayerStructure):
    """
    One timestep of an LSTM layer.

    Attributes
    ----------
    input_gate, output_gate, forget_gate, candidate, cell : AugmentedArray
        Intermediate arrays; after backward their errors hold the gradient at
        their pre-activation (the cell holds the gradient at the cell state).
    cell_errors : ndarray or None
        Gradient at the cell state, read by the previous timestep.
    """

    CONNECTION = LayerConnection.LSTM
    PARAMS_TYPE = LSTMLayerParameters

    params: LSTMLayerParameters

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
        self.output_gate = new_gate(size, sigmoid)
        self.forget_gate = new_gate(size, sigmoid)
        self.candidate = new_gate(size, activation_function)
        self.cell = new_gate(size, activation_function)
        self.cell_errors: Optional[np.ndarray] = None

    def _forward(self, x, window, contributions) -> None:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        p = self.params
        c = contributions

        gate_forward(self.input_gate, p.input_gate, x, y_prev, unit_of(c, "input_gate"))
        gate_forward(
            self.output_gate, p.output_gate, x, y_prev, unit_of(c, "output_gate")
        )
        gate_forward(
            self.forget_gate, p.forget_gate, x, y_prev, unit_of(c, "forget_gate")
        )
        gate_forward(self.candidate, p.candidate, x, y_prev, unit_of(c, "candidate"))

        cell = self.input_gate.values * self.candidate.values
        if prev is not None:
            cell = cell + self.forget_gate.values * prev.cell.values_not_activated
        self.cell.assign_values(cell)
        self.cell.activate()

        self.output_array.assign_values(self.output_gate.values * self.cell.values)

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        prev = self._prev_layer(window)
        nxt = window.next_state_layer() if window is not None else None
        y_prev = prev.output_array.values if prev is not None else None
        x = self.layer_input

        i = self.input_gate.values
        o = self.output_gate.values
        g = self.candidate.values

        grad_o = grad_output * self.cell.values * activation_deriv(self.output_gate)

        grad_cell = grad_output * o * activation_deriv(self.cell)
        if nxt is not None and nxt.cell_errors is not None:
            grad_cell = grad_cell + nxt.cell_errors * nxt.forget_gate.values
        self.cell_errors = grad_cell
        self.cell.assign_errors(grad_cell)

        grad_i = grad_cell * g * activation_deriv(self.input_gate)
        grad_g = grad_cell * i * activation_deriv(self.candidate)
        if prev is not None:
            cell_prev = prev.cell.values_not_activated
            grad_f = grad_cell * cell_prev * activation_deriv(self.forget_gate)
        else:
            grad_f = np.zeros_like(grad_cell)

        pe = params_errors
        input_errors = np.zeros_like(x)
        rec_errors = np.zeros_like(grad_output)
        for gate, unit, unit_errors, grad in (
            (self.input_gate, self.params.input_gate, pe.input_gate, grad_i),
            (self.output_gate, self.params.output_gate, pe.output_gate, grad_o),
            (self.forget_gate, self.params.forget_gate, pe.forget_gate, grad_f),
            (self.candidate, self.params.candidate, pe.candidate, grad_g),
        ):
            gate.assign_errors(grad)
            assign_gate_errors(unit_errors, grad, x, y_prev)
            gate_input_errors, gate_rec_errors = propagate_gate_errors(unit, grad)
            input_errors += gate_input_errors
            rec_errors += gate_rec_errors

        self.recurrent_errors = rec_errors if prev is not None else None
        return input_errors
