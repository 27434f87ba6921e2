"""
Delta Recurrent Neural Network layer structure.

With ``wx = W·x`` and ``wyRec = Wrec·yPrev``:

    c = f(beta1 ⊙ wx + beta2 ⊙ wyRec + alpha ⊙ wx ⊙ wyRec + bc)
    p = σ(wx + bp)
    y = p ⊙ c + (1 - p) ⊙ yPrev

``bc`` is the bias of the feedforward unit and ``bp`` the bias of the
recurrent unit. At the first timestep every ``wyRec`` term is omitted and
``y = p ⊙ c``. The configured activation ``f`` goes on the candidate; the
output ``y`` is not activated.

Contributions
-------------
The weights of both units receive ``W[j,i]*x[i]`` and ``Wrec[j,i]*yPrev[i]``,
the biases their own values, and the gating vectors the terms they scale in
the candidate pre-activation: ``beta1 ⊙ wx``, ``beta2 ⊙ wyRec`` and
``alpha ⊙ wx ⊙ wyRec``.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .._activations import Sigmoid
from ..parameters._gated_parameters import DeltaRNNLayerParameters
from ._gate import activation_deriv, new_gate
from ._layer_configuration import LayerConnection
from ._layer_structure import LayerStructure


class DeltaRNNLayerStructure(LayerStructure):
    """One timestep of a DeltaRNN layer."""

    CONNECTION = LayerConnection.DELTA_RNN
    PARAMS_TYPE = DeltaRNNLayerParameters

    params: DeltaRNNLayerParameters

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
        self.candidate = new_gate(size, activation_function)
        self.partition = new_gate(size, Sigmoid())
        self.wx = np.zeros(size)
        self.wy_rec: Optional[np.ndarray] = None

    def _forward(self, x, window, contributions) -> None:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        p = self.params

        self.wx = np.dot(p.feedforward_unit.weights.values, x)
        wx = self.wx

        d1 = p.beta1.values * wx
        if prev is not None:
            self.wy_rec = np.dot(p.recurrent_unit.weights.values, y_prev)
            d1 = d1 + p.beta2.values * self.wy_rec
            cand = d1 + p.feedforward_unit.biases.values
            cand = cand + p.alpha.values * wx * self.wy_rec
        else:
            self.wy_rec = None
            cand = d1 + p.feedforward_unit.biases.values
        self.candidate.assign_values(cand)
        self.candidate.activate()

        self.partition.assign_values(wx + p.recurrent_unit.biases.values)
        self.partition.activate()

        part = self.partition.values
        y = part * self.candidate.values
        if prev is not None:
            y = y + (1.0 - part) * y_prev
        self.output_array.assign_values(y)

        if contributions is not None:
            self._save_contributions(contributions, x, y_prev)

    def _save_contributions(
        self, contributions: DeltaRNNLayerParameters, x, y_prev
    ) -> None:
        p = self.params
        contributions.feedforward_unit.weights.assign_values(
            p.feedforward_unit.weights.values * x[np.newaxis, :]
        )
        contributions.feedforward_unit.biases.assign_values(
            p.feedforward_unit.biases.values
        )
        contributions.recurrent_unit.biases.assign_values(
            p.recurrent_unit.biases.values
        )
        contributions.beta1.assign_values(p.beta1.values * self.wx)
        if y_prev is not None:
            contributions.recurrent_unit.weights.assign_values(
                p.recurrent_unit.weights.values * y_prev[np.newaxis, :]
            )
            contributions.beta2.assign_values(p.beta2.values * self.wy_rec)
            contributions.alpha.assign_values(p.alpha.values * self.wx * self.wy_rec)
        else:
            contributions.recurrent_unit.weights.values.fill(0.0)
            contributions.beta2.values.fill(0.0)
            contributions.alpha.values.fill(0.0)

    def _backward(self, grad_output, params_errors, window) -> np.ndarray:
        prev = self._prev_layer(window)
        y_prev = prev.output_array.values if prev is not None else None
        x = self.layer_input
        p = self.params
        pe = params_errors
        wx = self.wx

        part = self.partition.values
        cand = self.candidate.values

        grad_c = grad_output * part * activation_deriv(self.candidate)
        if prev is not None:
            grad_p = grad_output * (cand - y_prev) * activation_deriv(self.partition)
        else:
            grad_p = grad_output * cand * activation_deriv(self.partition)
        self.candidate.assign_errors(grad_c)
        self.partition.assign_errors(grad_p)

        if prev is not None:
            wy = self.wy_rec
            grad_wx = grad_c * (p.beta1.values + p.alpha.values * wy) + grad_p
            grad_wy = grad_c * (p.beta2.values + p.alpha.values * wx)
            pe.recurrent_unit.weights.assign_values(np.outer(grad_wy, y_prev))
            pe.beta2.assign_values(grad_c * wy)
            pe.alpha.assign_values(grad_c * wx * wy)
            self.recurrent_errors = (
                grad_output * (1.0 - part)
                + np.dot(p.recurrent_unit.weights.values.T, grad_wy)
            )
        else:
            grad_wx = grad_c * p.beta1.values + grad_p
            pe.recurrent_unit.weights.values.fill(0.0)
            pe.beta2.values.fill(0.0)
            pe.alpha.values.fill(0.0)
            self.recurrent_errors = None

        pe.feedforward_unit.weights.assign_values(np.outer(grad_wx, x))
        pe.feedforward_unit.biases.assign_values(grad_c)
        pe.recurrent_unit.biases.assign_values(grad_p)
        pe.beta1.assign_values(grad_c * wx)

        return np.dot(p.feedforward_unit.weights.values.T, grad_wx)
