"""
Gate unit helpers shared by every layer structure.

Every cell in the engine is built from the same primitive: a gate unit that
computes ``W·x (+ R·yPrev) + b`` and optionally activates it. The helpers here
implement that primitive once, forward and backward, so that adding a new
cell only means composing gates:

- `linear_forward` computes the pre-activation of a unit and, when requested,
  records the per-source contributions of each weight.
- `gate_forward` writes the pre-activation into a gate array and activates it.
- `assign_gate_errors` writes the parameter gradients of a unit from the
  gradient at its pre-activation.
- `propagate_gate_errors` maps that gradient back onto the unit's input and
  recurrent input.

Notes
-----
- The contributions path never changes how values are computed: the output is
  produced by exactly the same expression, and contributions are derived on
  the side. Both paths therefore produce bit-identical outputs.
- A missing previous output (first timestep) simply omits the recurrent term.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..arrays._activable_array import ActivableArray
from ..arrays._augmented_array import AugmentedArray
from ..parameters._params_unit import ParametersUnit, RecurrentParametersUnit


def linear_forward(
    unit: ParametersUnit,
    x: np.ndarray,
    y_prev: Optional[np.ndarray] = None,
    contributions: Optional[ParametersUnit] = None,
) -> np.ndarray:
    """
    Return ``W·x + b``, plus ``R·yPrev`` for recurrent units with a previous
    output.

    If `contributions` is given, it receives ``W[j,i]*x[i]``, ``b`` and
    ``R[j,i]*yPrev[i]`` (zero when there is no previous output).
    """
    out = np.dot(unit.weights.values, x) + unit.biases.values

    has_recurrence = y_prev is not None and isinstance(unit, RecurrentParametersUnit)
    if has_recurrence:
        out = out + np.dot(unit.recurrent_weights.values, y_prev)

    if contributions is not None:
        contributions.weights.assign_values(unit.weights.values * x[np.newaxis, :])
        contributions.biases.assign_values(unit.biases.values)
        if isinstance(contributions, RecurrentParametersUnit):
            if has_recurrence:
                contributions.recurrent_weights.assign_values(
                    unit.recurrent_weights.values * y_prev[np.newaxis, :]
                )
            else:
                contributions.recurrent_weights.values.fill(0.0)

    return out


def gate_forward(
    gate: ActivableArray,
    unit: ParametersUnit,
    x: np.ndarray,
    y_prev: Optional[np.ndarray] = None,
    contributions: Optional[ParametersUnit] = None,
) -> None:
    """Assign the pre-activation of `unit` to `gate` and activate it."""
    gate.assign_values(linear_forward(unit, x, y_prev, contributions))
    gate.activate()


def activation_deriv(array: ActivableArray) -> np.ndarray:
    """Derivative of the array activation at its values (ones if none)."""
    if array.has_activation:
        return array.calculate_activation_deriv()
    return np.ones_like(array.values)


def assign_gate_errors(
    unit_errors: ParametersUnit,
    grad: np.ndarray,
    x: np.ndarray,
    y_prev: Optional[np.ndarray] = None,
) -> None:
    """
    Write the parameter gradients of a unit given the gradient `grad` at its
    pre-activation.

    Recurrent weights get a zero gradient when there is no previous output.
    """
    unit_errors.weights.assign_values(np.outer(grad, x))
    unit_errors.biases.assign_values(grad)
    if isinstance(unit_errors, RecurrentParametersUnit):
        if y_prev is not None:
            unit_errors.recurrent_weights.assign_values(np.outer(grad, y_prev))
        else:
            unit_errors.recurrent_weights.values.fill(0.0)


def propagate_gate_errors(
    unit: ParametersUnit, grad: np.ndarray
) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Return ``(W^T·grad, R^T·grad)``; the second item is `None` for
    non-recurrent units.
    """
    input_errors = np.dot(unit.weights.values.T, grad)
    if isinstance(unit, RecurrentParametersUnit):
        return input_errors, np.dot(unit.recurrent_weights.values.T, grad)
    return input_errors, None


def new_gate(size: int, activation=None) -> AugmentedArray:
    """Build a gate array with an optional activation."""
    gate = AugmentedArray(size)
    if activation is not None:
        gate.set_activation(activation)
    return gate


def unit_of(params, name: str):
    """Return the unit `name` of `params`, or `None` when `params` is `None`."""
    return getattr(params, name) if params is not None else None
