"""
Parameters of the gated recurrent cells.

Each layout lists its weights first, then its biases, then its recurrent
weights, gate by gate in declaration order:

- LSTM: input gate, output gate, forget gate, candidate.
- GRU: candidate, reset gate, partition gate.
- CFN: input gate, forget gate, plus bias-free candidate weights.
- DeltaRNN: feedforward unit, recurrent unit, plus the alpha, beta1 and beta2
  gating vectors.
"""

from __future__ import annotations

from typing import List

from ..arrays._updatable_array import UpdatableArray
from ._layer_parameters import LayerParameters
from ._params_unit import ParametersUnit, RecurrentParametersUnit


class _GatedLayerParameters(LayerParameters):
    """Layout made only of recurrent gate units, in `GATES` order."""

    GATES: tuple[str, ...] = ()

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        super().__init__(input_size, output_size, sparse_input=sparse_input)
        for gate in self.GATES:
            setattr(
                self,
                gate,
                RecurrentParametersUnit(self.input_size, self.output_size, name=gate),
            )

    def units(self) -> List[RecurrentParametersUnit]:
        return [getattr(self, gate) for gate in self.GATES]

    @property
    def params_list(self) -> List[UpdatableArray]:
        units = self.units()
        return (
            [u.weights for u in units]
            + [u.biases for u in units]
            + [u.recurrent_weights for u in units]
        )

    @property
    def weights_list(self) -> List[UpdatableArray]:
        units = self.units()
        return [u.weights for u in units] + [u.recurrent_weights for u in units]

    @property
    def biases_list(self) -> List[UpdatableArray]:
        return [u.biases for u in self.units()]


class LSTMLayerParameters(_GatedLayerParameters):
    """Gate units of a Long Short-Term Memory layer."""

    GATES = ("input_gate", "output_gate", "forget_gate", "candidate")

    input_gate: RecurrentParametersUnit
    output_gate: RecurrentParametersUnit
    forget_gate: RecurrentParametersUnit
    candidate: RecurrentParametersUnit


class GRULayerParameters(_GatedLayerParameters):
    """Gate units of a Gated Recurrent Unit layer."""

    GATES = ("candidate", "reset_gate", "partition_gate")

    candidate: RecurrentParametersUnit
    reset_gate: RecurrentParametersUnit
    partition_gate: RecurrentParametersUnit


class CFNLayerParameters(LayerParameters):
    """
    Parameters of a Chaos-Free Network layer.

    Input and forget gates are full gate units; the candidate is a bare
    ``[output_size x input_size]`` matrix with no bias and no recurrence.
    """

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        super().__init__(input_size, output_size, sparse_input=sparse_input)
        self.input_gate = RecurrentParametersUnit(
            self.input_size, self.output_size, name="input_gate"
        )
        self.forget_gate = RecurrentParametersUnit(
            self.input_size, self.output_size, name="forget_gate"
        )
        self.candidate_weights = UpdatableArray.zeros(
            (self.output_size, self.input_size), name="candidate_weights"
        )

    @property
    def params_list(self) -> List[UpdatableArray]:
        return [
            self.input_gate.weights,
            self.forget_gate.weights,
            self.candidate_weights,
            self.input_gate.biases,
            self.forget_gate.biases,
            self.input_gate.recurrent_weights,
            self.forget_gate.recurrent_weights,
        ]

    @property
    def weights_list(self) -> List[UpdatableArray]:
        return [
            self.input_gate.weights,
            self.forget_gate.weights,
            self.candidate_weights,
            self.input_gate.recurrent_weights,
            self.forget_gate.recurrent_weights,
        ]

    @property
    def biases_list(self) -> List[UpdatableArray]:
        return [self.input_gate.biases, self.forget_gate.biases]


class DeltaRNNLayerParameters(LayerParameters):
    """
    Parameters of a Delta Recurrent Neural Network layer.

    Attributes
    ----------
    feedforward_unit : ParametersUnit
        ``W [out x in]`` and the candidate bias ``bc``.
    recurrent_unit : ParametersUnit
        ``Wrec [out x out]`` and the partition bias ``bp``.
    alpha, beta1, beta2 : UpdatableArray
        Gating vectors ``[out]`` of the candidate pre-activation.

    The gating vectors are initialized with the biases initializer.
    """

    def __init__(
        self, input_size: int, output_size: int, sparse_input: bool = False
    ) -> None:
        super().__init__(input_size, output_size, sparse_input=sparse_input)
        self.feedforward_unit = ParametersUnit(
            self.input_size, self.output_size, name="feedforward_unit"
        )
        self.recurrent_unit = ParametersUnit(
            self.output_size, self.output_size, name="recurrent_unit"
        )
        self.alpha = UpdatableArray.zeros((self.output_size,), name="alpha")
        self.beta1 = UpdatableArray.zeros((self.output_size,), name="beta1")
        self.beta2 = UpdatableArray.zeros((self.output_size,), name="beta2")

    @property
    def params_list(self) -> List[UpdatableArray]:
        return [
            self.feedforward_unit.weights,
            self.recurrent_unit.weights,
            self.feedforward_unit.biases,
            self.recurrent_unit.biases,
            self.alpha,
            self.beta1,
            self.beta2,
        ]

    @property
    def weights_list(self) -> List[UpdatableArray]:
        return [self.feedforward_unit.weights, self.recurrent_unit.weights]

    @property
    def biases_list(self) -> List[UpdatableArray]:
        return [
            self.feedforward_unit.biases,
            self.recurrent_unit.biases,
            self.alpha,
            self.beta1,
            self.beta2,
        ]
