"""
Recurrent neural processor.

The processor drives a `NeuralNetwork` over one sequence at a time:

- forward: one network structure per element, appended to the sequence and
  computed with an explicit context window so that each timestep reads the
  previous timestep's outputs;
- backward: backpropagation through time in strict reverse order, with a
  fresh zeroed gradient buffer per timestep, summed into an accumulator and
  averaged once at the end.

Lifecycle
---------
    IDLE -> FORWARDING -> FORWARDED -> BACKWARDING -> BACKWARDED

`forward_state(first_state=True)` (and the batch `forward`) start a new
sequence from any state. `reset()` returns to IDLE.

Design notes
------------
- A processor owns its sequence and accumulator and is not thread-safe. Use
  one processor per concurrent sequence (see `RecurrentNeuralProcessorsPool`).
- The shared model parameters are only ever read here. Gradients are exposed
  through `get_params_errors()` for an optimizer to consume.
- Getters return copies by default; with ``copy=False`` they return live
  arrays that are invalidated by the next forward or backward.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from ..network._network_parameters import NetworkParameters
from ..network._network_structure import RecurrentNetworkStructure
from ..network._neural_network import NeuralNetwork
from ..optimizers._accumulator import ParamsErrorsAccumulator
from ._sequence import NNSequence
from ...domain._errors import (
    ProcessorStateError,
    SequenceLengthError,
    ShapeMismatchError,
    TimestepOutOfRangeError,
)

logger = logging.getLogger(__name__)


class ProcessorState(Enum):
    """Lifecycle states of a `RecurrentNeuralProcessor`."""

    IDLE = "idle"
    FORWARDING = "forwarding"
    FORWARDED = "forwarded"
    BACKWARDING = "backwarding"
    BACKWARDED = "backwarded"


class RecurrentNeuralProcessor:
    """
    Forward and backward of a recurrent network over a sequence.

    Parameters
    ----------
    network : NeuralNetwork
        The network to process; its `model` parameters are shared.
    processor_id : int
        Id of the processor (stable within a pool).
    rng : numpy.random.Generator, optional
        Random source of the dropout masks.
    """

    def __init__(
        self,
        network: NeuralNetwork,
        processor_id: int = 0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.network = network
        self._id = int(processor_id)
        self._rng = rng if rng is not None else np.random.default_rng()
        self.sequence = NNSequence()
        self._accumulator = ParamsErrorsAccumulator()
        self._state = ProcessorState.IDLE
        self._propagated_to_input = False

    @property
    def id(self) -> int:
        return self._id

    @property
    def state(self) -> ProcessorState:
        return self._state

    @property
    def sequence_length(self) -> int:
        return self.sequence.length

    # ------------------------------------------------------------------ forward

    def forward(
        self,
        sequence_features: Sequence,
        save_contributions: bool = False,
        use_dropout: bool = False,
    ) -> np.ndarray:
        """
        Forward a whole sequence and return a copy of the last output.

        Equivalent to calling `forward_state` on every element with
        ``first_state`` set on the first one only.

        Raises
        ------
        ValueError
            If `sequence_features` is empty.
        """
        features_list = list(sequence_features)
        if not features_list:
            raise ValueError("Cannot forward an empty sequence.")

        self._start_sequence()
        for features in features_list:
            self._forward_new_state(features, save_contributions, use_dropout)
        self._state = ProcessorState.FORWARDED

        logger.debug(
            "Processor %d forwarded a sequence of length %d",
            self._id,
            self.sequence.length,
        )
        return self.get_output(copy=True)

    def forward_state(
        self,
        features,
        first_state: bool,
        save_contributions: bool = False,
        use_dropout: bool = False,
    ) -> np.ndarray:
        """
        Forward one more element of the current sequence and return a copy of
        its output.

        Parameters
        ----------
        features : array_like
            Input vector of the new element.
        first_state : bool
            Whether this element starts a new sequence. Starting a new
            sequence discards the previous one and its gradients.

        Raises
        ------
        ProcessorStateError
            If `first_state` is False and there is no sequence to extend, or
            the current sequence has already been backwarded.
        """
        if first_state:
            self._start_sequence()
        elif self.sequence.length == 0:
            raise ProcessorStateError(
                "forward a non-first state",
                self._state.value,
                "The first state of a sequence must set first_state=True.",
            )
        elif self._state in (ProcessorState.BACKWARDING, ProcessorState.BACKWARDED):
            raise ProcessorStateError(
                "forward a non-first state",
                self._state.value,
                "Start a new sequence with first_state=True.",
            )

        self._state = ProcessorState.FORWARDING
        self._forward_new_state(features, save_contributions, use_dropout)
        self._state = ProcessorState.FORWARDED
        return self.get_output(copy=True)

    def _start_sequence(self) -> None:
        self.sequence.reset()
        self._accumulator.reset()
        self._propagated_to_input = False
        self._state = ProcessorState.FORWARDING
        logger.debug("Processor %d started a new sequence", self._id)

    def _forward_new_state(
        self, features, save_contributions: bool, use_dropout: bool
    ) -> None:
        features = np.asarray(features, dtype=np.float64)
        expected = (self.network.input_size,)
        if features.shape != expected:
            raise ShapeMismatchError(expected, features.shape, "features")

        structure = RecurrentNetworkStructure(
            self.network.layers_configuration, self.network.model, rng=self._rng
        )
        contributions = (
            self.network.parameters_factory() if save_contributions else None
        )
        self.sequence.add(structure, contributions)

        window = self.sequence.context_window(self.sequence.last_index)
        structure.forward(
            features, window, use_dropout=use_dropout, contributions=contributions
        )

    # ----------------------------------------------------------------- backward

    def backward(
        self, output_errors_sequence: Sequence, propagate_to_input: bool = False
    ) -> None:
        """
        Backpropagate through time.

        Parameters
        ----------
        output_errors_sequence : Sequence[array_like]
            One output-errors vector per element of the forwarded sequence.
        propagate_to_input : bool
            Whether to compute the errors of the input sequence.

        Raises
        ------
        ProcessorStateError
            If no sequence has been forwarded.
        SequenceLengthError
            If the number of errors differs from the sequence length.
        """
        if self._state not in (ProcessorState.FORWARDED, ProcessorState.BACKWARDED):
            raise ProcessorStateError(
                "backward", self._state.value, "Forward a sequence first."
            )

        errors_list = list(output_errors_sequence)
        if len(errors_list) != self.sequence.length:
            raise SequenceLengthError(len(errors_list), self.sequence.length)

        self._state = ProcessorState.BACKWARDING
        self._accumulator.reset()

        for index in range(self.sequence.length - 1, -1, -1):
            params_errors = self.network.parameters_factory()
            structure = self.sequence.states[index].structure
            structure.backward(
                errors_list[index],
                params_errors,
                propagate_to_input=propagate_to_input,
                window=self.sequence.context_window(index),
            )
            self._accumulator.accumulate(params_errors, copy=False)

        self._accumulator.average_errors()
        self._propagated_to_input = propagate_to_input
        self._state = ProcessorState.BACKWARDED

        logger.debug(
            "Processor %d backwarded a sequence of length %d",
            self._id,
            self.sequence.length,
        )

    def backward_last(self, output_errors, propagate_to_input: bool = False) -> None:
        """
        Backward with `output_errors` on the last element and zero errors on
        every other element.
        """
        if self._state not in (ProcessorState.FORWARDED, ProcessorState.BACKWARDED):
            raise ProcessorStateError(
                "backward", self._state.value, "Forward a sequence first."
            )
        zeros = np.zeros(self.network.output_size)
        errors_list = [zeros] * (self.sequence.length - 1) + [output_errors]
        self.backward(errors_list, propagate_to_input=propagate_to_input)

    # ------------------------------------------------------------------ getters

    def _require_forwarded(self, op: str) -> None:
        if self.sequence.length == 0 or self._state in (
            ProcessorState.IDLE,
            ProcessorState.FORWARDING,
        ):
            raise ProcessorStateError(
                op, self._state.value, "Forward a sequence first."
            )

    def get_output(self, copy: bool = True) -> np.ndarray:
        """Return the output of the last element of the sequence."""
        if self.sequence.length == 0:
            raise ProcessorStateError(
                "get the output", self._state.value, "Forward a sequence first."
            )
        values = self.sequence.last_structure.output_array.values
        return values.copy() if copy else values

    def get_output_sequence(self, copy: bool = True) -> List[np.ndarray]:
        """Return the output of every element of the sequence."""
        self._require_forwarded("get the output sequence")
        return [
            state.structure.output_array.values.copy()
            if copy
            else state.structure.output_array.values
            for state in self.sequence.states
        ]

    def get_input_sequence_errors(self, copy: bool = True) -> List[np.ndarray]:
        """
        Return the errors of every input element.

        Raises
        ------
        ProcessorStateError
            If the last backward did not propagate to the input.
        """
        backwarded = self._state is ProcessorState.BACKWARDED
        if not backwarded or not self._propagated_to_input:
            raise ProcessorStateError(
                "get the input errors",
                self._state.value,
                "Backward with propagate_to_input=True first.",
            )
        return [
            state.structure.input_errors.copy()
            if copy
            else state.structure.input_errors
            for state in self.sequence.states
        ]

    def get_params_errors(self, copy: bool = True) -> NetworkParameters:
        """Return the parameter gradients averaged over the sequence."""
        if self._state is not ProcessorState.BACKWARDED:
            raise ProcessorStateError(
                "get the params errors", self._state.value, "Backward first."
            )
        return self._accumulator.get_params_errors(copy=copy)

    def get_contributions(self, index: int) -> NetworkParameters:
        """
        Return the contributions saved for the element at `index`.

        Raises
        ------
        TimestepOutOfRangeError
            If `index` is outside the sequence.
        ProcessorStateError
            If the forward did not save contributions.
        """
        self._require_forwarded("get the contributions")
        if not (0 <= index < self.sequence.length):
            raise TimestepOutOfRangeError(index, self.sequence.length)
        contributions = self.sequence.states[index].contributions
        if contributions is None:
            raise ProcessorStateError(
                "get the contributions",
                self._state.value,
                "Forward with save_contributions=True first.",
            )
        return contributions

    # -------------------------------------------------------------------- reset

    def reset(self) -> None:
        """Drop the sequence and the gradients and return to IDLE."""
        self.sequence.reset()
        self._accumulator.reset()
        self._propagated_to_input = False
        self._state = ProcessorState.IDLE

    def __repr__(self) -> str:
        return (
            f"RecurrentNeuralProcessor(id={self._id}, state={self._state.value}, "
            f"sequence_length={self.sequence.length})"
        )
