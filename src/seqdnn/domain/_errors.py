"""
Engine-level exceptions for seqdnn.

This module defines the runtime errors raised by the recurrent engine when a
caller violates a precondition: mismatched tensor shapes, error sequences that
do not match the forwarded sequence, timestep lookups outside the current
sequence, averaging an empty accumulator, or driving a processor in the wrong
order.

All of these are caller-misuse errors. The engine fails fast and never
coerces its inputs; recovery (e.g. skipping a malformed example) belongs to
the training loop above it. Boundary timesteps (no previous or no next state)
are *not* errors and are never reported through this module.
"""

from __future__ import annotations

from typing import Tuple


class ShapeMismatchError(ValueError):
    """
    Raised when an array does not have the shape required by its target.

    Attributes
    ----------
    expected : tuple[int, ...]
        Shape required by the receiving array.
    actual : tuple[int, ...]
        Shape of the array that was supplied.
    what : str
        Short description of the receiving array (e.g. "output errors").
    """

    def __init__(
        self, expected: Tuple[int, ...], actual: Tuple[int, ...], what: str = "array"
    ) -> None:
        super().__init__(
            f"Shape mismatch for {what}: expected {tuple(expected)}, "
            f"got {tuple(actual)}."
        )
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        self.what = what


class SequenceLengthError(ValueError):
    """
    Raised when a sequence of output errors does not match the length of the
    sequence that was forwarded.
    """

    def __init__(self, errors_length: int, sequence_length: int) -> None:
        super().__init__(
            f"Number of errors ({errors_length}) does not reflect the length "
            f"of the sequence ({sequence_length})."
        )
        self.errors_length = errors_length
        self.sequence_length = sequence_length


class TimestepOutOfRangeError(IndexError):
    """
    Raised when a timestep index outside ``[0, length)`` is requested.
    """

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"Timestep {index} is out of range for a sequence of length {length}."
        )
        self.index = index
        self.length = length


class EmptyAccumulatorError(RuntimeError):
    """
    Raised when averaging a gradient accumulator that holds no gradients.
    """

    def __init__(self) -> None:
        super().__init__("Cannot average errors: no gradients have been accumulated.")


class ProcessorStateError(RuntimeError):
    """
    Raised when a processor operation is invoked in a state that does not
    allow it (e.g. backward before any forward).

    Attributes
    ----------
    op : str
        Name of the attempted operation.
    state : str
        Name of the processor state at the time of the call.
    """

    def __init__(self, op: str, state: str, detail: str = "") -> None:
        message = f"Cannot {op} while the processor is {state}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.op = op
        self.state = state


class InvalidConfigurationError(ValueError):
    """
    Raised when a layer configuration or a network architecture is invalid.
    """
