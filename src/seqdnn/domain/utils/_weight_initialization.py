"""
Abstract interfaces and utilities for weight initialization.

This module defines the abstract base class for weight initializers used to
fill parameter arrays, along with shared helper functions for computing
fan-in and fan-out values from array shapes.

The concrete implementation and registry logic live in the infrastructure
layer. This module exists in the domain layer to define contracts and shared
mathematical utilities without binding to a specific backend.
"""

from abc import ABC
from typing import Any, Callable, Dict, TypeVar


T = TypeVar("T", bound=Callable[..., Any])


class _WeightInitializer(ABC):
    """
    Abstract base class for weight initializer dispatchers.

    Design notes
    ------------
    - Initializers are identified by string names.
    - Each initializer is a callable that mutates an array in-place and
      returns it.
    - This class does not prescribe how initializers are stored or invoked;
      it only defines the expected interface.
    """

    INITIALIZERS: Dict[str, Callable] = {}

    def __init__(self, initializer_name: str) -> None:
        """
        Construct a weight initializer dispatcher.

        Parameters
        ----------
        initializer_name:
            The string key identifying a registered initializer.
        """
        ...

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Register a weight initializer under a given name.

        Parameters
        ----------
        name:
            Name used to identify the initializer.
        overwrite:
            Whether to allow overwriting an existing registration.

        Returns
        -------
        Callable
            A decorator that registers the initializer function.
        """
        ...

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return the names of all registered initializers."""
        ...

    def __call__(self, array: Any, *args, **kwargs) -> Any:
        """
        Apply the initializer to an array.

        Parameters
        ----------
        array:
            The array to be initialized in-place.
        *args, **kwargs:
            Optional arguments forwarded to the initializer.

        Returns
        -------
        Any
            The initialized array.
        """
        ...


def _calculate_fan_in(shape: tuple[int, ...]) -> int:
    """
    Compute the fan-in value for an array shape.

    Parameters
    ----------
    shape:
        Shape of the weight array, ``(out_features, in_features)`` for
        matrices.

    Returns
    -------
    int
        The computed fan-in value.
    """
    if len(shape) == 0:
        return 1
    if len(shape) == 1:
        # bias-like vector; fan_in isn't really defined
        return shape[0]
    return int(shape[1])


def _calculate_fan_in_and_fan_out(shape: tuple[int, ...]) -> tuple[int, int]:
    """
    Compute both fan-in and fan-out values for an array shape.

    Parameters
    ----------
    shape:
        Shape of the weight array.

    Returns
    -------
    tuple[int, int]
        A tuple of (fan_in, fan_out).
    """
    if len(shape) == 0:
        return 1, 1
    if len(shape) == 1:
        return shape[0], shape[0]
    fan_out, fan_in = shape[0], shape[1]
    return int(fan_in), int(fan_out)
