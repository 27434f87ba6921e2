"""
Weight initializer registry and dispatch utilities.

This module defines the concrete `WeightInitializer` used by the infrastructure
layer to fill parameter arrays (weights, biases, DeltaRNN gating vectors) with
a registered initialization strategy.

Design
------
- Initializers are registered by string name via a decorator-based registry.
- Each initializer is a callable ``(array, rng) -> array`` that mutates a NumPy
  array *in-place* and returns it.
- The random source is an explicit `numpy.random.Generator`, so that two
  networks initialized with the same seed hold identical parameters.

Usage example
-------------
Registering an initializer:

    @WeightInitializer.register_initializer("kaiming")
    def kaiming(array: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        ...

Applying an initializer:

    init = WeightInitializer("kaiming")
    init(weights, rng=np.random.default_rng(0))

Notes
-----
- Registration keys must be unique unless explicitly overwritten.
- Initializers compute fan-in / fan-out internally from the array shape.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional, TypeVar

import numpy as np

from ....domain.utils._weight_initialization import _WeightInitializer

T = TypeVar("T", bound=Callable[..., np.ndarray])


class WeightInitializer(_WeightInitializer):
    """
    Registry-backed weight initializer dispatcher.

    Usage
    -----
    Register:
        @WeightInitializer.register_initializer("kaiming")
        def kaiming(array, rng): ...

    Dispatch:
        init = WeightInitializer("kaiming")
        init(array, rng=rng)

    Notes
    -----
    - Initializers are stored by string name in a class-level registry.
    - When no `rng` is given, a fresh unseeded generator is used.
    """

    INITIALIZERS: ClassVar[Dict[str, Callable[..., np.ndarray]]] = {}

    def __init__(self, initializer_name: str) -> None:
        try:
            self._initializer: Callable[..., np.ndarray] = self.INITIALIZERS[
                initializer_name
            ]
        except KeyError as e:
            available = ", ".join(sorted(self.INITIALIZERS)) or "<none>"
            raise ValueError(
                f"Unsupported initializer name: {initializer_name!r}. "
                f"Available: {available}"
            ) from e
        self.name = initializer_name

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator to register a weight initializer under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the initializer later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.INITIALIZERS:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered initializer names (sorted)."""
        return tuple(sorted(cls.INITIALIZERS))

    @classmethod
    def get(cls, name: str) -> Callable[..., np.ndarray]:
        """Get a registered initializer callable by name."""
        return cls.INITIALIZERS[name]

    def __call__(
        self,
        array: np.ndarray,
        *args: Any,
        rng: Optional[np.random.Generator] = None,
        **kwargs: Any,
    ) -> np.ndarray:
        if rng is None:
            rng = np.random.default_rng()
        return self._initializer(array, rng, *args, **kwargs)
