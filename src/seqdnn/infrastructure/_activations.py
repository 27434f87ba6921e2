"""
Elementwise activation functions.

This module contains the NumPy implementations of the activation functions
consumed by activatable arrays and layer structures, together with a
name-keyed registry used by layer configuration dictionaries.

Derivatives
-----------
Every activation exposes two derivative forms:

- `df(x)`: derivative evaluated at the not-activated values.
- `df_optimized(fx)`: derivative expressed through the activated values,
  which is what the engine uses during backward (the activated values are
  already stored in the output arrays):

      tanh'    = 1 - y^2
      sigmoid' = y * (1 - y)
      relu'    = 1[y > 0]

Notes
-----
- `Softmax.df_optimized` returns the diagonal of the Jacobian, ``y * (1 - y)``,
  so softmax behaves elementwise in backward. Pair it with a loss whose
  gradient already accounts for the cross terms (e.g. cross-entropy) or use it
  on output layers only.
- Registered classes are instantiated from their `get_config()` dictionary.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type

import numpy as np

_ACTIVATION_REGISTRY: Dict[str, Type[Any]] = {}


def register_activation(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register an activation class for configuration lookup.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _ACTIVATION_REGISTRY[key] = cls
        cls.name = key
        return cls

    return deco


def activation_from_name(name: str, **config: Any) -> Any:
    """
    Build a registered activation function from its registry name.

    Raises
    ------
    ValueError
        If `name` is not registered.
    """
    if name not in _ACTIVATION_REGISTRY:
        available = ", ".join(sorted(_ACTIVATION_REGISTRY)) or "<none>"
        raise ValueError(
            f"Unknown activation function {name!r}. Available: {available}"
        )
    return _ACTIVATION_REGISTRY[name](**config)


def activation_to_config(activation: Any) -> Dict[str, Any]:
    """Return ``{"name": ..., "config": {...}}`` for a registered activation."""
    get_cfg = getattr(activation, "get_config", None)
    cfg = get_cfg() if callable(get_cfg) else {}
    return {"name": activation.name, "config": cfg}


def activation_from_config(cfg: Dict[str, Any]) -> Any:
    """Inverse of `activation_to_config`."""
    return activation_from_name(str(cfg["name"]), **(cfg.get("config") or {}))


class _StatelessActivation:
    """Shared configuration behaviour of parameter-free activations."""

    name: str = ""

    def get_config(self) -> Dict[str, Any]:
        return {}

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.get_config() == other.get_config()

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@register_activation("tanh")
class Tanh(_StatelessActivation):
    """
    Hyperbolic tangent.

        tanh(x) = (exp(x) - exp(-x)) / (exp(x) + exp(-x))
    """

    def f(self, x: np.ndarray) -> np.ndarray:
        return np.tanh(x)

    def df(self, x: np.ndarray) -> np.ndarray:
        return self.df_optimized(np.tanh(x))

    def df_optimized(self, fx: np.ndarray) -> np.ndarray:
        return 1.0 - fx * fx


@register_activation("sigmoid")
class Sigmoid(_StatelessActivation):
    """
    Logistic sigmoid.

        sigmoid(x) = 1 / (1 + exp(-x))

    Used by every gate of the gated recurrent cells regardless of the layer's
    configured activation.
    """

    def f(self, x: np.ndarray) -> np.ndarray:
        # split by sign to keep exp() from overflowing
        x = np.asarray(x, dtype=np.float64)
        out = np.empty_like(x)
        pos = x >= 0
        out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
        ex = np.exp(x[~pos])
        out[~pos] = ex / (1.0 + ex)
        return out

    def df(self, x: np.ndarray) -> np.ndarray:
        return self.df_optimized(self.f(x))

    def df_optimized(self, fx: np.ndarray) -> np.ndarray:
        return fx * (1.0 - fx)


@register_activation("relu")
class ReLU(_StatelessActivation):
    """Rectified linear unit, ``max(0, x)``."""

    def f(self, x: np.ndarray) -> np.ndarray:
        return np.maximum(x, 0.0)

    def df(self, x: np.ndarray) -> np.ndarray:
        return (np.asarray(x) > 0).astype(np.float64)

    def df_optimized(self, fx: np.ndarray) -> np.ndarray:
        return (np.asarray(fx) > 0).astype(np.float64)


@register_activation("leaky_relu")
class LeakyReLU:
    """
    Leaky rectified linear unit.

        leaky_relu(x) = x if x > 0 else alpha * x

    Parameters
    ----------
    alpha : float
        Slope of the negative half. Must be non-negative.
    """

    name: str = ""

    def __init__(self, alpha: float = 0.01) -> None:
        if alpha < 0:
            raise ValueError(f"alpha must be >= 0, got {alpha}")
        self.alpha = float(alpha)

    def f(self, x: np.ndarray) -> np.ndarray:
        return np.where(x > 0, x, self.alpha * x)

    def df(self, x: np.ndarray) -> np.ndarray:
        return np.where(np.asarray(x) > 0, 1.0, self.alpha)

    def df_optimized(self, fx: np.ndarray) -> np.ndarray:
        # sign is preserved by the activation for alpha >= 0
        return np.where(np.asarray(fx) > 0, 1.0, self.alpha)

    def get_config(self) -> Dict[str, Any]:
        return {"alpha": self.alpha}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LeakyReLU) and other.alpha == self.alpha

    def __hash__(self) -> int:
        return hash((LeakyReLU, self.alpha))

    def __repr__(self) -> str:
        return f"LeakyReLU(alpha={self.alpha})"


@register_activation("softmax")
class Softmax(_StatelessActivation):
    """
    Softmax over a 1-D vector.

    Uses the max-subtraction formulation for numerical stability.
    """

    def f(self, x: np.ndarray) -> np.ndarray:
        shifted = np.asarray(x, dtype=np.float64) - np.max(x)
        ex = np.exp(shifted)
        return ex / ex.sum()

    def df(self, x: np.ndarray) -> np.ndarray:
        return self.df_optimized(self.f(x))

    def df_optimized(self, fx: np.ndarray) -> np.ndarray:
        return fx * (1.0 - fx)
