"""
Layer configuration.

A network architecture is a list of `LayerConfiguration`s: the first entry
describes the input (no connection type), every following entry describes a
layer connected to the previous one. The list is read once when the network
is built.

Configurations follow the `get_config()` / `from_config()` convention so that
an architecture can be stored as a JSON-friendly dictionary. Activation
functions are stored by registry name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .._activations import (
    activation_from_config,
    activation_from_name,
    activation_to_config,
)
from ...domain._activation import IActivationFunction
from ...domain._errors import InvalidConfigurationError


class LayerConnection(Enum):
    """The closed set of layer connection types."""

    FEEDFORWARD = "feedforward"
    SIMPLE_RECURRENT = "simple_recurrent"
    LSTM = "lstm"
    GRU = "gru"
    CFN = "cfn"
    DELTA_RNN = "delta_rnn"

    @property
    def is_recurrent(self) -> bool:
        return self is not LayerConnection.FEEDFORWARD

    @property
    def is_gated(self) -> bool:
        """Whether the cell applies its activation inside the cell."""
        return self not in (
            LayerConnection.FEEDFORWARD,
            LayerConnection.SIMPLE_RECURRENT,
        )


@dataclass(frozen=True)
class LayerConfiguration:
    """
    Configuration of one layer of a network.

    Parameters
    ----------
    size : int
        Number of units of the layer. Must be positive.
    activation_function : IActivationFunction or str, optional
        Activation of the layer; a string is resolved through the activation
        registry.
    connection_type : LayerConnection or str, optional
        How the layer is connected to the previous one. `None` for the input
        layer.
    dropout : float
        Probability of dropping an element of this layer's values when they
        are used as the input of the next layer. Must be in ``[0, 1)``.
    sparse_input : bool
        Whether this layer's values are sparse when used as the input of the
        next layer. Recorded on the parameters of the next layer.
    """

    size: int
    activation_function: Optional[Union[IActivationFunction, str]] = None
    connection_type: Optional[Union[LayerConnection, str]] = None
    dropout: float = 0.0
    sparse_input: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.size, int) or self.size <= 0:
            raise InvalidConfigurationError(
                f"size must be a positive int, got {self.size!r}"
            )

        if not (0.0 <= float(self.dropout) < 1.0):
            raise InvalidConfigurationError(
                f"dropout must be in [0, 1), got {self.dropout}"
            )
        object.__setattr__(self, "dropout", float(self.dropout))

        if isinstance(self.connection_type, str):
            try:
                conn = LayerConnection(self.connection_type)
            except ValueError as e:
                raise InvalidConfigurationError(
                    f"Unknown connection type: {self.connection_type!r}"
                ) from e
            object.__setattr__(self, "connection_type", conn)

        if isinstance(self.activation_function, str):
            try:
                fn = activation_from_name(self.activation_function)
            except ValueError as e:
                raise InvalidConfigurationError(str(e)) from e
            object.__setattr__(self, "activation_function", fn)

    def get_config(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "activation_function": (
                activation_to_config(self.activation_function)
                if self.activation_function is not None
                else None
            ),
            "connection_type": (
                self.connection_type.value if self.connection_type is not None else None
            ),
            "dropout": self.dropout,
            "sparse_input": self.sparse_input,
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "LayerConfiguration":
        activation = cfg.get("activation_function")
        return cls(
            size=int(cfg["size"]),
            activation_function=(
                activation_from_config(activation) if activation is not None else None
            ),
            connection_type=cfg.get("connection_type"),
            dropout=float(cfg.get("dropout", 0.0)),
            sparse_input=bool(cfg.get("sparse_input", False)),
        )
