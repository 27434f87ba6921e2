"""
Neural network model.

A `NeuralNetwork` is the pairing of an architecture (a list of
`LayerConfiguration`s) with the model parameters built for it. It performs no
computation itself: processors instantiate per-timestep structures that read
the shared `model` parameters.

The architecture follows the `get_config()` / `from_config()` convention;
parameter values are not part of the configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..layers._layer_configuration import LayerConfiguration
from ._network_parameters import NetworkParameters
from ...domain._errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class NeuralNetwork:
    """
    A network architecture and its model parameters.

    Parameters
    ----------
    layers_configuration : Sequence[LayerConfiguration]
        At least two entries. The first one describes the input and has no
        connection type; every other entry has one.

    Raises
    ------
    InvalidConfigurationError
        If the architecture is invalid.
    """

    def __init__(self, layers_configuration: Sequence[LayerConfiguration]) -> None:
        configs = tuple(layers_configuration)
        self._validate(configs)
        self.layers_configuration = configs
        self.model = NetworkParameters(configs)

    @staticmethod
    def _validate(configs: Sequence[LayerConfiguration]) -> None:
        if len(configs) < 2:
            raise InvalidConfigurationError(
                f"A network requires at least 2 layers, got {len(configs)}."
            )
        if configs[0].connection_type is not None:
            raise InvalidConfigurationError(
                "The input layer must not have a connection type."
            )
        for i, cfg in enumerate(configs[1:], start=1):
            if cfg.connection_type is None:
                raise InvalidConfigurationError(
                    f"Layer {i} must have a connection type."
                )

    @property
    def input_size(self) -> int:
        return self.layers_configuration[0].size

    @property
    def output_size(self) -> int:
        return self.layers_configuration[-1].size

    @property
    def is_recurrent(self) -> bool:
        return any(
            cfg.connection_type.is_recurrent for cfg in self.layers_configuration[1:]
        )

    def initialize(
        self,
        weights_initializer: Optional[str] = "xavier_uniform",
        biases_initializer: Optional[str] = "zeros",
        seed: Optional[int] = None,
    ) -> "NeuralNetwork":
        """
        Initialize the model parameters in place and return `self`.

        The same `seed` always produces the same parameters.
        """
        self.model.initialize(
            weights_initializer,
            biases_initializer,
            rng=np.random.default_rng(seed),
        )
        logger.debug(
            "Initialized %d parameter arrays (weights=%s, biases=%s, seed=%s)",
            len(self.model),
            weights_initializer,
            biases_initializer,
            seed,
        )
        return self

    def parameters_factory(self) -> NetworkParameters:
        """Return zeroed parameters with the same layout as `model`."""
        return self.model.zeros_like()

    def get_config(self) -> Dict[str, Any]:
        return {"layers": [cfg.get_config() for cfg in self.layers_configuration]}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "NeuralNetwork":
        layers: List[LayerConfiguration] = [
            LayerConfiguration.from_config(layer_cfg) for layer_cfg in cfg["layers"]
        ]
        return cls(layers)

    def __repr__(self) -> str:
        sizes = " -> ".join(str(cfg.size) for cfg in self.layers_configuration)
        return f"NeuralNetwork({sizes})"
