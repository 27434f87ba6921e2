"""
Layer factories.

Map the closed set of `LayerConnection`s to their parameters and structure
classes. This is the single place that enumerates the cell variants: networks,
sequences and processors only ever go through these functions.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

import numpy as np

from ..arrays._augmented_array import AugmentedArray
from ..parameters._gated_parameters import (
    CFNLayerParameters,
    DeltaRNNLayerParameters,
    GRULayerParameters,
    LSTMLayerParameters,
)
from ..parameters._layer_parameters import (
    FeedforwardLayerParameters,
    LayerParameters,
    SimpleRecurrentLayerParameters,
)
from ._cfn import CFNLayerStructure
from ._delta_rnn import DeltaRNNLayerStructure
from ._feedforward import FeedforwardLayerStructure, SimpleRecurrentLayerStructure
from ._gru import GRULayerStructure
from ._layer_configuration import LayerConnection
from ._layer_structure import LayerStructure
from ._lstm import LSTMLayerStructure
from ...domain._activation import IActivationFunction

LAYER_PARAMETERS: Dict[LayerConnection, Type[LayerParameters]] = {
    LayerConnection.FEEDFORWARD: FeedforwardLayerParameters,
    LayerConnection.SIMPLE_RECURRENT: SimpleRecurrentLayerParameters,
    LayerConnection.LSTM: LSTMLayerParameters,
    LayerConnection.GRU: GRULayerParameters,
    LayerConnection.CFN: CFNLayerParameters,
    LayerConnection.DELTA_RNN: DeltaRNNLayerParameters,
}

LAYER_STRUCTURES: Dict[LayerConnection, Type[LayerStructure]] = {
    LayerConnection.FEEDFORWARD: FeedforwardLayerStructure,
    LayerConnection.SIMPLE_RECURRENT: SimpleRecurrentLayerStructure,
    LayerConnection.LSTM: LSTMLayerStructure,
    LayerConnection.GRU: GRULayerStructure,
    LayerConnection.CFN: CFNLayerStructure,
    LayerConnection.DELTA_RNN: DeltaRNNLayerStructure,
}


def build_layer_parameters(
    connection_type: LayerConnection,
    input_size: int,
    output_size: int,
    sparse_input: bool = False,
) -> LayerParameters:
    """Build zeroed parameters for the given connection type."""
    return LAYER_PARAMETERS[LayerConnection(connection_type)](
        input_size, output_size, sparse_input=sparse_input
    )


def build_layer_structure(
    connection_type: LayerConnection,
    input_array: AugmentedArray,
    output_array: AugmentedArray,
    params: LayerParameters,
    activation_function: Optional[IActivationFunction] = None,
    dropout: float = 0.0,
    rng: Optional[np.random.Generator] = None,
) -> LayerStructure:
    """Build the layer structure of one timestep for the given connection type."""
    cls = LAYER_STRUCTURES[LayerConnection(connection_type)]
    return cls(
        input_array,
        output_array,
        params,
        activation_function=activation_function,
        dropout=dropout,
        rng=rng,
    )
