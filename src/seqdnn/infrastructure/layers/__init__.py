"""Layer configuration, per-timestep layer structures and their factories."""

from ._layer_configuration import LayerConfiguration, LayerConnection
from ._layer_structure import LayerStructure
from ._feedforward import FeedforwardLayerStructure, SimpleRecurrentLayerStructure
from ._lstm import LSTMLayerStructure
from ._gru import GRULayerStructure
from ._cfn import CFNLayerStructure
from ._delta_rnn import DeltaRNNLayerStructure
from ._factory import build_layer_parameters, build_layer_structure

__all__ = [
    LayerConfiguration.__name__,
    LayerConnection.__name__,
    LayerStructure.__name__,
    FeedforwardLayerStructure.__name__,
    SimpleRecurrentLayerStructure.__name__,
    LSTMLayerStructure.__name__,
    GRULayerStructure.__name__,
    CFNLayerStructure.__name__,
    DeltaRNNLayerStructure.__name__,
    build_layer_parameters.__name__,
    build_layer_structure.__name__,
]
