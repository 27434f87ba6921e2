"""Parameter units and per-layer parameter layouts."""

from ._params_unit import ParametersUnit, RecurrentParametersUnit
from ._layer_parameters import (
    LayerParameters,
    FeedforwardLayerParameters,
    SimpleRecurrentLayerParameters,
)
from ._gated_parameters import (
    LSTMLayerParameters,
    GRULayerParameters,
    CFNLayerParameters,
    DeltaRNNLayerParameters,
)

__all__ = [
    ParametersUnit.__name__,
    RecurrentParametersUnit.__name__,
    LayerParameters.__name__,
    FeedforwardLayerParameters.__name__,
    SimpleRecurrentLayerParameters.__name__,
    LSTMLayerParameters.__name__,
    GRULayerParameters.__name__,
    CFNLayerParameters.__name__,
    DeltaRNNLayerParameters.__name__,
]
