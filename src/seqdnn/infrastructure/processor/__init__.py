"""Sequence state store, context windows, recurrent processor and pools."""

from ._context_window import LayerContextWindow, StateContextWindow
from ._sequence import NNSequence, SequenceState
from ._recurrent_processor import ProcessorState, RecurrentNeuralProcessor
from ._pool import ItemsPool, RecurrentNeuralProcessorsPool

__all__ = [
    LayerContextWindow.__name__,
    StateContextWindow.__name__,
    NNSequence.__name__,
    SequenceState.__name__,
    ProcessorState.__name__,
    RecurrentNeuralProcessor.__name__,
    ItemsPool.__name__,
    RecurrentNeuralProcessorsPool.__name__,
]
