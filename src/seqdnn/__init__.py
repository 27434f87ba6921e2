"""
seqdnn: a recurrent sequence-processing engine built from scratch on NumPy.

The engine processes variable-length sequences through stacks of feedforward
and recurrent layers (simple recurrent, LSTM, GRU, CFN, DeltaRNN), computes
gradients by backpropagation through time, and averages them over the
sequence for an optimizer to consume.

Typical use
-----------
    from seqdnn import (
        LayerConfiguration, LayerConnection, NeuralNetwork,
        RecurrentNeuralProcessor, ParamsOptimizer, ADAMMethod,
    )

    network = NeuralNetwork([
        LayerConfiguration(size=3),
        LayerConfiguration(size=5, activation_function="tanh",
                           connection_type=LayerConnection.LSTM),
        LayerConfiguration(size=2, activation_function="sigmoid",
                           connection_type=LayerConnection.FEEDFORWARD),
    ]).initialize(seed=0)

    processor = RecurrentNeuralProcessor(network)
    optimizer = ParamsOptimizer(network.model, ADAMMethod())

    processor.forward(sequence)
    processor.backward(output_errors)
    optimizer.accumulate(processor.get_params_errors())
    optimizer.update()

Logging
-------
Modules log through the standard `logging` package under the ``seqdnn``
namespace. A `NullHandler` is installed so nothing is emitted unless the
application configures logging.
"""

import logging

from .domain import (
    EmptyAccumulatorError,
    InvalidConfigurationError,
    ProcessorStateError,
    SequenceLengthError,
    ShapeMismatchError,
    TimestepOutOfRangeError,
)
from .infrastructure._activations import (
    LeakyReLU,
    ReLU,
    Sigmoid,
    Softmax,
    Tanh,
    activation_from_name,
    register_activation,
)
from .infrastructure.arrays import ActivableArray, AugmentedArray, UpdatableArray
from .infrastructure.layers import LayerConfiguration, LayerConnection
from .infrastructure.network import (
    NetworkParameters,
    NeuralNetwork,
    RecurrentNetworkStructure,
)
from .infrastructure.optimizers import (
    ADAMMethod,
    AdaGradMethod,
    ExponentialDecay,
    HyperbolicDecay,
    LearningRateMethod,
    MomentumMethod,
    ParamsErrorsAccumulator,
    ParamsOptimizer,
)
from .infrastructure.processor import (
    ItemsPool,
    NNSequence,
    ProcessorState,
    RecurrentNeuralProcessor,
    RecurrentNeuralProcessorsPool,
    StateContextWindow,
)
from .infrastructure.utils.weight_initializer import WeightInitializer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ShapeMismatchError",
    "SequenceLengthError",
    "TimestepOutOfRangeError",
    "EmptyAccumulatorError",
    "ProcessorStateError",
    "InvalidConfigurationError",
    "Tanh",
    "Sigmoid",
    "ReLU",
    "LeakyReLU",
    "Softmax",
    "activation_from_name",
    "register_activation",
    "ActivableArray",
    "AugmentedArray",
    "UpdatableArray",
    "LayerConfiguration",
    "LayerConnection",
    "NetworkParameters",
    "NeuralNetwork",
    "RecurrentNetworkStructure",
    "ADAMMethod",
    "AdaGradMethod",
    "ExponentialDecay",
    "HyperbolicDecay",
    "LearningRateMethod",
    "MomentumMethod",
    "ParamsErrorsAccumulator",
    "ParamsOptimizer",
    "ItemsPool",
    "NNSequence",
    "ProcessorState",
    "RecurrentNeuralProcessor",
    "RecurrentNeuralProcessorsPool",
    "StateContextWindow",
    "WeightInitializer",
]
