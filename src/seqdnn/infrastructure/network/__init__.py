"""Network model, network parameters and per-timestep network structure."""

from ._network_parameters import NetworkParameters
from ._network_structure import RecurrentNetworkStructure
from ._neural_network import NeuralNetwork

__all__ = [
    NetworkParameters.__name__,
    RecurrentNetworkStructure.__name__,
    NeuralNetwork.__name__,
]
