import unittest
import numpy as np

from seqdnn import (
    LayerConfiguration,
    LayerConnection,
    NeuralNetwork,
    NNSequence,
    RecurrentNetworkStructure,
    RecurrentNeuralProcessor,
    StateContextWindow,
    TimestepOutOfRangeError,
)
from seqdnn.domain import ILayerContextWindow, ILayerStructure


def _network() -> NeuralNetwork:
    return NeuralNetwork(
        [
            LayerConfiguration(size=2),
            LayerConfiguration(
                size=3, activation_function="tanh", connection_type=LayerConnection.LSTM
            ),
            LayerConfiguration(
                size=2, activation_function="relu", connection_type="simple_recurrent"
            ),
        ]
    ).initialize(seed=0)


def _structure(network: NeuralNetwork) -> RecurrentNetworkStructure:
    return RecurrentNetworkStructure(network.layers_configuration, network.model)


class TestNNSequence(unittest.TestCase):
    def test_add_and_lookup(self):
        network = _network()
        sequence = NNSequence()
        self.assertEqual(sequence.length, 0)
        self.assertIsNone(sequence.last_structure)

        structures = [_structure(network) for _ in range(3)]
        for s in structures:
            sequence.add(s)

        self.assertEqual(len(sequence), 3)
        self.assertIs(sequence.last_structure, structures[-1])
        self.assertIs(sequence.get_state_structure(1), structures[1])
        self.assertIsNone(sequence.get_state_structure(-1))
        self.assertIsNone(sequence.get_state_structure(3))
        self.assertTrue(sequence.is_last(2))

        sequence.reset()
        self.assertEqual(sequence.length, 0)


class TestStateContextWindow(unittest.TestCase):
    def setUp(self):
        network = _network()
        self.sequence = NNSequence()
        self.structures = [_structure(network) for _ in range(3)]
        for s in self.structures:
            self.sequence.add(s)

    def test_boundaries_are_none(self):
        first = StateContextWindow(self.sequence, 0)
        last = StateContextWindow(self.sequence, 2)
        self.assertIsNone(first.prev_state_structure())
        self.assertIs(first.next_state_structure(), self.structures[1])
        self.assertIs(last.prev_state_structure(), self.structures[1])
        self.assertIsNone(last.next_state_structure())

    def test_layer_window(self):
        window = StateContextWindow(self.sequence, 1).layer(1)
        self.assertIsInstance(window, ILayerContextWindow)
        self.assertIs(window.prev_state_layer(), self.structures[0].layers[1])
        self.assertIs(window.next_state_layer(), self.structures[2].layers[1])

    def test_out_of_range(self):
        with self.assertRaises(TimestepOutOfRangeError):
            StateContextWindow(self.sequence, 3)
        with self.assertRaises(TimestepOutOfRangeError):
            StateContextWindow(self.sequence, -1)


class TestRecurrentNetworkStructure(unittest.TestCase):
    def test_layers_share_their_arrays(self):
        structure = _structure(_network())
        self.assertEqual(len(structure.layers), 2)
        self.assertIs(structure.input_layer.input_array, structure.input_array)
        self.assertIs(
            structure.layers[0].output_array, structure.layers[1].input_array
        )
        self.assertIs(structure.output_layer.output_array, structure.output_array)
        for layer in structure.layers:
            self.assertIsInstance(layer, ILayerStructure)

    def test_layers_read_the_shared_model(self):
        network = _network()
        structure = _structure(network)
        self.assertIs(structure.layers[0].params, network.model[0])
        self.assertIs(structure.layers[1].params, network.model[1])

    def test_forward_without_window_is_a_first_timestep(self):
        network = _network()
        structure = _structure(network)
        features = np.array([0.3, -0.7])
        out = structure.forward(features)

        processor = RecurrentNeuralProcessor(network)
        np.testing.assert_array_equal(out, processor.forward([features]))

    def test_each_timestep_has_its_own_structure(self):
        processor = RecurrentNeuralProcessor(_network())
        processor.forward([np.zeros(2), np.ones(2)])
        first, second = (s.structure for s in processor.sequence.states)
        self.assertIsNot(first, second)
        self.assertIsNot(first.output_array, second.output_array)


if __name__ == "__main__":
    unittest.main()
