from __future__ import annotations

import unittest
import numpy as np

from seqdnn import (
    LayerConfiguration,
    LayerConnection,
    NeuralNetwork,
    RecurrentNeuralProcessor,
)


def _build_network() -> NeuralNetwork:
    network = NeuralNetwork(
        [
            LayerConfiguration(size=3),
            LayerConfiguration(
                size=2,
                activation_function="tanh",
                connection_type=LayerConnection.FEEDFORWARD,
            ),
        ]
    )
    params = network.model.params_per_layer[0]
    params.unit.weights.assign_values(
        np.array([[-0.7, 0.3, -1.0], [0.8, -0.6, 0.4]], dtype=np.float64)
    )
    params.unit.biases.assign_values(np.array([0.2, -0.9], dtype=np.float64))
    return network


def _input_sequence() -> list[np.ndarray]:
    return [
        np.array([0.4, 0.3, -0.8]),
        np.array([0.4, -0.9, 0.6]),
        np.array([0.8, 0.3, -0.6]),
    ]


def _output_errors_sequence() -> list[np.ndarray]:
    return [
        np.array([0.7, -0.2]),
        np.array([-0.7, 0.0]),
        np.array([-0.4, -0.9]),
    ]


class TestFeedforwardSequenceRegression(unittest.TestCase):
    """
    A 3 -> 2 tanh feedforward network driven over a sequence of three
    elements, with fixed parameters and errors.
    """

    def setUp(self):
        self.network = _build_network()
        self.processor = RecurrentNeuralProcessor(self.network)
        self.processor.forward(_input_sequence())

    def test_output_sequence_matches_expected(self):
        outputs = self.processor.get_output_sequence()

        self.assertEqual(len(outputs), 3)
        np.testing.assert_allclose(outputs[0], [0.66959, -0.793199], rtol=0, atol=1e-6)
        np.testing.assert_allclose(
            outputs[1], [-0.739783, 0.197375], rtol=0, atol=1e-6
        )
        np.testing.assert_allclose(
            outputs[2], [0.318521, -0.591519], rtol=0, atol=1e-6
        )

    def test_forward_returns_last_output(self):
        out = self.processor.forward(_input_sequence())
        np.testing.assert_allclose(out, [0.318521, -0.591519], rtol=0, atol=1e-6)

    def test_params_errors_are_averaged_over_the_sequence(self):
        self.processor.backward(_output_errors_sequence(), propagate_to_input=True)
        errors = self.processor.get_params_errors().params_per_layer[0]

        np.testing.assert_allclose(
            errors.unit.biases.values, [-0.096723, -0.219754], rtol=0, atol=1e-6
        )
        np.testing.assert_allclose(
            errors.unit.weights.values,
            [[-0.086611, 0.097745, -0.094472], [-0.165914, -0.065926, 0.136797]],
            rtol=0,
            atol=1e-6,
        )

    def test_input_sequence_errors_match_expected(self):
        self.processor.backward(_output_errors_sequence(), propagate_to_input=True)
        input_errors = self.processor.get_input_sequence_errors()

        np.testing.assert_allclose(
            input_errors[0], [-0.329642, 0.160346, -0.415821], rtol=0, atol=1e-6
        )
        np.testing.assert_allclose(
            input_errors[1], [0.221833, -0.095071, 0.316905], rtol=0, atol=1e-6
        )
        np.testing.assert_allclose(
            input_errors[2], [-0.216483, 0.243231, 0.12538], rtol=0, atol=1e-6
        )

    def test_model_parameters_are_not_modified_by_backward(self):
        before = [p.values.copy() for p in self.network.model]
        self.processor.backward(_output_errors_sequence(), propagate_to_input=True)
        after = [p.values for p in self.network.model]

        for b, a in zip(before, after):
            np.testing.assert_array_equal(b, a)


if __name__ == "__main__":
    unittest.main()
