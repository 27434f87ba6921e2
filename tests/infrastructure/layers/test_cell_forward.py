"""
Forward of every cell checked against plain NumPy references over a short
sequence, including the first timestep where recurrent terms are omitted.
"""

from __future__ import annotations

import unittest
import numpy as np

from seqdnn import (
    LayerConfiguration,
    LayerConnection,
    NeuralNetwork,
    RecurrentNeuralProcessor,
)


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


def _single_layer_network(
    connection: LayerConnection, activation: str = "tanh"
) -> NeuralNetwork:
    return NeuralNetwork(
        [
            LayerConfiguration(size=3),
            LayerConfiguration(
                size=2, activation_function=activation, connection_type=connection
            ),
        ]
    ).initialize("xavier_uniform", "xavier_uniform", seed=21)


def _sequence() -> list[np.ndarray]:
    return [
        np.array([0.5, -0.1, 0.3]),
        np.array([-0.2, 0.8, 0.1]),
        np.array([0.7, 0.7, -0.6]),
    ]


def _run(network: NeuralNetwork) -> list[np.ndarray]:
    processor = RecurrentNeuralProcessor(network)
    processor.forward(_sequence())
    return processor.get_output_sequence()


class TestCellForward(unittest.TestCase):
    def test_simple_recurrent(self):
        network = _single_layer_network(LayerConnection.SIMPLE_RECURRENT)
        u = network.model[0].unit
        W, b, R = u.weights.values, u.biases.values, u.recurrent_weights.values

        y_prev = None
        for x, y in zip(_sequence(), _run(network)):
            pre = W @ x + b + (R @ y_prev if y_prev is not None else 0.0)
            np.testing.assert_allclose(y, np.tanh(pre), rtol=0, atol=1e-12)
            y_prev = y

    def test_lstm(self):
        network = _single_layer_network(LayerConnection.LSTM)
        p = network.model[0]

        def gate(unit, x, y_prev):
            pre = unit.weights.values @ x + unit.biases.values
            if y_prev is not None:
                pre = pre + unit.recurrent_weights.values @ y_prev
            return pre

        y_prev, cell_prev = None, None
        for x, y in zip(_sequence(), _run(network)):
            i = _sigmoid(gate(p.input_gate, x, y_prev))
            o = _sigmoid(gate(p.output_gate, x, y_prev))
            f = _sigmoid(gate(p.forget_gate, x, y_prev))
            g = np.tanh(gate(p.candidate, x, y_prev))
            cell = i * g + (f * cell_prev if cell_prev is not None else 0.0)
            np.testing.assert_allclose(y, o * np.tanh(cell), rtol=0, atol=1e-12)
            y_prev, cell_prev = y, cell

    def test_gru(self):
        network = _single_layer_network(LayerConnection.GRU)
        p = network.model[0]

        y_prev = None
        for x, y in zip(_sequence(), _run(network)):
            r_pre = p.reset_gate.weights.values @ x + p.reset_gate.biases.values
            z_pre = p.partition_gate.weights.values @ x + p.partition_gate.biases.values
            c_pre = p.candidate.weights.values @ x + p.candidate.biases.values
            if y_prev is not None:
                r_pre = r_pre + p.reset_gate.recurrent_weights.values @ y_prev
                z_pre = z_pre + p.partition_gate.recurrent_weights.values @ y_prev
                r = _sigmoid(r_pre)
                c_pre = c_pre + p.candidate.recurrent_weights.values @ (r * y_prev)
            z = _sigmoid(z_pre)
            c = np.tanh(c_pre)
            expected = z * c + ((1.0 - z) * y_prev if y_prev is not None else 0.0)
            np.testing.assert_allclose(y, expected, rtol=0, atol=1e-12)
            y_prev = y

    def test_cfn(self):
        network = _single_layer_network(LayerConnection.CFN)
        p = network.model[0]

        y_prev = None
        for x, y in zip(_sequence(), _run(network)):
            i_pre = p.input_gate.weights.values @ x + p.input_gate.biases.values
            f_pre = p.forget_gate.weights.values @ x + p.forget_gate.biases.values
            if y_prev is not None:
                i_pre = i_pre + p.input_gate.recurrent_weights.values @ y_prev
                f_pre = f_pre + p.forget_gate.recurrent_weights.values @ y_prev
            c = np.tanh(p.candidate_weights.values @ x)
            expected = _sigmoid(i_pre) * c
            if y_prev is not None:
                expected = expected + _sigmoid(f_pre) * np.tanh(y_prev)
            np.testing.assert_allclose(y, expected, rtol=0, atol=1e-12)
            y_prev = y

    def test_delta_rnn(self):
        network = _single_layer_network(LayerConnection.DELTA_RNN)
        p = network.model[0]
        alpha, beta1, beta2 = p.alpha.values, p.beta1.values, p.beta2.values
        bc, bp = p.feedforward_unit.biases.values, p.recurrent_unit.biases.values

        y_prev = None
        for x, y in zip(_sequence(), _run(network)):
            wx = p.feedforward_unit.weights.values @ x
            if y_prev is not None:
                wy = p.recurrent_unit.weights.values @ y_prev
                c = np.tanh(beta1 * wx + beta2 * wy + alpha * wx * wy + bc)
            else:
                c = np.tanh(beta1 * wx + bc)
            part = _sigmoid(wx + bp)
            expected = part * c
            if y_prev is not None:
                expected = expected + (1.0 - part) * y_prev
            np.testing.assert_allclose(y, expected, rtol=0, atol=1e-12)
            y_prev = y

    def test_delta_rnn_activates_the_candidate_only(self):
        network = _single_layer_network(LayerConnection.DELTA_RNN, "relu")
        p = network.model[0]
        alpha, beta1, beta2 = p.alpha.values, p.beta1.values, p.beta2.values
        bc, bp = p.feedforward_unit.biases.values, p.recurrent_unit.biases.values

        y_prev = None
        for x, y in zip(_sequence(), _run(network)):
            wx = p.feedforward_unit.weights.values @ x
            if y_prev is not None:
                wy = p.recurrent_unit.weights.values @ y_prev
                c = np.maximum(beta1 * wx + beta2 * wy + alpha * wx * wy + bc, 0.0)
            else:
                c = np.maximum(beta1 * wx + bc, 0.0)
            part = _sigmoid(wx + bp)
            expected = part * c
            if y_prev is not None:
                expected = expected + (1.0 - part) * y_prev
            np.testing.assert_allclose(y, expected, rtol=0, atol=1e-12)
            y_prev = y


if __name__ == "__main__":
    unittest.main()
