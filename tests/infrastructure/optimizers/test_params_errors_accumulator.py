import unittest
import numpy as np

from seqdnn import (
    EmptyAccumulatorError,
    LayerConfiguration,
    LayerConnection,
    NeuralNetwork,
    ParamsErrorsAccumulator,
    RecurrentNeuralProcessor,
    ShapeMismatchError,
)
from seqdnn.infrastructure.parameters import FeedforwardLayerParameters


def _params(weights, biases) -> FeedforwardLayerParameters:
    params = FeedforwardLayerParameters(input_size=2, output_size=2)
    params.unit.weights.assign_values(np.asarray(weights, dtype=np.float64))
    params.unit.biases.assign_values(np.asarray(biases, dtype=np.float64))
    return params


class TestParamsErrorsAccumulator(unittest.TestCase):
    def test_average_of_accumulated_errors(self):
        acc = ParamsErrorsAccumulator()
        acc.accumulate(_params([[1.0, 2.0], [3.0, 4.0]], [1.0, -1.0]))
        acc.accumulate(_params([[3.0, 0.0], [1.0, 0.0]], [0.0, 1.0]))
        acc.accumulate(_params([[2.0, 1.0], [2.0, 5.0]], [2.0, 3.0]))
        self.assertEqual(acc.count, 3)

        acc.average_errors()
        errors = acc.get_params_errors()
        np.testing.assert_allclose(errors.unit.weights.values, [[2.0, 1.0], [2.0, 3.0]])
        np.testing.assert_allclose(errors.unit.biases.values, [1.0, 1.0])

    def test_average_divides_storage_in_place(self):
        acc = ParamsErrorsAccumulator()
        acc.accumulate(_params([[4.0, 4.0], [4.0, 4.0]], [4.0, 4.0]))
        acc.accumulate(_params([[2.0, 2.0], [2.0, 2.0]], [2.0, 2.0]))
        stored = acc.get_params_errors(copy=False)
        storage = [p.values for p in stored]

        acc.average_errors()

        for before, after in zip(storage, stored):
            self.assertIs(after.values, before)
            np.testing.assert_allclose(after.values, 3.0)

    def test_average_over_a_two_step_lstm_backward(self):
        network = NeuralNetwork(
            [
                LayerConfiguration(size=2),
                LayerConfiguration(
                    size=2,
                    activation_function="tanh",
                    connection_type=LayerConnection.LSTM,
                ),
            ]
        ).initialize(seed=0)
        processor = RecurrentNeuralProcessor(network)
        processor.forward([np.ones(2), np.ones(2)])
        processor.backward([np.ones(2), np.ones(2)])

        errors = processor.get_params_errors()
        self.assertEqual(len(errors), len(network.model))
        for e in errors:
            self.assertTrue(np.all(np.isfinite(e.values)))

    def test_average_is_not_idempotent(self):
        acc = ParamsErrorsAccumulator()
        acc.accumulate(_params([[2.0, 2.0], [2.0, 2.0]], [2.0, 2.0]))
        acc.accumulate(_params([[2.0, 2.0], [2.0, 2.0]], [2.0, 2.0]))

        acc.average_errors()
        acc.average_errors()
        np.testing.assert_allclose(acc.get_params_errors().unit.biases.values, 1.0)

    def test_single_accumulation_is_unchanged_by_average(self):
        acc = ParamsErrorsAccumulator()
        acc.accumulate(_params([[1.0, 2.0], [3.0, 4.0]], [5.0, 6.0]))
        acc.average_errors()
        np.testing.assert_allclose(acc.get_params_errors().unit.biases.values, [5, 6])

    def test_first_accumulation_is_copied(self):
        acc = ParamsErrorsAccumulator()
        source = _params([[1.0, 1.0], [1.0, 1.0]], [1.0, 1.0])
        acc.accumulate(source)
        acc.accumulate(_params([[1.0, 1.0], [1.0, 1.0]], [1.0, 1.0]))

        np.testing.assert_array_equal(source.unit.biases.values, [1.0, 1.0])

    def test_first_accumulation_without_copy_is_adopted(self):
        acc = ParamsErrorsAccumulator()
        source = _params([[1.0, 1.0], [1.0, 1.0]], [1.0, 1.0])
        acc.accumulate(source, copy=False)
        self.assertIs(acc.get_params_errors(copy=False), source)

    def test_empty_accumulator_raises(self):
        acc = ParamsErrorsAccumulator()
        self.assertTrue(acc.is_empty)
        with self.assertRaises(EmptyAccumulatorError):
            acc.average_errors()
        with self.assertRaises(EmptyAccumulatorError):
            acc.get_params_errors()

    def test_reset(self):
        acc = ParamsErrorsAccumulator()
        acc.accumulate(_params([[1.0, 1.0], [1.0, 1.0]], [1.0, 1.0]))
        acc.reset()
        self.assertEqual(acc.count, 0)
        with self.assertRaises(EmptyAccumulatorError):
            acc.average_errors()

    def test_layout_mismatch_raises(self):
        small = NeuralNetwork(
            [
                LayerConfiguration(size=2),
                LayerConfiguration(size=2, connection_type=LayerConnection.GRU),
            ]
        )
        large = NeuralNetwork(
            [
                LayerConfiguration(size=3),
                LayerConfiguration(size=2, connection_type=LayerConnection.GRU),
            ]
        )
        acc = ParamsErrorsAccumulator()
        acc.accumulate(small.parameters_factory())
        with self.assertRaises(ShapeMismatchError):
            acc.accumulate(large.parameters_factory())

    def test_network_parameters_are_accumulated(self):
        network = NeuralNetwork(
            [
                LayerConfiguration(size=2),
                LayerConfiguration(size=3, connection_type=LayerConnection.LSTM),
            ]
        ).initialize(seed=0)
        acc = ParamsErrorsAccumulator()
        acc.accumulate(network.model)
        acc.accumulate(network.model)
        acc.average_errors()

        for mine, model in zip(acc.get_params_errors(), network.model):
            np.testing.assert_allclose(mine.values, model.values)


if __name__ == "__main__":
    unittest.main()
