import unittest
import numpy as np

from seqdnn import (
    ADAMMethod,
    AdaGradMethod,
    LayerConfiguration,
    LayerConnection,
    LearningRateMethod,
    NeuralNetwork,
    ParamsOptimizer,
    RecurrentNeuralProcessor,
)
from seqdnn.infrastructure.parameters import FeedforwardLayerParameters


class _RecordingMethod:
    def __init__(self) -> None:
        self.calls = []
        self.epochs = 0
        self.batches = 0
        self.examples = 0

    def update(self, array, errors):
        self.calls.append((array, np.array(errors)))

    def on_new_epoch(self):
        self.epochs += 1

    def on_new_batch(self):
        self.batches += 1

    def on_new_example(self):
        self.examples += 1


def _params(value: float) -> FeedforwardLayerParameters:
    params = FeedforwardLayerParameters(input_size=2, output_size=1)
    params.unit.weights.assign_values(np.full((1, 2), value))
    params.unit.biases.assign_values(np.full((1,), value))
    return params


class TestParamsOptimizer(unittest.TestCase):
    def test_update_applies_the_average(self):
        model = _params(1.0)
        optimizer = ParamsOptimizer(model, LearningRateMethod(learning_rate=0.5))
        optimizer.accumulate(_params(0.2))
        optimizer.accumulate(_params(0.6))
        self.assertEqual(optimizer.accumulated_count, 2)

        optimizer.update()
        np.testing.assert_allclose(model.unit.weights.values, [[0.8, 0.8]])
        np.testing.assert_allclose(model.unit.biases.values, [0.8])
        self.assertEqual(optimizer.accumulated_count, 0)

    def test_update_without_gradients_is_a_no_op(self):
        model = _params(1.0)
        method = _RecordingMethod()
        optimizer = ParamsOptimizer(model, method)
        optimizer.update()
        self.assertEqual(method.calls, [])

    def test_update_pairs_arrays_positionally(self):
        model = _params(0.0)
        method = _RecordingMethod()
        optimizer = ParamsOptimizer(model, method)
        optimizer.accumulate(_params(3.0))
        optimizer.update()

        self.assertEqual([c[0] for c in method.calls], list(model))
        for _, errors in method.calls:
            np.testing.assert_allclose(errors, 3.0)

    def test_scheduling_hooks_are_dispatched(self):
        method = _RecordingMethod()
        optimizer = ParamsOptimizer(_params(0.0), method)
        optimizer.new_epoch()
        optimizer.new_batch()
        optimizer.new_batch()
        optimizer.new_example()
        self.assertEqual((method.epochs, method.batches, method.examples), (1, 2, 1))

    def test_missing_capabilities_are_ignored(self):
        optimizer = ParamsOptimizer(_params(0.0), AdaGradMethod())
        optimizer.new_epoch()
        optimizer.new_batch()
        optimizer.new_example()

    def test_rejects_objects_without_update(self):
        with self.assertRaises(TypeError):
            ParamsOptimizer(_params(0.0), object())


class TestTrainingLoop(unittest.TestCase):
    def test_loss_decreases_on_a_toy_sequence(self):
        network = NeuralNetwork(
            [
                LayerConfiguration(size=2),
                LayerConfiguration(
                    size=4,
                    activation_function="tanh",
                    connection_type=LayerConnection.GRU,
                ),
                LayerConfiguration(
                    size=1,
                    activation_function="tanh",
                    connection_type=LayerConnection.FEEDFORWARD,
                ),
            ]
        ).initialize(seed=1)
        processor = RecurrentNeuralProcessor(network)
        optimizer = ParamsOptimizer(network.model, ADAMMethod(step_size=0.05))

        sequence = [np.array([0.5, -0.2]), np.array([0.1, 0.4]), np.array([-0.3, 0.3])]
        target = np.array([0.5])

        def loss() -> float:
            out = processor.forward(sequence)
            return float(0.5 * np.sum((out - target) ** 2))

        initial = loss()
        for _ in range(30):
            optimizer.new_example()
            out = processor.forward(sequence)
            processor.backward_last(out - target)
            optimizer.accumulate(processor.get_params_errors())
            optimizer.update()

        self.assertLess(loss(), initial)


if __name__ == "__main__":
    unittest.main()
