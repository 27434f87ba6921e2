import unittest
import numpy as np

from seqdnn import (
    ItemsPool,
    LayerConfiguration,
    LayerConnection,
    NeuralNetwork,
    ProcessorState,
    RecurrentNeuralProcessorsPool,
)


class _Item:
    def __init__(self, item_id: int) -> None:
        self.id = item_id
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1


class TestItemsPool(unittest.TestCase):
    def test_items_are_built_lazily_with_increasing_ids(self):
        pool = ItemsPool(_Item)
        self.assertEqual(pool.size, 0)

        a = pool.get_item()
        b = pool.get_item()
        self.assertEqual((a.id, b.id), (0, 1))
        self.assertEqual(pool.size, 2)
        self.assertEqual(pool.in_use, 2)

    def test_released_items_are_reset_and_reused(self):
        pool = ItemsPool(_Item)
        a = pool.get_item()
        pool.get_item()

        pool.release_item(a)
        self.assertEqual(a.resets, 1)
        self.assertEqual(pool.in_use, 1)

        again = pool.get_item()
        self.assertIs(again, a)
        self.assertEqual(pool.size, 2)

    def test_lowest_free_id_is_reused_first(self):
        pool = ItemsPool(_Item)
        items = [pool.get_item() for _ in range(4)]
        pool.release_item(items[3])
        pool.release_item(items[1])

        self.assertIs(pool.get_item(), items[1])
        self.assertIs(pool.get_item(), items[3])
        self.assertEqual(pool.get_item().id, 4)

    def test_release_all_resets_checked_out_items_only(self):
        pool = ItemsPool(_Item)
        items = [pool.get_item() for _ in range(3)]
        pool.release_item(items[0])

        pool.release_all()
        self.assertEqual([item.resets for item in items], [1, 1, 1])
        self.assertEqual(pool.in_use, 0)
        self.assertEqual(pool.size, 3)
        self.assertIs(pool.get_item(), items[0])

    def test_release_errors(self):
        pool = ItemsPool(_Item)
        item = pool.get_item()
        pool.release_item(item)

        with self.assertRaises(ValueError):
            pool.release_item(item)
        with self.assertRaises(ValueError):
            pool.release_item(_Item(0))


class TestRecurrentNeuralProcessorsPool(unittest.TestCase):
    def setUp(self):
        self.network = NeuralNetwork(
            [
                LayerConfiguration(size=2),
                LayerConfiguration(
                    size=3,
                    activation_function="tanh",
                    connection_type=LayerConnection.GRU,
                ),
            ]
        ).initialize(seed=0)

    def test_processors_share_the_network(self):
        pool = RecurrentNeuralProcessorsPool(self.network)
        p0 = pool.get_item()
        p1 = pool.get_item()

        self.assertEqual((p0.id, p1.id), (0, 1))
        self.assertIs(p0.network, self.network)
        self.assertIs(p1.network.model, p0.network.model)

    def test_released_processor_is_idle(self):
        pool = RecurrentNeuralProcessorsPool(self.network)
        processor = pool.get_item()
        processor.forward([np.array([0.1, 0.2]), np.array([0.3, -0.4])])

        pool.release_item(processor)
        self.assertIs(processor.state, ProcessorState.IDLE)
        self.assertEqual(processor.sequence_length, 0)
        self.assertIs(pool.get_item(), processor)


if __name__ == "__main__":
    unittest.main()
