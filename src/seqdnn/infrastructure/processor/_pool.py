"""
Object pools.

Concurrent sequences need one processor each. `ItemsPool` hands out items
built lazily by a factory and recycles them: released items are reset and
their ids become available again, lowest first.

Design notes
------------
- Items live in an arena (`list`) indexed by their id; a free list holds the
  ids of the items that are not checked out.
- Pools are not thread-safe. Share a pool between threads only with external
  synchronization.
"""

from __future__ import annotations

import heapq
import logging
from typing import Callable, Generic, List, TypeVar

from ..network._neural_network import NeuralNetwork
from ._recurrent_processor import RecurrentNeuralProcessor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemsPool(Generic[T]):
    """
    A pool of reusable items.

    Parameters
    ----------
    item_factory : Callable[[int], T]
        Builds a new item given its id. Items must satisfy `IPoolItem`:
        expose that `id` and `reset()`.
    """

    def __init__(self, item_factory: Callable[[int], T]) -> None:
        self._item_factory = item_factory
        self._items: List[T] = []
        self._free: List[int] = []

    @property
    def size(self) -> int:
        """Number of items ever built."""
        return len(self._items)

    @property
    def in_use(self) -> int:
        return len(self._items) - len(self._free)

    def get_item(self) -> T:
        """
        Return an available item, building a new one when none is free.
        """
        if self._free:
            return self._items[heapq.heappop(self._free)]

        item = self._item_factory(len(self._items))
        self._items.append(item)
        logger.debug("%s grew to %d items", type(self).__name__, len(self._items))
        return item

    def release_item(self, item: T) -> None:
        """Reset `item` and make it available again."""
        item_id = item.id
        if not (0 <= item_id < len(self._items)) or self._items[item_id] is not item:
            raise ValueError("Item does not belong to this pool.")
        if item_id in self._free:
            raise ValueError(f"Item {item_id} is not checked out.")
        item.reset()
        heapq.heappush(self._free, item_id)

    def release_all(self) -> None:
        """Reset every checked-out item and make all items available."""
        free = set(self._free)
        for item_id, item in enumerate(self._items):
            if item_id not in free:
                item.reset()
        self._free = list(range(len(self._items)))


class RecurrentNeuralProcessorsPool(ItemsPool[RecurrentNeuralProcessor]):
    """
    A pool of `RecurrentNeuralProcessor`s of the same network.

    Processors get stable ids equal to their position in the pool.
    """

    def __init__(self, network: NeuralNetwork) -> None:
        self.network = network
        super().__init__(self._build_processor)

    def _build_processor(self, processor_id: int) -> RecurrentNeuralProcessor:
        return RecurrentNeuralProcessor(self.network, processor_id=processor_id)
