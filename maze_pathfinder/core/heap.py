from typing import Any, Callable, List, Optional

class MinHeap:
    """
    Binary min-heap over a growable array.
    Capacity doubles when full, so inserts are amortized O(log n).

    There is no decrease-key: callers re-insert with a new priority and skip
    stale entries when they come out of pop().
    """

    __slots__ = ('tree', 'count', 'key')

    def __init__(self, key: Optional[Callable[[Any], Any]] = None):
        self.tree: List[Any] = [None]
        self.count = 0
        self.key = key

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return self.count > 0

    @property
    def capacity(self) -> int:
        return len(self.tree)

    def _less(self, a, b) -> bool:
        if self.key is None:
            return a < b
        return self.key(a) < self.key(b)

    def _swap(self, i: int, j: int):
        self.tree[i], self.tree[j] = self.tree[j], self.tree[i]

    def insert(self, value):
        if self.count >= len(self.tree):
            # Double backing storage
            self.tree.extend([None] * len(self.tree))

        self.tree[self.count] = value
        self.count += 1
        self._sift_up(self.count - 1)

    def pop(self):
        if self.count == 0:
            raise IndexError("pop from empty heap")

        root = self.tree[0]
        last = self.count - 1
        self.tree[0] = self.tree[last]
        self.tree[last] = None
        self.count -= 1

        if self.count > 1:
            self._sift_down(0)
        return root

    def peek(self):
        if self.count == 0:
            raise IndexError("peek at empty heap")
        return self.tree[0]

    def contains(self, value) -> bool:
        # Linear scan, only used to avoid queuing duplicate entries
        for i in range(self.count):
            if self.tree[i] == value:
                return True
        return False

    def _sift_up(self, index: int):
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(self.tree[index], self.tree[parent]):
                return
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int):
        while True:
            left = index * 2 + 1
            right = left + 1
            if left >= self.count:
                return

            smallest = left
            # Equal children: keep the left one
            if right < self.count and self._less(self.tree[right], self.tree[left]):
                smallest = right

            if not self._less(self.tree[smallest], self.tree[index]):
                return
            self._swap(index, smallest)
            index = smallest
