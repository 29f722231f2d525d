from array import array
from typing import Dict, Hashable, Iterable

class QuickFind:
    """
    Quick-Find disjoint sets: find() is O(1), union() rescans every element.
    The maze generator does O(n) unions in total, so the O(n) merge is fine.
    """

    __slots__ = ('set_ids', 'index', 'set_count')

    def __init__(self, items: Iterable[Hashable]):
        self.index: Dict[Hashable, int] = {}
        for item in items:
            if item not in self.index:
                self.index[item] = len(self.index)

        # Every element starts in its own set, id == element index
        self.set_ids = array('l', range(len(self.index)))
        self.set_count = len(self.index)

    def __len__(self) -> int:
        return len(self.set_ids)

    def find(self, p) -> int:
        return self.set_ids[self.index[p]]

    def connected(self, p, q) -> bool:
        return self.find(p) == self.find(q)

    def union(self, p, q) -> bool:
        p_id = self.find(p)
        q_id = self.find(q)
        if p_id == q_id:
            return False

        ids = self.set_ids
        for i in range(len(ids)):
            if ids[i] == q_id:
                ids[i] = p_id

        self.set_count -= 1
        return True
