import unittest
import sys
import os
import random

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.core.heap import MinHeap

class TestMinHeap(unittest.TestCase):
    def assert_heap_invariant(self, heap):
        root = heap.peek()
        for i in range(len(heap)):
            self.assertLessEqual(root, heap.tree[i])

    def test_pop_order(self):
        heap = MinHeap()
        for v in [5, 3, 8, 1, 9, 2, 7]:
            heap.insert(v)

        out = [heap.pop() for _ in range(len(heap))]
        self.assertEqual(out, [1, 2, 3, 5, 7, 8, 9])
        self.assertFalse(heap)

    def test_empty_pop_fails_fast(self):
        heap = MinHeap()
        with self.assertRaises(IndexError):
            heap.pop()
        with self.assertRaises(IndexError):
            heap.peek()

    def test_capacity_doubles(self):
        heap = MinHeap()
        self.assertEqual(heap.capacity, 1)
        capacities = []
        for v in range(5):
            heap.insert(v)
            capacities.append(heap.capacity)
        self.assertEqual(capacities, [1, 2, 4, 4, 8])

    def test_invariant_under_mixed_ops(self):
        rng = random.Random(7)
        heap = MinHeap()
        reference = []
        for _ in range(500):
            if reference and rng.random() < 0.4:
                self.assertEqual(heap.pop(), min(reference))
                reference.remove(min(reference))
            else:
                v = rng.randint(0, 50)
                heap.insert(v)
                reference.append(v)
            if heap:
                self.assert_heap_invariant(heap)
        self.assertEqual(len(heap), len(reference))

    def test_contains(self):
        heap = MinHeap()
        heap.insert((2.0, 4))
        heap.insert((1.0, 3))
        self.assertTrue(heap.contains((2.0, 4)))
        self.assertFalse(heap.contains((2.0, 5)))
        heap.pop()
        # Popped entries are no longer logical members
        self.assertFalse(heap.contains((1.0, 3)))

    def test_equal_children_prefer_left(self):
        heap = MinHeap(key=lambda entry: entry[0])
        heap.insert((0, "root"))
        heap.insert((1, "left"))
        heap.insert((1, "right"))
        heap.insert((5, "deep"))

        self.assertEqual(heap.pop(), (0, "root"))
        # Sifting "deep" down picks the left child on a tie
        self.assertEqual(heap.peek(), (1, "left"))
        self.assertEqual(heap.tree[1], (5, "deep"))
        self.assertEqual(heap.tree[2], (1, "right"))

    def test_key_function(self):
        heap = MinHeap(key=len)
        for word in ["ccc", "a", "bb"]:
            heap.insert(word)
        self.assertEqual([heap.pop(), heap.pop(), heap.pop()], ["a", "bb", "ccc"])

if __name__ == '__main__':
    unittest.main()
