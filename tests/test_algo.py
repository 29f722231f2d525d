import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.core.graph import Vertex, WeightedDirectedGraph
from maze_pathfinder.core.grid import BorderGrid
from maze_pathfinder.core.union_find import QuickFind
from maze_pathfinder.algo.solvers import run_uniform_cost_search
from maze_pathfinder.algo.union_maze import QuickFindMaze, generate_maze, is_spanning_tree

def empty_graph(w, h):
    graph = WeightedDirectedGraph()
    cells = {}
    for y in range(h):
        for x in range(w):
            cells[(x, y)] = Vertex(x, y)
            graph.add_vertex(cells[(x, y)])
    return graph, cells

def edge_set(graph):
    return sorted((e.source.pos, e.target.pos) for e in graph.edges)

class TestQuickFindMaze(unittest.TestCase):
    def test_spanning_tree(self):
        w, h = 12, 9
        graph, cells = empty_graph(w, h)
        tracker = QuickFind(graph.vertices)
        generate_maze(graph, tracker, seed=42)

        n = w * h
        self.assertEqual(tracker.set_count, 1)
        self.assertEqual(len(graph.edges), 2 * (n - 1))
        self.assertTrue(is_spanning_tree(graph))

        for edge in graph.edges:
            self.assertEqual(edge.weight, 1)
            # Only up/down/left/right passages
            dx = abs(edge.source.x - edge.target.x)
            dy = abs(edge.source.y - edge.target.y)
            self.assertEqual(dx + dy, 1)

    def test_every_cell_reachable(self):
        graph, cells = empty_graph(8, 8)
        generate_maze(graph, QuickFind(graph.vertices), seed=3)

        start = cells[(0, 0)]
        for pos in [(7, 7), (0, 7), (7, 0), (4, 3)]:
            result = run_uniform_cost_search(graph, start, cells[pos])
            self.assertTrue(result.found, f"{pos} unreachable")
            self.assertEqual(result.cost, len(result.path) - 1)

    def test_borders_follow_edges(self):
        w, h = 7, 5
        graph, cells = empty_graph(w, h)
        borders = BorderGrid(w, h)
        generate_maze(graph, QuickFind(graph.vertices), borders, seed=11)

        self.assertEqual(borders.open_count(), w * h - 1)
        for edge in graph.edges:
            s, t = edge.source, edge.target
            dir_bit = BorderGrid.direction_between(s.x, s.y, t.x, t.y)
            self.assertFalse(borders.has_wall(s.x, s.y, dir_bit))

    def test_determinism(self):
        graph1, _ = empty_graph(10, 10)
        generate_maze(graph1, QuickFind(graph1.vertices), seed=12345)

        graph2, _ = empty_graph(10, 10)
        gen = QuickFindMaze(graph2, QuickFind(graph2.vertices), seed=12345)
        for _ in gen.run(): pass

        self.assertEqual(edge_set(graph1), edge_set(graph2))

    def test_status_stream(self):
        graph, _ = empty_graph(15, 15)
        gen = QuickFindMaze(graph, QuickFind(graph.vertices), seed=1)
        statuses = list(gen.run())
        self.assertEqual(statuses[-1], "Done")
        self.assertIn("Sets: 125", statuses)
        self.assertEqual(gen.step_count, 15 * 15 - 1)

    def test_attempt_cap_falls_back(self):
        graph, _ = empty_graph(6, 6)
        gen = QuickFindMaze(graph, QuickFind(graph.vertices), seed=5, max_attempts=0)
        statuses = list(gen.run())

        self.assertTrue(gen.used_fallback)
        self.assertIn("Fallback", statuses)
        self.assertTrue(is_spanning_tree(graph))

    def test_unjoinable_layout(self):
        graph = WeightedDirectedGraph()
        graph.add_vertex(Vertex(0, 0))
        graph.add_vertex(Vertex(5, 5))
        with self.assertRaises(ValueError):
            generate_maze(graph, QuickFind(graph.vertices), seed=1, max_attempts=50)

    def test_single_cell(self):
        graph, _ = empty_graph(1, 1)
        generate_maze(graph, QuickFind(graph.vertices), seed=1)
        self.assertEqual(graph.edges, [])
        self.assertTrue(is_spanning_tree(graph))

class TestSpanningTreeCheck(unittest.TestCase):
    def test_rejects_cycle(self):
        graph, cells = empty_graph(2, 2)
        ring = [(0, 0), (1, 0), (1, 1), (0, 1)]
        for a, b in zip(ring, ring[1:]):
            graph.add_edge(cells[a], cells[b], 1)
            graph.add_edge(cells[b], cells[a], 1)
        self.assertTrue(is_spanning_tree(graph))

        # Closing the ring keeps everything connected but adds a cycle
        graph.add_edge(cells[(0, 1)], cells[(0, 0)], 1)
        graph.add_edge(cells[(0, 0)], cells[(0, 1)], 1)
        self.assertFalse(is_spanning_tree(graph))

    def test_rejects_one_way_link(self):
        graph, cells = empty_graph(3, 1)
        a, b, c = cells[(0, 0)], cells[(1, 0)], cells[(2, 0)]
        graph.add_edge(a, b, 1)
        graph.add_edge(b, a, 1)
        graph.add_edge(b, c, 1)
        graph.add_edge(a, c, 1)
        # Right edge count, but c has no way back
        self.assertFalse(is_spanning_tree(graph))

    def test_empty_graph(self):
        self.assertFalse(is_spanning_tree(WeightedDirectedGraph()))

if __name__ == '__main__':
    unittest.main()
