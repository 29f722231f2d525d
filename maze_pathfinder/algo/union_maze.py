import logging
from typing import Dict, Iterator, List, Optional, Tuple

from maze_pathfinder.algo.base import Generator
from maze_pathfinder.core.graph import Vertex, WeightedDirectedGraph
from maze_pathfinder.core.grid import BorderGrid
from maze_pathfinder.core.union_find import QuickFind

logger = logging.getLogger(__name__)

# up, left, down, right. Mazes never use diagonals.
OFFSETS = ((0, -1), (-1, 0), (0, 1), (1, 0))

class QuickFindMaze(Generator):
    """
    Random spanning tree by rejection sampling: join a random cell to a random
    neighbour whenever the two are not yet connected, until one set remains.

    Rejections are capped; past the cap the remaining sets are joined with
    randomized Kruskal over the shuffled candidate pairs.
    """

    ATTEMPTS_PER_VERTEX = 64

    def __init__(self, graph: WeightedDirectedGraph, tracker: QuickFind,
                 borders: Optional[BorderGrid] = None, seed: Optional[int] = None,
                 max_attempts: Optional[int] = None):
        super().__init__(graph, seed)
        self.tracker = tracker
        self.borders = borders
        if max_attempts is None:
            max_attempts = self.ATTEMPTS_PER_VERTEX * max(1, len(graph))
        self.max_attempts = max_attempts
        self.used_fallback = False

    def connect(self, p: Vertex, q: Vertex):
        self.graph.add_edge(p, q, 1)
        self.graph.add_edge(q, p, 1)

        if self.borders is not None:
            dir_bit = BorderGrid.direction_between(p.x, p.y, q.x, q.y)
            self.borders.carve_path(p.x, p.y, dir_bit)

        self.step_count += 1

    def run(self) -> Iterator[str]:
        vertices = list(self.graph.vertices)
        by_pos: Dict[Tuple[int, int], Vertex] = {v.pos: v for v in vertices}

        failed = 0
        while self.tracker.set_count > 1:
            if failed >= self.max_attempts:
                logger.warning(f"{failed} rejected joins in a row with {self.tracker.set_count} "
                               f"sets left, finishing with randomized Kruskal")
                yield from self.finish_kruskal(vertices, by_pos)
                break

            p = self.rng.choice(vertices)
            options = [by_pos[(p.x + dx, p.y + dy)] for dx, dy in OFFSETS
                       if (p.x + dx, p.y + dy) in by_pos]
            if not options:
                failed += 1
                continue

            q = self.rng.choice(options)
            if not self.tracker.union(p, q):
                failed += 1
                continue

            failed = 0
            self.connect(p, q)

            if self.step_count % 100 == 0:
                yield f"Sets: {self.tracker.set_count}"

        yield "Done"

    def finish_kruskal(self, vertices: List[Vertex],
                       by_pos: Dict[Tuple[int, int], Vertex]) -> Iterator[str]:
        self.used_fallback = True

        candidates = []
        for p in vertices:
            for dx, dy in ((1, 0), (0, 1)):
                q = by_pos.get((p.x + dx, p.y + dy))
                if q is not None:
                    candidates.append((p, q))
        self.rng.shuffle(candidates)

        for p, q in candidates:
            if self.tracker.set_count == 1:
                break
            if self.tracker.union(p, q):
                self.connect(p, q)

        if self.tracker.set_count > 1:
            raise ValueError(f"Vertices cannot be joined into one maze: "
                             f"{self.tracker.set_count} isolated groups remain")
        yield "Fallback"

def generate_maze(graph: WeightedDirectedGraph, tracker: QuickFind,
                  borders: Optional[BorderGrid] = None, seed: Optional[int] = None,
                  max_attempts: Optional[int] = None) -> None:
    QuickFindMaze(graph, tracker, borders, seed=seed, max_attempts=max_attempts).run_all()

def is_spanning_tree(graph: WeightedDirectedGraph) -> bool:
    """
    True when the edges pair up into n-1 undirected links that join every
    vertex without a cycle.
    """
    vertices = graph.vertices
    if not vertices:
        return False

    edges = graph.edges
    if len(edges) != 2 * (len(vertices) - 1):
        return False

    check = QuickFind(vertices)
    for edge in edges:
        if graph.get_edge(edge.target, edge.source) is None:
            return False
        # Count each undirected link once
        if graph.index_of(edge.source) > graph.index_of(edge.target):
            continue
        if not check.union(edge.source, edge.target):
            return False

    return check.set_count == 1
