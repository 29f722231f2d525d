import logging
import math
from abc import ABC, abstractmethod
from array import array
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from maze_pathfinder.core.graph import Vertex, WeightedDirectedGraph
from maze_pathfinder.core.heap import MinHeap

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2)

class Heuristic(Enum):
    MANHATTAN = "manhattan"
    DIAGONAL = "diagonal"
    EUCLIDEAN = "euclidean"

def manhattan(dx: int, dy: int, d: float, d2: float) -> float:
    # Only admissible for 4-directional movement
    return d * (dx + dy)

def diagonal(dx: int, dy: int, d: float, d2: float) -> float:
    # d2 == d gives Chebyshev, d2 == d * sqrt(2) gives octile
    return d * (dx + dy) + (d2 - 2 * d) * min(dx, dy)

def euclidean(dx: int, dy: int, d: float, d2: float) -> float:
    return d * math.sqrt(dx * dx + dy * dy)

HEURISTIC_FUNCS: Dict[Heuristic, Callable[[int, int, float, float], float]] = {
    Heuristic.MANHATTAN: manhattan,
    Heuristic.DIAGONAL: diagonal,
    Heuristic.EUCLIDEAN: euclidean,
}

def estimate(heuristic: Heuristic, node: Vertex, end: Vertex, d: float, d2: float) -> float:
    dx = abs(node.x - end.x)
    dy = abs(node.y - end.y)
    return HEURISTIC_FUNCS[heuristic](dx, dy, d, d2)

@dataclass(frozen=True)
class HeuristicChoice:
    """A heuristic tag paired with the ordinal distance it is meant to run with."""
    label: str
    heuristic: Heuristic
    ordinal_unit: float

MANHATTAN = HeuristicChoice("Manhattan", Heuristic.MANHATTAN, SQRT2)
CHEBYSHEV = HeuristicChoice("Chebyshev", Heuristic.DIAGONAL, 1.0)
OCTILE = HeuristicChoice("Octile", Heuristic.DIAGONAL, SQRT2)
EUCLIDEAN = HeuristicChoice("Euclidean", Heuristic.EUCLIDEAN, SQRT2)

HEURISTIC_CHOICES: Dict[str, HeuristicChoice] = {
    "manhattan": MANHATTAN,
    "chebyshev": CHEBYSHEV,
    "octile": OCTILE,
    "euclidean": EUCLIDEAN,
}

@dataclass
class SearchResult:
    path: List[Vertex] = field(default_factory=list)
    visited: List[Vertex] = field(default_factory=list)
    found: bool = False
    cost: float = math.inf

class SearchState:
    """
    Scratch table for one search, indexed by graph vertex index.
    Built fresh per call so the graph itself is never written to.
    """

    __slots__ = ('distance', 'final', 'parent', 'visited')

    def __init__(self, size: int):
        self.distance = array('d', [math.inf] * size)
        self.final = array('d', [math.inf] * size)
        # -1 = no predecessor
        self.parent = array('l', [-1] * size)
        self.visited = bytearray(size)

def path_cost(graph: WeightedDirectedGraph, path: Sequence[Vertex]) -> float:
    """Total cost of walking 'path' edge by edge, terrain modifiers included."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        edge = graph.get_edge(a, b)
        if edge is None or not graph.is_passable(b.terrain):
            return math.inf
        total += edge.weight + graph.terrain_modifier(b.terrain)
    return total

class Solver(ABC):
    def __init__(self, graph: WeightedDirectedGraph):
        self.graph = graph
        self.path: List[Vertex] = []
        self.visited_order: List[Vertex] = []
        self.state: Optional[SearchState] = None
        self.found = False
        self.cost = math.inf

    @property
    def visited_count(self) -> int:
        return len(self.visited_order)

    @abstractmethod
    def run(self, start: Optional[Vertex], end: Optional[Vertex]) -> Iterator[str]:
        pass

    def solve(self, start: Optional[Vertex], end: Optional[Vertex]) -> SearchResult:
        """Runs the search to completion."""
        for _ in self.run(start, end):
            pass
        return self.result()

    def result(self) -> SearchResult:
        return SearchResult(list(self.path), list(self.visited_order), self.found, self.cost)

class AStar(Solver):
    def __init__(self, graph: WeightedDirectedGraph, heuristic: Heuristic = Heuristic.MANHATTAN,
                 cardinal_unit: float = 1.0, ordinal_unit: float = SQRT2):
        super().__init__(graph)
        self.heuristic = heuristic
        self.cardinal_unit = cardinal_unit
        self.ordinal_unit = ordinal_unit

    def estimate(self, node: Vertex, end: Vertex) -> float:
        return estimate(self.heuristic, node, end, self.cardinal_unit, self.ordinal_unit)

    def run(self, start: Optional[Vertex], end: Optional[Vertex]) -> Iterator[str]:
        self.path = []
        self.visited_order = []
        self.found = False
        self.cost = math.inf

        if start is None or end is None:
            yield "No Path"
            return

        graph = self.graph
        vertices = graph.vertices
        state = SearchState(len(vertices))
        self.state = state

        start_idx = graph.index_of(start)
        end_idx = graph.index_of(end)

        state.distance[start_idx] = 0
        state.final[start_idx] = self.estimate(start, end)

        # Entries are (priority, vertex index); duplicates with stale priorities are allowed
        queue = MinHeap()
        queue.insert((state.final[start_idx], start_idx))

        while not state.visited[end_idx] and queue:
            priority, idx = queue.pop()
            if state.visited[idx] or priority > state.final[idx]:
                continue

            state.visited[idx] = 1
            current = vertices[idx]
            self.visited_order.append(current)
            current_dist = state.distance[idx]

            for edge in current.edges:
                target = edge.target
                if not graph.is_passable(target.terrain):
                    continue

                t_idx = graph.index_of(target)
                tentative = current_dist + edge.weight + graph.terrain_modifier(target.terrain)

                if tentative < state.distance[t_idx]:
                    state.distance[t_idx] = tentative
                    state.final[t_idx] = tentative + self.estimate(target, end)
                    state.parent[t_idx] = idx
                    # Improvement re-opens a finalized vertex
                    state.visited[t_idx] = 0

                if not state.visited[t_idx]:
                    entry = (state.final[t_idx], t_idx)
                    if not queue.contains(entry):
                        queue.insert(entry)

            if len(self.visited_order) % 100 == 0:
                yield f"Visited: {len(self.visited_order)}"

        self.reconstruct_path(start_idx, end_idx)
        logger.debug(f"{type(self).__name__}: visited {self.visited_count}, "
                     f"path {len(self.path)}, cost {self.cost}")
        yield "Solved" if self.found else "No Path"

    def reconstruct_path(self, start_idx: int, end_idx: int):
        vertices = self.graph.vertices
        state = self.state

        if state.distance[end_idx] == math.inf:
            # Unreachable: keep the single-start shape, flagged as not found
            self.path = [vertices[start_idx]]
            return

        path = []
        curr = end_idx
        while curr != start_idx:
            path.append(vertices[curr])
            curr = state.parent[curr]
            if curr == -1 or len(path) > len(vertices):
                self.path = [vertices[start_idx]]
                return

        path.append(vertices[start_idx])
        path.reverse()

        self.path = path
        self.found = True
        self.cost = state.distance[end_idx]

class Dijkstra(AStar):
    """ Uniform-cost search is A* with h(n) = 0. """
    def estimate(self, node: Vertex, end: Vertex) -> float:
        return 0

def run_uniform_cost_search(graph: WeightedDirectedGraph, start: Optional[Vertex],
                            end: Optional[Vertex]) -> SearchResult:
    return Dijkstra(graph).solve(start, end)

def run_heuristic_search(graph: WeightedDirectedGraph, start: Optional[Vertex], end: Optional[Vertex],
                         cardinal_unit: float, ordinal_unit: float,
                         heuristic: Heuristic) -> SearchResult:
    return AStar(graph, heuristic, cardinal_unit, ordinal_unit).solve(start, end)
