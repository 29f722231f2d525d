import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

class Terrain(Enum):
    SPACE = 0
    WALL = 1
    SAND = 2

class Vertex:
    """One grid cell. Owns its outgoing edges; search scratch lives in SearchState."""

    __slots__ = ('x', 'y', 'terrain', 'edges')

    def __init__(self, x: int, y: int, terrain: Terrain = Terrain.SPACE):
        self.x = x
        self.y = y
        self.terrain = terrain
        self.edges: List['Edge'] = []

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self):
        return f"Vertex({self.x}, {self.y}, {self.terrain.name})"

class Edge:
    __slots__ = ('source', 'target', 'weight')

    def __init__(self, source: Vertex, target: Vertex, weight: float):
        self.source = source
        self.target = target
        self.weight = weight

    def __repr__(self):
        return f"Edge({self.source.pos} -> {self.target.pos}, {self.weight})"

class WeightedDirectedGraph:
    """
    Directed graph with per-vertex terrain.

    Constraint violations (duplicate vertex/edge, non-member endpoints) are
    reported by returning False, never raised. Callers must check.
    """

    def __init__(self, sand_weight: float = 2):
        if sand_weight <= 0:
            raise ValueError(f"Sand weight must be positive, got {sand_weight}")

        self._vertices: List[Vertex] = []
        self._index: Dict[Vertex, int] = {}

        # Wall has no entry: it is impassable, not expensive
        self.terrain_modifiers: Dict[Terrain, float] = {
            Terrain.SPACE: 0,
            Terrain.SAND: sand_weight,
        }

    @property
    def sand_weight(self) -> float:
        return self.terrain_modifiers[Terrain.SAND]

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def edges(self) -> List[Edge]:
        return [edge for vertex in self._vertices for edge in vertex.edges]

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex) -> bool:
        return vertex in self._index

    def index_of(self, vertex: Vertex) -> int:
        return self._index[vertex]

    def is_passable(self, terrain: Terrain) -> bool:
        return terrain in self.terrain_modifiers

    def terrain_modifier(self, terrain: Terrain) -> float:
        if terrain not in self.terrain_modifiers:
            raise ValueError(f"{terrain.name} terrain is impassable")
        return self.terrain_modifiers[terrain]

    def add_vertex(self, vertex: Optional[Vertex]) -> bool:
        # Only freshly constructed vertices may join
        if vertex is None or vertex.edges or vertex in self._index:
            return False

        self._index[vertex] = len(self._vertices)
        self._vertices.append(vertex)
        return True

    def remove_vertex(self, vertex: Vertex) -> bool:
        if vertex not in self._index:
            return False

        for other in self._vertices:
            other.edges = [edge for edge in other.edges if edge.target is not vertex]

        self._vertices.remove(vertex)
        self._index = {v: i for i, v in enumerate(self._vertices)}
        return True

    def add_edge(self, a: Vertex, b: Vertex, weight: float) -> bool:
        if a not in self._index or b not in self._index or self.get_edge(a, b) is not None:
            return False

        a.edges.append(Edge(a, b, weight))
        return True

    def remove_edge(self, a: Vertex, b: Vertex) -> bool:
        edge = self.get_edge(a, b)
        if edge is None:
            return False

        a.edges.remove(edge)
        return True

    def get_edge(self, a: Vertex, b: Vertex) -> Optional[Edge]:
        if a not in self._index or b not in self._index:
            return None

        for edge in a.edges:
            if edge.target is b:
                return edge
        return None

    def clear_edges(self):
        for vertex in self._vertices:
            vertex.edges = []
        logger.debug(f"Cleared edges on {len(self._vertices)} vertices")
