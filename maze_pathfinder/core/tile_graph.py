import logging
import math
from typing import Dict, Optional, Tuple

from maze_pathfinder.algo.solvers import (
    MANHATTAN, HeuristicChoice, SearchResult, run_heuristic_search, run_uniform_cost_search
)
from maze_pathfinder.algo.union_maze import generate_maze
from maze_pathfinder.core.graph import Terrain, Vertex, WeightedDirectedGraph
from maze_pathfinder.core.grid import BorderGrid
from maze_pathfinder.core.union_find import QuickFind

logger = logging.getLogger(__name__)

class TileGraph:
    """
    A W x H grid of cells backed by a WeightedDirectedGraph.

    Open-field mode links every cell to its 4 (or 8) neighbours. Maze mode
    starts from an edge-less graph and lets the union-find generator carve a
    spanning tree, recording the opened borders in a BorderGrid.
    """

    # Defaults
    GRAPH_SIZE = 48
    SAND_WEIGHT = 2
    CARDINAL_DISTANCE = 1.0
    ORDINAL_DISTANCE = math.sqrt(2)

    # up, down, left, right, then the four diagonals
    CARDINAL_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))
    ORDINAL_OFFSETS = ((-1, -1), (1, -1), (-1, 1), (1, 1))

    ALGORITHMS = ("dijkstra", "astar")

    # ASCII rendering
    CHARS = {Terrain.SPACE: ".", Terrain.SAND: "~", Terrain.WALL: "#"}
    CHAR_VISITED = ":"
    CHAR_PATH = "*"

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None,
                 sand_weight: Optional[float] = None, cardinal_unit: Optional[float] = None,
                 ordinal_unit: Optional[float] = None, diagonal: bool = True):
        self.width = width if width is not None else self.GRAPH_SIZE
        self.height = height if height is not None else self.GRAPH_SIZE
        self.sand_weight = sand_weight if sand_weight is not None else self.SAND_WEIGHT
        self.cardinal_unit = cardinal_unit if cardinal_unit is not None else self.CARDINAL_DISTANCE
        self.ordinal_unit = ordinal_unit if ordinal_unit is not None else self.ORDINAL_DISTANCE
        self.diagonal = diagonal

        self.borders = BorderGrid(self.width, self.height)
        self.graph: WeightedDirectedGraph = None
        self.vertex_map: Dict[Tuple[int, int], Vertex] = {}
        self.is_maze = False

        self.rebuild()
        self.start = self.vertex_map[(0, 0)]
        self.end = self.vertex_map[(self.width - 1, self.height - 1)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def vertex_at(self, x: int, y: int) -> Optional[Vertex]:
        return self.vertex_map.get((x, y))

    def _build_vertices(self, terrains: Optional[Dict[Tuple[int, int], Terrain]] = None):
        terrains = terrains or {}
        self.graph = WeightedDirectedGraph(self.sand_weight)
        self.vertex_map = {}

        for y in range(self.height):
            for x in range(self.width):
                vertex = Vertex(x, y, terrains.get((x, y), Terrain.SPACE))
                self.vertex_map[(x, y)] = vertex
                self.graph.add_vertex(vertex)

    def _build_edges(self):
        offsets = self.CARDINAL_OFFSETS
        if self.diagonal:
            offsets = offsets + self.ORDINAL_OFFSETS

        for (x, y), vertex in self.vertex_map.items():
            for i, (dx, dy) in enumerate(offsets):
                neighbor = self.vertex_map.get((x + dx, y + dy))
                if neighbor is None:
                    continue
                weight = self.ordinal_unit if i >= 4 else self.cardinal_unit
                self.graph.add_edge(vertex, neighbor, weight)

    def _restore_endpoints(self, start_pos: Tuple[int, int], end_pos: Tuple[int, int]):
        self.start = self.vertex_map[start_pos]
        self.end = self.vertex_map[end_pos]

    def rebuild(self):
        """Full open-field rebuild. Terrain, start and end survive."""
        endpoints = None
        terrains = None
        if self.graph is not None:
            endpoints = (self.start.pos, self.end.pos)
            terrains = {v.pos: v.terrain for v in self.graph.vertices}

        self._build_vertices(terrains)
        self._build_edges()
        self.borders.reset(closed=False)
        self.is_maze = False

        if endpoints:
            self._restore_endpoints(*endpoints)

        logger.debug(f"Built {self.width}x{self.height} field: {len(self.graph.edges)} edges "
                     f"({'8' if self.diagonal else '4'}-directional)")

    def generate_maze(self, seed: Optional[int] = None):
        """Replaces the graph with a random spanning-tree maze. Clears terrain."""
        endpoints = (self.start.pos, self.end.pos)

        self._build_vertices()
        self.borders.reset(closed=True)
        tracker = QuickFind(self.graph.vertices)
        generate_maze(self.graph, tracker, self.borders, seed=seed)
        self.is_maze = True

        self._restore_endpoints(*endpoints)
        logger.debug(f"Maze ready: {len(self.graph.edges) // 2} passages")

    def set_diagonal(self, diagonal: bool):
        self.diagonal = diagonal
        if not self.is_maze:
            self.rebuild()

    def set_start(self, x: int, y: int) -> bool:
        vertex = self.vertex_at(x, y)
        if vertex is None or vertex is self.end or vertex.terrain == Terrain.WALL:
            return False
        self.start = vertex
        return True

    def set_end(self, x: int, y: int) -> bool:
        vertex = self.vertex_at(x, y)
        if vertex is None or vertex is self.start or vertex.terrain == Terrain.WALL:
            return False
        self.end = vertex
        return True

    def set_terrain(self, x: int, y: int, terrain: Terrain) -> bool:
        # Modifiers are looked up at search time, no rebuild needed
        vertex = self.vertex_at(x, y)
        if vertex is None or vertex is self.start or vertex is self.end:
            return False
        vertex.terrain = terrain
        return True

    def clear_terrain(self):
        for vertex in self.graph.vertices:
            vertex.terrain = Terrain.SPACE

    def find_path(self, algorithm: str = "dijkstra",
                  choice: HeuristicChoice = MANHATTAN) -> SearchResult:
        if algorithm == "dijkstra":
            return run_uniform_cost_search(self.graph, self.start, self.end)
        if algorithm == "astar":
            # Presets assume a unit cardinal step
            ordinal = choice.ordinal_unit * self.cardinal_unit
            return run_heuristic_search(self.graph, self.start, self.end,
                                        self.cardinal_unit, ordinal, choice.heuristic)
        raise ValueError(f"Unknown algorithm '{algorithm}', expected one of {self.ALGORITHMS}")

    def _cell_char(self, vertex: Vertex, path_cells, visited_cells) -> str:
        if vertex is self.start:
            return "S"
        if vertex is self.end:
            return "E"
        if vertex in path_cells:
            return self.CHAR_PATH
        if vertex.terrain == Terrain.SPACE and vertex in visited_cells:
            return self.CHAR_VISITED
        return self.CHARS[vertex.terrain]

    def to_ascii(self, result: Optional[SearchResult] = None) -> str:
        path_cells = set(result.path) if result and result.found else set()
        visited_cells = set(result.visited) if result else set()

        if not self.is_maze:
            rows = []
            for y in range(self.height):
                rows.append("".join(self._cell_char(self.vertex_map[(x, y)], path_cells, visited_cells)
                                    for x in range(self.width)))
            return "\n".join(rows)

        # Maze: draw borders around each cell
        b = self.borders
        lines = []
        for y in range(self.height):
            top = "+"
            mid = ""
            for x in range(self.width):
                top += ("---" if b.has_wall(x, y, BorderGrid.NORTH) else "   ") + "+"
                mid += "|" if b.has_wall(x, y, BorderGrid.WEST) else " "
                mid += " " + self._cell_char(self.vertex_map[(x, y)], path_cells, visited_cells) + " "
            mid += "|" if b.has_wall(self.width - 1, y, BorderGrid.EAST) else " "
            lines.append(top)
            lines.append(mid)
        lines.append("+" + "---+" * self.width)
        return "\n".join(lines)
