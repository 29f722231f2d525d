import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional
from maze_pathfinder.core.graph import WeightedDirectedGraph

class Generator(ABC):
    def __init__(self, graph: WeightedDirectedGraph, seed: Optional[int] = None):
        self.graph = graph
        self.seed = seed
        self.rng = random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual graph modifications happen in-place on self.graph.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
