import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.core.tile_graph import TileGraph
from maze_pathfinder.algo.solvers import HEURISTIC_CHOICES

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove entries here to include/exclude them from the race.
# (algorithm, heuristic preset or None)
# ==========================================
ENABLED_SOLVERS = [
    ("dijkstra", None),
    ("astar", "manhattan"),
    ("astar", "chebyshev"),
    ("astar", "octile"),
    ("astar", "euclidean"),
]

def race(tiles: TileGraph, title: str):
    print(f"\n--- {title} ---")
    results = []

    for algo, preset in ENABLED_SOLVERS:
        name = algo if preset is None else f"{algo}/{preset}"
        choice = HEURISTIC_CHOICES[preset or "manhattan"]

        t_start = time.time()
        result = tiles.find_path(algo, choice)
        duration = time.time() - t_start

        results.append({
            "name": name,
            "time": duration,
            "path": len(result.path) if result.found else 0,
            "cost": result.cost,
            "visited": len(result.visited),
        })

    print(f"{'RANK':<5} | {'ALGORITHM':<20} | {'TIME (s)':<10} | {'PATH':<6} | {'COST':<8} | {'VISITED':<8}")
    print("-" * 70)

    # Sort by Time
    results.sort(key=lambda x: x['time'])
    for i, res in enumerate(results):
        print(f"{i+1:<5} | {res['name'].upper():<20} | {res['time']:<10.4f} | {res['path']:<6} | "
              f"{res['cost']:<8.2f} | {res['visited']:<8}")

def run_benchmark():
    parser = argparse.ArgumentParser(description="Dijkstra vs A* Benchmark")
    parser.add_argument("--width", type=int, default=48, help="Grid Width")
    parser.add_argument("--height", type=int, default=48, help="Grid Height")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    print(f"=== PATHFINDER BENCHMARK ===")
    print(f"Size: {args.width}x{args.height}")

    # Note: Manhattan overestimates on 8-way fields, so its cost may exceed Dijkstra's there
    field = TileGraph(args.width, args.height, diagonal=True)
    race(field, "Open field (8-way)")

    maze = TileGraph(args.width, args.height)
    t0 = time.time()
    maze.generate_maze(seed=args.seed)
    print(f"\nMaze generated in {time.time() - t0:.4f}s")
    race(maze, "Maze (4-way)")

if __name__ == "__main__":
    run_benchmark()
