import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_pathfinder' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def parse_point(text: str):
    """'x,y' -> (x, y) for argparse."""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected 'x,y', got '{text}'")
    return x, y

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Pathfinder: grid pathfinding and maze generation")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Maze Command
    maze_parser = subparsers.add_parser("maze", help="Generate a random spanning-tree maze")
    maze_parser.add_argument("--width", type=int, default=16, help="Maze Width")
    maze_parser.add_argument("--height", type=int, default=16, help="Maze Height")
    maze_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    maze_parser.add_argument("--no-ascii", action="store_true", help="Do not print the maze")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Find a path between two cells")
    solve_parser.add_argument("--width", type=int, default=16, help="Grid Width")
    solve_parser.add_argument("--height", type=int, default=16, help="Grid Height")
    solve_parser.add_argument("--maze", action="store_true", help="Solve a generated maze instead of an open field")
    solve_parser.add_argument("--seed", type=int, default=None, help="Maze Random Seed")
    solve_parser.add_argument("--algo", type=str, default="dijkstra", choices=["dijkstra", "astar"], help="Search algorithm")
    solve_parser.add_argument("--heuristic", type=str, default="manhattan",
                              choices=["manhattan", "chebyshev", "octile", "euclidean"], help="A* heuristic")
    solve_parser.add_argument("--four-way", action="store_true", help="Only 4-directional movement in open fields")
    solve_parser.add_argument("--wall", type=parse_point, action="append", default=[], help="Wall cell 'x,y' (repeatable)")
    solve_parser.add_argument("--sand", type=parse_point, action="append", default=[], help="Sand cell 'x,y' (repeatable)")
    solve_parser.add_argument("--sand-weight", type=float, default=2, help="Extra cost of entering sand")
    solve_parser.add_argument("--start", type=parse_point, default=None, help="Start cell 'x,y'")
    solve_parser.add_argument("--end", type=parse_point, default=None, help="End cell 'x,y'")
    solve_parser.add_argument("--no-ascii", action="store_true", help="Do not print the grid")

    # Visual Command
    visual_parser = subparsers.add_parser("visual", help="Open the interactive visualiser")
    visual_parser.add_argument("--width", type=int, default=48, help="Grid Width")
    visual_parser.add_argument("--height", type=int, default=48, help="Grid Height")
    visual_parser.add_argument("--maze", action="store_true", help="Start with a generated maze")
    visual_parser.add_argument("--record", action="store_true", help="Record the session to video")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_pathfinder")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "maze":
        from maze_pathfinder.core.tile_graph import TileGraph
        from maze_pathfinder.algo.union_maze import is_spanning_tree

        logger.info(f"Generating {args.width}x{args.height} maze (seed={args.seed})...")
        tiles = TileGraph(args.width, args.height)
        tiles.generate_maze(seed=args.seed)

        passages = len(tiles.graph.edges) // 2
        tree = is_spanning_tree(tiles.graph)
        logger.info(f"Passages: {passages}, spanning tree: {tree}")
        if not args.no_ascii:
            print(tiles.to_ascii())
        return 0 if tree else 1

    elif args.command == "solve":
        from maze_pathfinder.core.tile_graph import TileGraph
        from maze_pathfinder.core.graph import Terrain
        from maze_pathfinder.algo.solvers import HEURISTIC_CHOICES

        tiles = TileGraph(args.width, args.height, sand_weight=args.sand_weight, diagonal=not args.four_way)
        if args.maze:
            logger.info(f"Generating maze (seed={args.seed})...")
            tiles.generate_maze(seed=args.seed)

        if args.start and not tiles.set_start(*args.start):
            parser.error(f"Cannot place start at {args.start}")
        if args.end and not tiles.set_end(*args.end):
            parser.error(f"Cannot place end at {args.end}")

        for terrain, cells in ((Terrain.WALL, args.wall), (Terrain.SAND, args.sand)):
            for x, y in cells:
                if not tiles.set_terrain(x, y, terrain):
                    logger.warning(f"Skipped {terrain.name.lower()} at ({x}, {y})")

        choice = HEURISTIC_CHOICES[args.heuristic]
        label = args.algo.upper() if args.algo == "dijkstra" else f"A* ({choice.label})"
        logger.info(f"Solving with {label} from {tiles.start.pos} to {tiles.end.pos}...")

        result = tiles.find_path(args.algo, choice)
        if result.found:
            logger.info(f"Path: {len(result.path)} cells, cost {result.cost:g}, visited {len(result.visited)}")
        else:
            logger.info(f"No path found (visited {len(result.visited)})")

        if not args.no_ascii:
            print(tiles.to_ascii(result))
        return 0 if result.found else 1

    elif args.command == "visual":
        from maze_pathfinder.core.tile_graph import TileGraph
        from maze_pathfinder.viz.renderer import Renderer

        tiles = TileGraph(args.width, args.height)
        if args.maze:
            tiles.generate_maze()

        logger.info("Opening window... (D = Dijkstra, A = A*, H = heuristic, M = maze, 1/2/3 = brush)")
        renderer = Renderer(tiles, record=args.record)
        renderer.init_window()
        renderer.run_loop()
        return 0

if __name__ == "__main__":
    sys.exit(main())
