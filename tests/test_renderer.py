import unittest
import sys
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

# Ensure import works even if conftest isn't loaded (e.g. running file directly)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

try:
    import pygame
    from maze_pathfinder.viz.renderer import Renderer
    from maze_pathfinder.viz.recorder import VideoRecorder
except ImportError as e:
    pygame = None
    IMPORT_ERROR = e

from maze_pathfinder.core.graph import Terrain
from maze_pathfinder.core.tile_graph import TileGraph

class TestRenderer(unittest.TestCase):
    """Drives the renderer's state machine without opening a window."""

    def setUp(self):
        if pygame is None:
            self.skipTest(f"pygame stack unavailable: {IMPORT_ERROR}")
        self.tiles = TileGraph(10, 8)
        self.renderer = Renderer(self.tiles, width=800, height=600)

    def test_fit_to_screen(self):
        r = self.renderer
        r.fit_to_screen()
        self.assertAlmostEqual(r.cell_size, min(720 / 10, 520 / 8))
        # Grid is centred
        left, top = r.world_to_screen(0, 0)
        right, bottom = r.world_to_screen(10, 8)
        self.assertAlmostEqual(left, 800 - right)
        self.assertAlmostEqual(top, 600 - bottom)

    def test_screen_to_world(self):
        r = self.renderer
        r.cell_size = 10.0
        r.offset_x, r.offset_y = 5.0, 5.0
        self.assertEqual(r.screen_to_world(5, 5), (0, 0))
        self.assertEqual(r.screen_to_world(34, 16), (2, 1))
        self.assertEqual(r.screen_to_world(0, 0), (-1, -1))

    def test_search_playback(self):
        r = self.renderer
        r.handle_key(pygame.K_d)
        self.assertEqual(r.algorithm, "dijkstra")
        self.assertEqual(r.status, "Searching")
        self.assertFalse(r.playback_done)

        for _ in range(len(r.result.visited)):
            r.advance_playback()
        self.assertTrue(r.playback_done)
        self.assertEqual(r.status, "Solved")
        self.assertTrue(any(line.startswith("Path:") for line in r.hud_lines()))

    def test_heuristic_cycle(self):
        r = self.renderer
        labels = [r.choice.label]
        for _ in range(4):
            r.handle_key(pygame.K_h)
            labels.append(r.choice.label)
        self.assertEqual(labels, ["Manhattan", "Chebyshev", "Octile", "Euclidean", "Manhattan"])

    def test_brush_and_paint(self):
        r = self.renderer
        r.handle_key(pygame.K_a)
        r.handle_key(pygame.K_2)
        self.assertEqual(r.brush, Terrain.SAND)

        r.paint((3, 3))
        self.assertEqual(self.tiles.vertex_at(3, 3).terrain, Terrain.SAND)
        self.assertIsNone(r.result)

        # Off-grid and start cells are ignored
        r.paint((-1, 2))
        r.handle_key(pygame.K_1)
        r.paint((0, 0))
        self.assertEqual(self.tiles.start.terrain, Terrain.SPACE)

    def test_endpoints_and_modes(self):
        r = self.renderer
        r.handle_key(pygame.K_s, (4, 4))
        self.assertEqual(self.tiles.start.pos, (4, 4))
        r.handle_key(pygame.K_e, (4, 4))
        self.assertEqual(self.tiles.end.pos, (9, 7))

        r.handle_key(pygame.K_g)
        self.assertFalse(self.tiles.diagonal)

        r.handle_key(pygame.K_m)
        self.assertTrue(self.tiles.is_maze)
        self.assertEqual(r.status, "Maze")

        r.handle_key(pygame.K_ESCAPE)
        self.assertFalse(r.running)

class TestRecorder(unittest.TestCase):
    def setUp(self):
        if pygame is None:
            self.skipTest(f"pygame stack unavailable: {IMPORT_ERROR}")

    def test_frame_conversion(self):
        surface = pygame.Surface((4, 3))
        surface.fill((255, 0, 0))
        frame = VideoRecorder.surface_to_frame(surface)
        self.assertEqual(frame.shape, (3, 4, 3))
        # BGR order
        self.assertEqual(list(frame[0, 0]), [0, 0, 255])

    def test_start_stop(self):
        rec = VideoRecorder()
        self.assertFalse(rec.active)
        rec.start()
        self.assertTrue(rec.active)
        self.assertTrue(rec.output_file.endswith(".mp4"))
        rec.stop()
        self.assertFalse(rec.active)

if __name__ == '__main__':
    unittest.main()
