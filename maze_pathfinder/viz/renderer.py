import logging
from typing import Optional, Tuple

import pygame

from maze_pathfinder.algo.solvers import HEURISTIC_CHOICES, HeuristicChoice, SearchResult
from maze_pathfinder.core.graph import Terrain
from maze_pathfinder.core.grid import BorderGrid
from maze_pathfinder.core.tile_graph import TileGraph
from maze_pathfinder.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_SPACE = (211, 211, 211)  # Light gray
    COLOR_WALL = (105, 105, 105)   # Dim gray
    COLOR_SAND = (244, 164, 96)    # Sandy brown
    COLOR_VISITED = (135, 206, 250)# Light sky blue
    COLOR_SOLUTION = (255, 215, 0) # Gold
    COLOR_START = (0, 128, 0)
    COLOR_END = (255, 0, 0)
    COLOR_BORDER = (0, 0, 0)

    TERRAIN_COLORS = {
        Terrain.SPACE: COLOR_SPACE,
        Terrain.WALL: COLOR_WALL,
        Terrain.SAND: COLOR_SAND,
    }

    BRUSH_KEYS = {
        pygame.K_1: Terrain.WALL,
        pygame.K_2: Terrain.SAND,
        pygame.K_3: Terrain.SPACE,
    }

    # Visited cells revealed per frame during playback
    VISITS_PER_FRAME = 4

    def __init__(self, tiles: TileGraph, width=1280, height=720, record=False):
        self.tiles = tiles
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 14.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        # Editing / search state
        self.brush = Terrain.WALL
        self.choices = list(HEURISTIC_CHOICES.values())
        self.choice_index = 0
        self.algorithm: Optional[str] = None
        self.result: Optional[SearchResult] = None
        self.progress = 0
        self.status = "Idle"

        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    @property
    def choice(self) -> HeuristicChoice:
        return self.choices[self.choice_index]

    @property
    def playback_done(self) -> bool:
        return self.result is not None and self.progress >= len(self.result.visited)

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.tiles.width, available_h / self.tiles.height)

        self.offset_x = (self.screen_width - self.tiles.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.tiles.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Pathfinder - {self.tiles.width}x{self.tiles.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def world_to_screen(self, wx, wy):
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy) -> Tuple[int, int]:
        wx = (sx - self.offset_x) / self.cell_size
        wy = (sy - self.offset_y) / self.cell_size
        # floor, so cells left/above the grid map to negatives
        return int(wx // 1), int(wy // 1)

    def clear_result(self):
        self.result = None
        self.progress = 0
        self.status = "Idle"

    def run_search(self, algorithm: str):
        self.algorithm = algorithm
        self.result = self.tiles.find_path(algorithm, self.choice)
        self.progress = 0
        self.status = "Searching"
        logger.info(f"{algorithm} ({self.choice.label}): visited {len(self.result.visited)}, "
                    f"path {len(self.result.path)}, found={self.result.found}")

    def cycle_heuristic(self):
        self.choice_index = (self.choice_index + 1) % len(self.choices)
        logger.debug(f"Heuristic: {self.choice.label}")

    def toggle_recording(self):
        if self.recorder.active:
            self.recorder.stop()
        else:
            self.recorder.start()

    def handle_key(self, key, cell: Optional[Tuple[int, int]] = None):
        if key in self.BRUSH_KEYS:
            self.brush = self.BRUSH_KEYS[key]
        elif key == pygame.K_d:
            self.run_search("dijkstra")
        elif key == pygame.K_a:
            self.run_search("astar")
        elif key == pygame.K_h:
            self.cycle_heuristic()
        elif key == pygame.K_m:
            self.tiles.generate_maze()
            self.clear_result()
            self.status = "Maze"
        elif key == pygame.K_c:
            self.tiles.clear_terrain()
            self.clear_result()
        elif key == pygame.K_g:
            self.tiles.set_diagonal(not self.tiles.diagonal)
            self.clear_result()
        elif key == pygame.K_s and cell is not None:
            if self.tiles.set_start(*cell):
                self.clear_result()
        elif key == pygame.K_e and cell is not None:
            if self.tiles.set_end(*cell):
                self.clear_result()
        elif key == pygame.K_r:
            self.toggle_recording()
        elif key == pygame.K_ESCAPE:
            self.running = False

    def paint(self, cell: Tuple[int, int]):
        vertex = self.tiles.vertex_at(*cell)
        if vertex is None or vertex.terrain == self.brush:
            return
        if self.tiles.set_terrain(cell[0], cell[1], self.brush):
            self.clear_result()

    def handle_input(self):
        hovered = self.screen_to_world(*pygame.mouse.get_pos())

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key, hovered)

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(2.0, min(100.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if event.buttons[2]: # Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

        if pygame.mouse.get_pressed()[0]:
            self.paint(hovered)

    def advance_playback(self):
        if self.result is None or self.playback_done:
            return
        self.progress = min(len(self.result.visited), self.progress + self.VISITS_PER_FRAME)
        if self.playback_done:
            self.status = "Solved" if self.result.found else "No Path"

    def cell_color(self, vertex, revealed, path_cells):
        if vertex is self.tiles.start:
            return self.COLOR_START
        if vertex is self.tiles.end:
            return self.COLOR_END
        if vertex in path_cells:
            return self.COLOR_SOLUTION
        if vertex in revealed and vertex.terrain != Terrain.WALL:
            return self.COLOR_VISITED
        return self.TERRAIN_COLORS[vertex.terrain]

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        tiles = self.tiles

        # Culling: visible cell range only
        start_x = max(0, int(-self.offset_x / self.cell_size))
        start_y = max(0, int(-self.offset_y / self.cell_size))
        end_x = min(tiles.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(tiles.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        revealed = set()
        path_cells = set()
        if self.result is not None:
            revealed = set(self.result.visited[:self.progress])
            if self.playback_done and self.result.found:
                path_cells = set(self.result.path)

        gap = 1 if self.cell_size > 4.0 else 0
        size = int(self.cell_size) + 1

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                vertex = tiles.vertex_map[(x, y)]
                px, py = self.world_to_screen(x, y)
                color = self.cell_color(vertex, revealed, path_cells)
                pygame.draw.rect(self.surface, color, (int(px), int(py), size - gap, size - gap))

        if tiles.is_maze and self.cell_size > 4.0:
            self.draw_borders(start_x, start_y, end_x, end_y, size)

    def draw_borders(self, start_x, start_y, end_x, end_y, size):
        borders = self.tiles.borders
        color = self.COLOR_BORDER
        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                px, py = (int(v) for v in self.world_to_screen(x, y))
                if borders.has_wall(x, y, BorderGrid.SOUTH):
                    pygame.draw.line(self.surface, color, (px, py + size), (px + size, py + size), 2)
                if borders.has_wall(x, y, BorderGrid.EAST):
                    pygame.draw.line(self.surface, color, (px + size, py), (px + size, py + size), 2)
                if y == 0 and borders.has_wall(x, y, BorderGrid.NORTH):
                    pygame.draw.line(self.surface, color, (px, py), (px + size, py), 2)
                if x == 0 and borders.has_wall(x, y, BorderGrid.WEST):
                    pygame.draw.line(self.surface, color, (px, py), (px, py + size), 2)

    def hud_lines(self):
        lines = [
            f"FPS: {int(self.clock.get_fps()) if self.clock else 0}",
            f"Size: {self.tiles.width}x{self.tiles.height} ({'maze' if self.tiles.is_maze else 'field'}, "
            f"{'8' if self.tiles.diagonal else '4'}-way)",
            f"Brush: {self.brush.name.title()}  Heuristic: {self.choice.label}",
            f"Algorithm: {self.algorithm or '-'}  Status: {self.status}",
        ]
        if self.result is not None:
            lines.append(f"Visited: {self.progress}/{len(self.result.visited)}")
            if self.playback_done and self.result.found:
                lines.append(f"Path: {len(self.result.path)} cells, cost {self.result.cost:.2f}")
        if self.recorder.active:
            lines.append("REC")
        return lines

    def draw_hud(self):
        for i, text in enumerate(self.hud_lines()):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.advance_playback()

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
