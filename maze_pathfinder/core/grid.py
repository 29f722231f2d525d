from array import array
from typing import Iterator, Optional, Tuple

class BorderGrid:
    """
    Per-cell border state for maze drawing.
    A set bit means that side of the cell is a closed wall.
    """

    # Bitmask Constants
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    # All borders closed by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    # Direction Helpers
    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # 1 byte per cell
        self.cells = array('B', [self.ALL_WALLS] * (width * height))

    def reset(self, closed: bool = True):
        fill = self.ALL_WALLS if closed else 0
        self.cells = array('B', [fill] * (self.width * self.height))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def _step(self, x: int, y: int, dir_bit: int) -> Tuple[int, int]:
        return x + self.DX[dir_bit], y + self.DY[dir_bit]

    @classmethod
    def direction_between(cls, x1: int, y1: int, x2: int, y2: int) -> Optional[int]:
        """Direction bit leading from (x1, y1) to the adjacent cell (x2, y2), or None."""
        for dir_bit in (cls.NORTH, cls.EAST, cls.SOUTH, cls.WEST):
            if x1 + cls.DX[dir_bit] == x2 and y1 + cls.DY[dir_bit] == y2:
                return dir_bit
        return None

    def carve_path(self, x: int, y: int, dir_bit: int) -> bool:
        """
        Opens the border between (x, y) and its neighbour in 'dir_bit',
        on both sides. Returns False when the neighbour is off the grid.
        """
        nx, ny = self._step(x, y, dir_bit)
        if not self.in_bounds(nx, ny):
            return False

        self.cells[self.get_index(x, y)] &= ~dir_bit
        self.cells[ny * self.width + nx] &= ~self.OPPOSITE[dir_bit]
        return True

    def add_wall(self, x: int, y: int, dir_bit: int):
        self.cells[self.get_index(x, y)] |= dir_bit

        nx, ny = self._step(x, y, dir_bit)
        if self.in_bounds(nx, ny):
            self.cells[ny * self.width + nx] |= self.OPPOSITE[dir_bit]

    def has_wall(self, x: int, y: int, dir_bit: int) -> bool:
        return (self.cells[self.get_index(x, y)] & dir_bit) != 0

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all in-bounds neighbours.
        Ignores walls.
        """
        for dir_bit in (self.NORTH, self.SOUTH, self.EAST, self.WEST):
            nx, ny = self._step(x, y, dir_bit)
            if self.in_bounds(nx, ny):
                yield (nx, ny, dir_bit)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        val = self.cells[self.get_index(x, y)]
        for nx, ny, dir_bit in self.get_neighbors(x, y):
            if not (val & dir_bit):
                yield (nx, ny)

    def open_count(self) -> int:
        """Number of open borders, each shared border counted once."""
        total = 0
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                if x < self.width - 1 and not (val & self.EAST):
                    total += 1
                if y < self.height - 1 and not (val & self.SOUTH):
                    total += 1
        return total
