# conway_world.py
import numpy as np

# =============================================================================
# Neighbourhood
# =============================================================================
MOORE_OFFSETS = [
    (-1, -1), (0, -1), (1, -1),
    (-1,  0),          (1,  0),
    (-1,  1), (0,  1), (1,  1),
]

def _shift_slices(d: int):
    """
    (dst, src) slices so that dst[i] reads src[i + d] along one axis.
    Cells whose neighbour would fall off the edge are left out of dst,
    so the grid never wraps.
    """
    if d < 0:
        return slice(1, None), slice(None, -1)
    if d > 0:
        return slice(None, -1), slice(1, None)
    return slice(None), slice(None)

# =============================================================================
# World
# =============================================================================
class World:
    """
    Bounded Game of Life grid with two cell buffers.

    The buffer named by `_cur` holds the current generation. `update()` writes
    the other buffer purely from the current one and then flips `_cur`, so a
    generation is never computed from itself.
    """
    def __init__(self, width, height, initial_live=0, rng=None):
        width = int(width)
        height = int(height)
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        initial_live = int(initial_live)
        if initial_live < 0:
            raise ValueError(f"initial_live must be >= 0, got {initial_live}")

        self.width = width
        self.height = height
        self.generation = 0

        self._buffers = [
            np.zeros((height, width), dtype=np.bool_),
            np.zeros((height, width), dtype=np.bool_),
        ]
        self._cur = 0
        self._counts = np.zeros((height, width), dtype=np.int8)

        if initial_live:
            self._seed(initial_live, np.random.default_rng() if rng is None else rng)

    @classmethod
    def from_cells(cls, cells):
        grid = np.asarray(cells)
        if grid.ndim != 2:
            raise ValueError(f"cells must be 2-D, got shape {grid.shape}")
        h, w = grid.shape
        world = cls(w, h)
        world._buffers[world._cur][...] = grid.astype(np.bool_)
        return world

    def _seed(self, k: int, rng):
        # duplicate draws land on the same cell, so population <= k
        xs = rng.integers(0, self.width, size=k)
        ys = rng.integers(0, self.height, size=k)
        self._buffers[self._cur][ys, xs] = True

    # -------------------------------------------------------------------------
    # State exposure
    # -------------------------------------------------------------------------
    @property
    def cells(self) -> np.ndarray:
        view = self._buffers[self._cur].view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        return int(np.count_nonzero(self._buffers[self._cur]))

    # -------------------------------------------------------------------------
    # Neighbour counting
    # -------------------------------------------------------------------------
    def neighbour_count(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        g = self._buffers[self._cur]
        count = 0
        for dx, dy in MOORE_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height and g[ny, nx]:
                count += 1
        return count

    def neighbour_counts(self) -> np.ndarray:
        return self._count_into(self._buffers[self._cur], self._counts.copy())

    @staticmethod
    def _count_into(g: np.ndarray, out: np.ndarray) -> np.ndarray:
        out.fill(0)
        for dx, dy in MOORE_OFFSETS:
            dst_y, src_y = _shift_slices(dy)
            dst_x, src_x = _shift_slices(dx)
            out[dst_y, dst_x] += g[src_y, src_x]
        return out

    # -------------------------------------------------------------------------
    # Generation advance
    # -------------------------------------------------------------------------
    def update_from_to(self, grid_in: np.ndarray, grid_out: np.ndarray):
        if np.shares_memory(grid_in, grid_out):
            raise ValueError("grid_out must not overlap grid_in")
        n = self._count_into(grid_in, self._counts)
        np.equal(n, 3, out=grid_out)
        grid_out |= (n == 2) & grid_in

    def update(self):
        nxt = 1 - self._cur
        self.update_from_to(self._buffers[self._cur], self._buffers[nxt])
        self._cur = nxt
        self.generation += 1

    advance = update

    def __repr__(self):
        return (f"World({self.width}x{self.height}, generation={self.generation}, "
                f"population={self.population})")
