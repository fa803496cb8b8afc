import os

# headless pygame for host tests; must be set before the display is initialised
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from conway_world import World


def world_from_art(art: str) -> World:
    """Build a world from rows of '#' (alive) and '.' (dead)."""
    rows = [line.strip() for line in art.strip().splitlines()]
    return World.from_cells([[c == "#" for c in row] for row in rows])


def art_of(world: World) -> str:
    return "\n".join("".join("#" if v else "." for v in row) for row in world.cells)


@pytest.fixture
def rng():
    """A fixed-seed generator so random grids are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def temp_log(tmp_path, monkeypatch):
    """Redirects the host log into a per-test temp directory."""
    monkeypatch.setenv("TEMP", str(tmp_path))
    return tmp_path / "conway_life.log"
