# conway.py
import sys
import argparse
import os
import tempfile
import time
import numpy as np
import pygame

from conway_world import World
from conway_render import draw, new_pixel_buffer

# =============================================================================
# BUILD FLAGS
# =============================================================================
BUILD_DEBUG = False  # set True to force the debug HUD on

# =============================================================================
# OPTIONAL DEPENDENCIES (debug HUD)
# =============================================================================
try:
    import psutil
    HAS_PSUTIL = True
except Exception:
    HAS_PSUTIL = False

# =============================================================================
# Logging
# =============================================================================
LOG_NAME = "conway_life.log"

def log_path() -> str:
    return os.path.join(os.environ.get("TEMP", tempfile.gettempdir()), LOG_NAME)

def log_to_temp(msg: str):
    try:
        with open(log_path(), "a", encoding="utf-8") as f:
            f.write(time.strftime("%Y-%m-%d %H:%M:%S ") + msg.rstrip() + "\n")
    except OSError:
        pass

# =============================================================================
# CONFIG
# =============================================================================
SCREEN_WIDTH = 320
SCREEN_HEIGHT = 240
INITIAL_LIVE_CELLS = SCREEN_WIDTH * SCREEN_HEIGHT // 10
WINDOW_SCALE = 2
FPS_MAX = 60
WINDOW_TITLE = "~Game of Life~"
COLOR_BG = (0, 0, 0)

def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value

def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value

def build_parser():
    parser = argparse.ArgumentParser(description="Conway's Game of Life on a bounded grid")
    parser.add_argument('--width', type=positive_int, default=SCREEN_WIDTH, help="Grid columns")
    parser.add_argument('--height', type=positive_int, default=SCREEN_HEIGHT, help="Grid rows")
    parser.add_argument('--live', type=non_negative_int, default=None,
                        help="Random activation draws at start (default: width*height/10)")
    parser.add_argument('--scale', type=positive_int, default=WINDOW_SCALE, help="Window pixels per cell")
    parser.add_argument('--fps', type=positive_int, default=FPS_MAX, help="Frames per second")
    parser.add_argument('--seed', type=int, default=None, help="Seed for the initial state")
    parser.add_argument('--frames', type=non_negative_int, default=0,
                        help="Stop after this many frames (0 = until the window closes)")
    parser.add_argument('--debug', action='store_true', help="Enable debug HUD")
    return parser

def parse_config(argv=None):
    args = build_parser().parse_args(argv)
    if args.live is None:
        args.live = args.width * args.height // 10
    if args.seed is None:
        args.seed = time.time_ns()
    args.debug = BUILD_DEBUG or args.debug
    return args

# =============================================================================
# Game
# =============================================================================
class Game:
    """One world, one reusable RGBA buffer, one surface that shares it."""
    def __init__(self, world: World, scale=WINDOW_SCALE):
        self.world = world
        self.scale = int(scale)
        self.pixels = new_pixel_buffer(world.width, world.height)
        self._render_surface = None
        self._scaled_surface = None

    def layout(self, outside_width=None, outside_height=None):
        return self.world.width, self.world.height

    def window_size(self):
        return self.world.width * self.scale, self.world.height * self.scale

    def update(self):
        self.world.update()

    def draw(self, screen):
        draw(self.world, self.pixels)
        if self._render_surface is None:
            self._render_surface = pygame.image.frombuffer(self.pixels, self.layout(), "RGBA")

        screen.fill(COLOR_BG)
        size = screen.get_size()
        if size != self.layout():
            if self._scaled_surface is None or self._scaled_surface.get_size() != size:
                src = self._render_surface
                self._scaled_surface = pygame.Surface(size, src.get_flags(), src)
            pygame.transform.scale(self._render_surface, size, self._scaled_surface)
            screen.blit(self._scaled_surface, (0, 0))
        else:
            screen.blit(self._render_surface, (0, 0))

# =============================================================================
# Debug HUD (optional)
# =============================================================================
class ProcessStats:
    """CPU and resident memory of this process, sampled at most once a second."""
    def __init__(self):
        self.proc = psutil.Process() if HAS_PSUTIL else None
        self.last_poll = 0.0
        self.cpu = 0.0
        self.rss_mb = 0.0
        if self.proc is not None:
            self.proc.cpu_percent(interval=None)

    def poll(self, now):
        if self.proc is None or now - self.last_poll < 1.0:
            return
        self.last_poll = now
        self.cpu = float(self.proc.cpu_percent(interval=None))
        self.rss_mb = self.proc.memory_info().rss / (1024.0 * 1024.0)

class DebugHUD:
    def __init__(self, w, seed, font_name="Consolas", font_size=14):
        self.w = w
        self.seed = seed
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = (255, 220, 0)
        self.stats = ProcessStats()
        self.frames = 0
        self.last_fps_tick = time.time()
        self.frames_per_sec = 0.0

    def note_frame(self):
        self.frames += 1
        now = time.time()
        if now - self.last_fps_tick >= 1.0:
            dt = now - self.last_fps_tick
            self.frames_per_sec = self.frames / dt if dt > 0 else 0.0
            self.frames = 0
            self.last_fps_tick = now

    def lines(self, clock, world: World):
        lines = []
        lines.append("CONWAY DEBUG")
        lines.append(f"FPS(clock) : {clock.get_fps():6.1f}")
        lines.append(f"Frames/s   : {self.frames_per_sec:6.1f}")
        lines.append(f"Generation : {world.generation}")
        lines.append(f"Population : {world.population}")
        lines.append(f"Seed       : {self.seed}")

        if self.stats.proc is not None:
            lines.append(f"CPU %      : {self.stats.cpu:6.1f}")
            lines.append(f"RSS MB     : {self.stats.rss_mb:6.1f}")
        return lines

    def draw(self, screen, clock, world: World):
        self.stats.poll(time.time())

        rendered = [self.font.render(s, True, self.color) for s in self.lines(clock, world)]
        max_w = max(s.get_width() for s in rendered) if rendered else 0
        x0 = self.w - max_w - 8
        y = 6
        for surf in rendered:
            screen.blit(surf, (x0, y))
            y += surf.get_height() + 2

# =============================================================================
# Host loop
# =============================================================================
def set_mode_safe(size, flags=0, want_vsync=True):
    try:
        return pygame.display.set_mode(size, flags, vsync=1 if want_vsync else 0)
    except (TypeError, pygame.error):
        return pygame.display.set_mode(size, flags)

def run_game(game: Game, fps=FPS_MAX, max_frames=0, debug_enabled=False, seed=None):
    """Fixed-step loop: one update and one draw per frame. Returns frames run."""
    screen = set_mode_safe(game.window_size(), pygame.DOUBLEBUF, want_vsync=True)
    pygame.display.set_caption(WINDOW_TITLE)
    clock = pygame.time.Clock()
    hud = DebugHUD(screen.get_width(), seed) if debug_enabled else None

    frames = 0
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
        if not running:
            break

        game.update()
        game.draw(screen)

        if hud is not None:
            hud.note_frame()
            hud.draw(screen, clock, game.world)

        pygame.display.flip()
        clock.tick(fps)

        frames += 1
        if max_frames and frames >= max_frames:
            running = False

    return frames

# =============================================================================
# MAIN
# =============================================================================
def main(argv=None):
    cfg = parse_config(argv)
    log_to_temp(f"start {cfg.width}x{cfg.height} live={cfg.live} seed={cfg.seed} "
                f"scale={cfg.scale} fps={cfg.fps}")

    world = World(cfg.width, cfg.height, cfg.live, rng=np.random.default_rng(cfg.seed))
    game = Game(world, scale=cfg.scale)

    pygame.init()
    try:
        frames = run_game(game, fps=cfg.fps, max_frames=cfg.frames,
                          debug_enabled=cfg.debug, seed=cfg.seed)
    except pygame.error as e:
        msg = f"[HOST FAILURE] {e!r}"
        log_to_temp(msg)
        print(msg, file=sys.stderr)
        return 1
    finally:
        pygame.quit()

    log_to_temp(f"stop after {frames} frames, generation={world.generation} "
                f"population={world.population}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
