# conway_render.py
import numpy as np

BYTES_PER_CELL = 4  # R, G, B, A

# index 0 = dead, 1 = alive
RGBA_PALETTE = np.array([
    (0x00, 0x00, 0x00, 0x00),
    (0xff, 0xff, 0xff, 0xff),
], dtype=np.uint8)

def pixel_buffer_size(width: int, height: int) -> int:
    return int(width) * int(height) * BYTES_PER_CELL

def new_pixel_buffer(width: int, height: int) -> bytearray:
    return bytearray(pixel_buffer_size(width, height))

def draw(world, pix):
    """
    Write the world's current generation into `pix` as row-major RGBA.

    `pix` must be a writable byte buffer (bytearray or uint8 array) of exactly
    width*height*4 bytes.
    Anything else is a sizing bug in the caller and raises before writing.
    """
    if isinstance(pix, np.ndarray) and pix.dtype != np.uint8:
        raise ValueError(f"pixel buffer must be uint8, got {pix.dtype}")
    want = pixel_buffer_size(world.width, world.height)
    out = np.frombuffer(pix, dtype=np.uint8)
    if out.size != want:
        raise ValueError(f"pixel buffer holds {out.size} bytes, expected {want}")

    idx = world.cells.reshape(-1).view(np.uint8)
    np.take(RGBA_PALETTE, idx, axis=0, out=out.reshape(-1, BYTES_PER_CELL))
    return pix
