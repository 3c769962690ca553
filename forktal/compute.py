"""
Grid computation functions using Numba JIT compilation.

A FractalField keeps its cells as three flat, parallel numpy arrays
(c, z, iterations) instead of a list of Point objects, so that a tick
over a few hundred thousand cells is a single compiled loop. Every
kernel here applies exactly the same per-cell rules as point.Point:

- build_plane: map grid indices onto the complex-plane viewport
- advance_points: one synchronized z² + c step over the whole grid
- paint_counts: escape counts -> RGBA pixels through a colormap
"""

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def build_plane(width, height, x_min, x_max, y_min, y_max):
    """
    Compute the c constant of every cell for the given viewport.

    Both axes are interpolated against the grid *width*, so the
    imaginary axis is stretched whenever width != height.

    Args:
        width, height: Grid dimensions in pixels
        x_min, x_max: Real axis bounds
        y_min, y_max: Imaginary axis bounds

    Returns:
        1D complex128 array of length width*height, row-major
    """
    count = width * height
    plane = np.empty(count, dtype=np.complex128)
    x_span = x_max - x_min
    y_span = y_max - y_min

    for idx in range(count):
        x = idx % width
        y = idx // width
        real = x_min + (x / width) * x_span
        imag = y_min + (y / width) * y_span
        plane[idx] = complex(real, imag)

    return plane


@jit(nopython=True, cache=True)
def advance_points(z, c, iterations, limit):
    """
    Advance every non-escaped cell by one step of z² + c.

    Escaped cells (|z| > limit) keep their z and iteration count.

    Args:
        z: Current iterates (modified in place)
        c: Per-cell constants
        iterations: Per-cell step counts (modified in place)
        limit: Escape magnitude
    """
    for i in range(z.shape[0]):
        zi = z[i]
        if abs(zi) > limit:
            continue
        z[i] = zi * zi + c[i]
        iterations[i] += 1


@jit(nopython=True, cache=True)
def paint_counts(z, iterations, global_step, limit, colormap, out):
    """
    Write one RGBA pixel per cell.

    Escaped cells are colored by how far their frozen count got
    relative to the number of ticks taken so far:
    index = round(255 * count / global_step). Cells still inside
    the limit are opaque black.

    With global_step == 0 no cell can have escaped yet; the index
    falls back to 0 instead of dividing by zero.

    Args:
        z: Current iterates
        iterations: Per-cell step counts
        global_step: Number of ticks the grid has taken
        limit: Escape magnitude
        colormap: (256, 4) uint8 RGBA lookup table
        out: (n, 4) uint8 pixel array (modified in place)
    """
    for i in range(z.shape[0]):
        if abs(z[i]) > limit:
            if global_step > 0:
                idx = int(255.0 * iterations[i] / global_step + 0.5)
                if idx > 255:
                    idx = 255
            else:
                idx = 0
            out[i, 0] = colormap[idx, 0]
            out[i, 1] = colormap[idx, 1]
            out[i, 2] = colormap[idx, 2]
            out[i, 3] = colormap[idx, 3]
        else:
            out[i, 0] = 0
            out[i, 1] = 0
            out[i, 2] = 0
            out[i, 3] = 255


def warmup_jit(colormap):
    """
    Warm up JIT compilation with a tiny grid.

    Call this once at startup so the first frame does not stall
    while Numba compiles.

    Args:
        colormap: A colormap array to use for warming up paint_counts
    """
    c = build_plane(2, 2, -2.0, 1.0, -1.0, 1.0)
    z = np.zeros(4, dtype=np.complex128)
    iterations = np.zeros(4, dtype=np.int64)
    advance_points(z, c, iterations, 100.0)
    out = np.zeros((4, 4), dtype=np.uint8)
    paint_counts(z, iterations, 1, 100.0, colormap, out)
