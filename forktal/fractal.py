"""
The fractal field: a grid of escape-time cells over a viewport.

FractalField owns the iteration state for every pixel, maps the grid
onto a rectangle of the complex plane, advances all cells together on
a fixed 20 Hz cadence and paints the result into an RGBA buffer.

Usage:
    field = FractalField(400, 300)
    frame = bytearray(400 * 300 * 4)

    # In your game loop:
    field.shift(dx, dy)
    field.step(dt_seconds)
    field.draw(frame)
"""

import logging
from datetime import timedelta

import numpy as np

from .point import Point
from .colormaps import get_default_colormap, validate_colormap
from .compute import build_plane, advance_points, paint_counts


logger = logging.getLogger(__name__)


class FractalField:
    """
    Grid of Points mapped onto a complex-plane viewport.

    Cells are stored row-major (index = y * width + x) as three
    parallel arrays. Each cell follows the Point rules exactly; use
    point() or indexing to get one as a Point.

    Attributes:
        width, height: Grid dimensions in pixels
        x_range, y_range: (min, max) viewport bounds on each axis
        c, z, iterations: Per-cell state arrays (replaced on rebuild)
        global_step: Number of ticks taken since the last rebuild
    """

    # Default view bounds (frames the classic silhouette)
    DEFAULT_X_RANGE = (-2.25, 0.75)
    DEFAULT_Y_RANGE = (-1.25, 1.75)

    TICK_SECONDS = 0.05  # 20 Hz, independent of frame rate

    def __init__(self, width, height, x_range=None, y_range=None,
                 colormap=None, tick=None):
        """
        Initialize the field and build the grid.

        Args:
            width, height: Grid dimensions in pixels
            x_range: Initial (min, max) real bounds (default -2.25..0.75)
            y_range: Initial (min, max) imaginary bounds (default -1.25..1.75)
            colormap: (256, 4) RGBA lookup table (default Red)
            tick: Tick period in seconds (default 0.05)
        """
        if int(width) != width or int(height) != height or width <= 0 or height <= 0:
            raise ValueError(
                f"grid dimensions must be positive integers, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)

        self.x_range = tuple(float(v) for v in (x_range or self.DEFAULT_X_RANGE))
        self.y_range = tuple(float(v) for v in (y_range or self.DEFAULT_Y_RANGE))
        self._home = (self.x_range, self.y_range)

        if colormap is None:
            colormap = get_default_colormap()
        self.colormap = validate_colormap(colormap)

        tick = self.TICK_SECONDS if tick is None else tick
        self._tick_ns = _to_nanoseconds(tick)
        if self._tick_ns <= 0:
            raise ValueError(f"tick period must be positive, got {tick!r}")

        self.c = None
        self.z = None
        self.iterations = None
        self.global_step = 0
        self._elapsed_ns = 0
        self._rebuild()

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    def _rebuild(self):
        """Recreate every cell from the current viewport."""
        x_min, x_max = self.x_range
        y_min, y_max = self.y_range
        size = self.width * self.height

        self.c = build_plane(self.width, self.height, x_min, x_max, y_min, y_max)
        self.z = np.zeros(size, dtype=np.complex128)
        self.iterations = np.zeros(size, dtype=np.int64)
        self.global_step = 0
        self._elapsed_ns = 0

        logger.debug(
            "Rebuilt %dx%d grid for x=%r y=%r",
            self.width, self.height, self.x_range, self.y_range
        )

    def __len__(self):
        return self.width * self.height

    def __getitem__(self, index):
        return self.point(index)

    def point(self, index):
        """
        Get one cell as a Point.

        The Point is a snapshot; stepping it does not touch the field.

        Args:
            index: Linear index y * width + x (negative counts from the end)
        """
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError(f"cell index {index} out of range for {size} cells")

        c = self.c[index]
        p = Point(c.real, c.imag)
        p.z = complex(self.z[index])
        p.iterations = int(self.iterations[index])
        return p

    def counts(self):
        """Iteration counts as a (height, width) view."""
        return self.iterations.reshape(self.height, self.width)

    def escaped(self):
        """Boolean (height, width) mask of escaped cells."""
        return (np.abs(self.z) > Point.LIMIT).reshape(self.height, self.width)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def scale_width(self):
        return self.x_range[1] - self.x_range[0]

    def scale_height(self):
        return self.y_range[1] - self.y_range[0]

    def zoom(self):
        """
        Zoom in 2x on the middle of the view.

        The new window starts a quarter of the way into the old one on
        each axis and is half as wide and tall.
        """
        new_x = self.x_range[0] + self.scale_width() / 4.0
        new_y = self.y_range[0] + self.scale_height() / 4.0

        mag_x = self.scale_width() / 2.0
        mag_y = self.scale_height() / 2.0

        self.x_range = (new_x, new_x + mag_x)
        self.y_range = (new_y, new_y + mag_y)

        self._rebuild()

    def shift(self, x_offset, y_offset):
        """
        Pan the view by the given plane offsets.

        A (0, 0) shift leaves the grid untouched, so idle frames keep
        their progress.
        """
        if x_offset == 0.0 and y_offset == 0.0:
            return

        self.x_range = (self.x_range[0] + x_offset, self.x_range[1] + x_offset)
        self.y_range = (self.y_range[0] + y_offset, self.y_range[1] + y_offset)

        self._rebuild()

    def reset_view(self):
        """Go back to the window the field was created with."""
        self.x_range, self.y_range = self._home
        self._rebuild()

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    @property
    def accumulated_time(self):
        """Elapsed seconds not yet consumed by a tick."""
        return self._elapsed_ns / 1e9

    def step(self, dt):
        """
        Feed elapsed time and run every tick it completes.

        Time is carried across calls, so a slow frame runs several ticks
        in one go and fast frames may run none.

        Args:
            dt: Elapsed time in seconds, or a datetime.timedelta

        Returns:
            Number of ticks run
        """
        dt_ns = _to_nanoseconds(dt)
        if dt_ns < 0:
            raise ValueError(f"elapsed time cannot be negative, got {dt!r}")

        self._elapsed_ns += dt_ns
        ticks = 0
        while self._elapsed_ns >= self._tick_ns:
            self._elapsed_ns -= self._tick_ns
            advance_points(self.z, self.c, self.iterations, Point.LIMIT)
            self.global_step += 1
            ticks += 1

        if ticks > 1:
            logger.debug("Caught up %d ticks (global step %d)", ticks, self.global_step)
        return ticks

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def draw(self, buffer):
        """
        Paint the grid into an RGBA8 buffer, row-major, top row first.

        Args:
            buffer: Writable bytes-like object of width*height*4 bytes
                    (bytearray, memoryview, uint8 numpy array, ...)
        """
        frame = np.frombuffer(buffer, dtype=np.uint8)
        expected = len(self) * 4
        if frame.size != expected:
            raise ValueError(
                f"buffer holds {frame.size} bytes, expected {expected} "
                f"for a {self.width}x{self.height} RGBA frame"
            )
        if not frame.flags.writeable:
            raise ValueError("buffer is read-only")

        paint_counts(
            self.z, self.iterations, self.global_step, Point.LIMIT,
            self.colormap, frame.reshape(-1, 4)
        )

    def render(self):
        """Paint the grid into a new bytearray and return it."""
        frame = bytearray(len(self) * 4)
        self.draw(frame)
        return frame


def _to_nanoseconds(dt):
    if isinstance(dt, timedelta):
        return (dt.days * 86400 + dt.seconds) * 1_000_000_000 + dt.microseconds * 1000
    return int(round(dt * 1e9))
