"""
Forktal: an incremental Mandelbrot set explorer

Every pixel's escape-time iteration runs live at a fixed 20 Hz, so the
set sharpens on screen while you zoom and pan. Uses Pygame for display
and Numba for JIT-compiled grid computation.

Quick Start:
    from forktal import run
    run()

Or from command line:
    python -m forktal

Package Structure:
    - point.py: Single-cell escape-time state
    - compute.py: JIT-compiled grid kernels
    - colormaps.py: Escape intensity -> RGBA lookup tables
    - fractal.py: FractalField (viewport, ticking, drawing)
    - app.py: Window and event loop

Controls:
    - Space: Zoom in 2x
    - Arrows: Pan
    - R: Reset to default view
    - P: Pause / resume
    - ESC: Quit
"""

from .point import Point
from .fractal import FractalField
from .colormaps import COLORMAPS, get_colormap, list_colormap_names
from .app import run, ForktalApp

__version__ = "1.0.0"
__all__ = [
    "run",
    "ForktalApp",
    "FractalField",
    "Point",
    "COLORMAPS",
    "get_colormap",
    "list_colormap_names",
]
