"""
Colormap definitions for the escape-time display.

Each colormap function returns a numpy array of shape (256, 4) with
RGBA values (uint8). Entry n is the color of an escaped cell whose
escape intensity round(255 * count / global_step) equals n. Cells
that never escaped are always opaque black and do not use the table.

To add a new colormap:
1. Define a create_colormap_xxx() function that returns the color array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


NUM_COLORS = 256  # One entry per possible intensity byte


def _empty():
    colors = np.zeros((NUM_COLORS, 4), dtype=np.uint8)
    colors[:, 3] = 255  # Always opaque
    return colors


def create_colormap_red():
    """
    Red colormap: black -> pure red.

    The intensity goes straight into the red channel, so late escapes
    (count close to the current step) are bright and early ones dark.
    """
    colors = _empty()
    colors[:, 0] = np.arange(NUM_COLORS, dtype=np.uint8)
    return colors


def create_colormap_hot():
    """
    Hot colormap: black -> red -> orange -> yellow -> white.

    Same curve as the red ramp at the low end, then saturates
    through yellow into white for the latest escapes.
    """
    colors = _empty()
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i, 0] = int(min(255, 255 * min(1, t * 2.5)))          # Red
        colors[i, 1] = int(min(255, 255 * max(0, (t - 0.4) * 2.5)))  # Green
        colors[i, 2] = int(min(255, 255 * max(0, (t - 0.7) * 3.3)))  # Blue
    return colors


def create_colormap_ocean():
    """Ocean colormap: deep blue -> cyan -> white."""
    colors = _empty()
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i, 0] = int(min(255, 255 * max(0, (t - 0.5) * 2)))  # Red (late)
        colors[i, 1] = int(min(255, 255 * t))                       # Green
        colors[i, 2] = int(min(255, 50 + 205 * t))                  # Blue (starts high)
    return colors


def create_colormap_grayscale():
    """
    Grayscale colormap: black -> white.

    Good for seeing raw escape structure.
    """
    colors = _empty()
    ramp = np.arange(NUM_COLORS, dtype=np.uint8)
    colors[:, 0] = ramp
    colors[:, 1] = ramp
    colors[:, 2] = ramp
    return colors


# Registry of all available colormaps.
# Keys are display names, values are factory functions.
COLORMAPS = {
    'Red': create_colormap_red,
    'Hot': create_colormap_hot,
    'Ocean': create_colormap_ocean,
    'Grayscale': create_colormap_grayscale,
}


def get_colormap(name):
    """
    Get a colormap by name.

    Args:
        name: Key from COLORMAPS dictionary

    Returns:
        Colormap array (256, 4) of uint8 RGBA values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name]()


def get_default_colormap():
    """Get the default colormap (Red)."""
    return create_colormap_red()


def list_colormap_names():
    """Get list of available colormap names."""
    return list(COLORMAPS.keys())


def validate_colormap(colors):
    """
    Check that an array can be used as a lookup table.

    Returns:
        The colormap as a C-contiguous uint8 array

    Raises:
        ValueError if the shape is not (256, 4)
    """
    colors = np.ascontiguousarray(colors, dtype=np.uint8)
    if colors.shape != (NUM_COLORS, 4):
        raise ValueError(
            f"colormap must have shape ({NUM_COLORS}, 4), got {colors.shape}"
        )
    return colors
