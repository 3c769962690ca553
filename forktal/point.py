"""
Single-cell state for the escape-time iteration.

A Point carries the quadratic map z -> z² + c for one pixel. It is the
reference model for the grid kernels in compute.py, and what
FractalField hands out when a single cell is inspected.
"""


class Point:
    """
    One pixel's iterated map state.

    Attributes:
        c: Complex constant taken from the pixel's plane coordinate
        z: Current iterate (starts at 0)
        iterations: Number of steps taken before escaping
    """

    LIMIT = 100.0  # |z| above this counts as escaped

    __slots__ = ("c", "z", "iterations")

    def __init__(self, real, imaginary):
        self.c = complex(real, imaginary)
        self.z = 0j
        self.iterations = 0

    def step(self):
        """Apply one z² + c step. Does nothing once escaped."""
        if not self.is_escaped():
            self.z = self.z * self.z + self.c
            self.iterations += 1

    def is_escaped(self):
        return abs(self.z) > self.LIMIT

    def count(self):
        return self.iterations

    def __repr__(self):
        return f"Point(c={self.c!r}, z={self.z!r}, iterations={self.iterations})"
