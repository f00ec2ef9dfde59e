"""
Plasma fractal heightmaps.

This module implements diamond-square (midpoint displacement) generation on
a toroidal grid. Every coordinate wraps modulo the grid dimensions, so a map
tiles seamlessly in both directions and any real coordinate is a valid
sample position.

Generation is split in two phases:
- the coarse lattice is seeded with uniform random values
- the grid is refined at halving step sizes, each new value being the mean
  of its neighbours plus a perturbation that shrinks by ``peak_fall`` per pass

Sampling never writes to the buffer.
"""

import math
from typing import Sequence, Tuple

import numpy as np
import structlog

from ..utils.random import get_prng

logger = structlog.get_logger()


def padded_dimensions(width: int, height: int) -> Tuple[int, int]:
    """
    Derive the power-of-two grid size for a requested map size.

    A single counter doubles while it stays below both requested dimensions;
    after each doubling an axis still larger than the counter becomes twice
    the counter. Axes the loop never reaches fall back to 2.

    Args:
        width: Requested width
        height: Requested height

    Returns:
        Tuple of (side_width, side_height)
    """
    side_width = 0
    side_height = 0
    i = 1
    while i < width and i < height:
        i *= 2
        if i < width:
            side_width = i * 2
        if i < height:
            side_height = i * 2

    return max(side_width, 2), max(side_height, 2)


def plasma(neighbors: Sequence[float], max_delta: float, rng) -> float:
    """Mean of the neighbours displaced by up to +/- max_delta / 2."""
    mean = sum(neighbors) / len(neighbors)
    return mean + (rng.random() - 0.5) * max_delta


class FractalMap:
    """A toroidal grid of height values filled by diamond-square generation."""

    def __init__(self, rng=None):
        """
        Initialize an empty map.

        Args:
            rng: Default random source for ``generate``; any object with a
                 ``random()`` method. Falls back to the global Alea PRNG.
        """
        self.rng = rng
        self.side_width = 0
        self.side_height = 0
        self.values = np.zeros(0, dtype=np.float64)
        self.populated = np.zeros(0, dtype=bool)
        self.generation_count = 0

    @property
    def is_generated(self) -> bool:
        return self.generation_count > 0

    def generate(
        self,
        width: int,
        height: int,
        peak_size: float,
        peak_fall: float,
        rng=None,
    ) -> None:
        """
        Reset the buffer and fill it with a fresh fractal.

        Args:
            width: Requested width, padded up to a power of two
            height: Requested height, padded up to a power of two
            peak_size: Perturbation amplitude at the coarsest pass
            peak_fall: Per-pass decay of the amplitude, normally in (0, 1)
            rng: Random source for this run, overriding the map's default
        """
        rng = rng or self.rng or get_prng()

        self.side_width, self.side_height = padded_dimensions(width, height)
        size = self.side_width * self.side_height
        self.values = np.zeros(size, dtype=np.float64)
        self.populated = np.zeros(size, dtype=bool)

        detail = 1
        while detail * 2 <= min(self.side_width, self.side_height):
            detail *= 2
        detail //= 2

        self.ensure_corner_seeds(max(detail, 1), rng)

        passes = 0
        while detail > 1:
            half = detail // 2
            for x in range(0, self.side_width, detail):
                for y in range(0, self.side_height, detail):
                    self._displace_cell(x, y, detail, half, peak_size, rng)
            detail = half
            peak_size *= peak_fall
            passes += 1

        self.generation_count += 1
        logger.debug(
            "Fractal map generated",
            requested=(width, height),
            side_width=self.side_width,
            side_height=self.side_height,
            passes=passes,
        )

    def _displace_cell(self, x, y, detail, half, peak_size, rng):
        # Corner order around the cell:
        # 0 . 1
        # . c .
        # 3 . 2
        corners = [
            self.get_or_zero(x, y),
            self.get_or_zero(x + detail, y),
            self.get_or_zero(x + detail, y + detail),
            self.get_or_zero(x, y + detail),
        ]
        center = self.put(x + half, y + half, plasma(corners, peak_size, rng))

        self.put(x + half, y, plasma([corners[0], corners[1], center], peak_size, rng))
        self.put(x + detail, y + half, plasma([corners[1], corners[2], center], peak_size, rng))
        self.put(x + half, y + detail, plasma([corners[2], corners[3], center], peak_size, rng))
        self.put(x, y + half, plasma([corners[3], corners[0], center], peak_size, rng))

    def ensure_corner_seeds(self, step: int, rng) -> None:
        """
        Fill every absent lattice point at the given step with a uniform
        random value. Only generation calls this.
        """
        for x in range(0, self.side_width, step):
            for y in range(0, self.side_height, step):
                index = self.index(x, y)
                if not self.populated[index]:
                    self.values[index] = rng.random()
                    self.populated[index] = True

    def index(self, x: float, y: float) -> int:
        """Flat buffer index of a wrapped coordinate, rounding half up."""
        ix = math.floor(x % self.side_width + 0.5) % self.side_width
        iy = math.floor(y % self.side_height + 0.5) % self.side_height
        return ix + iy * self.side_width

    def get_or_zero(self, x: float, y: float) -> float:
        """Stored value at a wrapped coordinate, zero where nothing is stored."""
        if not self.side_width or not self.side_height:
            return 0.0
        return float(self.values[self.index(x, y)])

    def put(self, x: float, y: float, value: float) -> float:
        """Store a value at a wrapped coordinate and return it."""
        index = self.index(x, y)
        self.values[index] = value
        self.populated[index] = True
        return value

    def sample(self, x: float, y: float) -> float:
        return self.get_or_zero(x, y)

    def sample_interpolated(self, x: float, y: float) -> float:
        """Bilinear interpolation between the four surrounding grid points."""
        ix = math.floor(x)
        iy = math.floor(y)
        fx = x - ix
        fy = y - iy

        top_left = self.get_or_zero(ix, iy)
        top_right = self.get_or_zero(ix + 1, iy)
        bottom_left = self.get_or_zero(ix, iy + 1)
        bottom_right = self.get_or_zero(ix + 1, iy + 1)

        top = top_left + (top_right - top_left) * fx
        bottom = bottom_left + (bottom_right - bottom_left) * fx
        return top + (bottom - top) * fy

    def populated_count(self) -> int:
        return int(np.count_nonzero(self.populated))

    def to_array(self) -> np.ndarray:
        """Copy of the grid shaped (side_height, side_width)."""
        return self.values.reshape(self.side_height, self.side_width).copy()

